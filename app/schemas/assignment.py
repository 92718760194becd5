from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional
from datetime import datetime

from app.models.profile import ProfileRole


class AssignmentCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    mentor_id: str
    mentee_id: str

    @model_validator(mode='after')
    def distinct_sides(self):
        if self.mentor_id == self.mentee_id:
            raise ValueError('mentor_id and mentee_id must differ')
        return self


class AssignmentUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    mentor_id: Optional[str] = None
    mentee_id: Optional[str] = None

    @model_validator(mode='after')
    def require_a_change(self):
        if self.mentor_id is None and self.mentee_id is None:
            raise ValueError('mentor_id or mentee_id is required')
        return self


class AssignmentOut(BaseModel):
    assignment_id: int
    mentor_id: str
    mentee_id: str
    created_at: Optional[datetime]

    model_config = {
        'from_attributes': True
    }


class AssignmentMessage(BaseModel):
    message: str
    assignment: AssignmentOut


class AssignedProfile(BaseModel):
    """One side of a pairing, joined with the other side's profile."""
    assignment_id: int
    mentor_id: Optional[str] = None
    mentee_id: Optional[str] = None
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    role: ProfileRole
    created_at: Optional[datetime]
    pending: bool


class MentorSummary(BaseModel):
    profile_id: str
    first_name: Optional[str]
    last_name: Optional[str]


class MenteeWithMentors(BaseModel):
    profile_id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    is_active: bool
    pending: bool
    mentors: list[MentorSummary]
