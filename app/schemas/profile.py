from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Any, Optional
from datetime import datetime
import re

from app.models.profile import ProfileRole

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def normalize_email(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not re.match(EMAIL_PATTERN, v):
        raise ValueError('Invalid email format')
    return v.lower()


def normalize_avatar_url(v: str | None) -> str | None:
    if v is None or v.strip() == "":
        return None
    if not (v.startswith('http://') or v.startswith('https://')):
        raise ValueError('avatar_url must start with http(s)://')
    return v


class ProfileCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    profile_id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: ProfileRole = ProfileRole.mentee

    @field_validator('profile_id')
    def validate_profile_id(cls, v: str):
        if not v:
            raise ValueError('profile_id must not be empty')
        return v

    @field_validator('email')
    def validate_email_format(cls, v: str | None):
        return normalize_email(v)
    @field_validator('avatar_url')
    def validate_avatar_url(cls, v: str | None):
        return normalize_avatar_url(v)


class ProfileSelfUpdate(BaseModel):
    """Fields a profile owner may change on their own record.

    Anything else in the body (role, is_active, ...) is rejected.
    """
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    @field_validator('email')
    def validate_email_format(cls, v: str | None):
        return normalize_email(v)

    @model_validator(mode='after')
    def require_a_change(self):
        if not self.model_fields_set:
            raise ValueError('Missing or invalid request')
        return self


class ProfileAdminUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[ProfileRole] = None
    is_active: Optional[bool] = None
    pending: Optional[bool] = None

    @field_validator('email')
    def validate_email_format(cls, v: str | None):
        return normalize_email(v)
    @field_validator('avatar_url')
    def validate_avatar_url(cls, v: str | None):
        return normalize_avatar_url(v)

    @model_validator(mode='after')
    def require_a_change(self):
        if not self.model_fields_set:
            raise ValueError('Missing or invalid request')
        for flag in ('role', 'is_active', 'pending'):
            if flag in self.model_fields_set and getattr(self, flag) is None:
                raise ValueError(f'{flag} must not be null')
        return self


class ProfileOut(BaseModel):
    profile_id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    name: str = ""
    avatar_url: Optional[str]
    role: ProfileRole
    is_active: bool
    pending: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {
        'from_attributes': True
    }


class ProfileCreated(BaseModel):
    message: str
    profile: ProfileOut


class ProfileUpdated(BaseModel):
    updated_profile: ProfileOut


class ProfileStatus(BaseModel):
    message: str
    profile: ProfileOut


class MatchesOut(BaseModel):
    matches: list[ProfileOut]


class ParticipantInfo(BaseModel):
    """Summary row returned by the matching service read endpoints."""
    name: str
    city: Optional[str] = None
    state: Optional[str] = None
    availability: Optional[bool] = None


class AvailabilityIn(BaseModel):
    accepting_new_mentees: bool


class AvailabilityOut(BaseModel):
    status: int
    message: Any = None
