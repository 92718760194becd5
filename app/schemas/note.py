from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class NoteCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content_type: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    level: Optional[str] = None
    visible_to_admin: bool = True
    visible_to_moderator: bool = False
    visible_to_mentor: bool = False
    profile_id_mentor: Optional[str] = None
    profile_id_mentee: Optional[str] = None


class NoteOut(NoteCreate):
    note_id: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {
        'from_attributes': True
    }
