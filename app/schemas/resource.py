from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ResourceIn(BaseModel):
    """Body accepted by resource create and update.

    Both operations require the name, category and condition; the remaining
    fields are merged only when supplied.
    """
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    resource_name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1)
    condition: str = Field(..., min_length=1)
    assigned: bool = False
    current_assignee: Optional[str] = None
    previous_assignee: Optional[str] = None
    monetary_value: Optional[str] = None
    deductible_donation: bool = False


class ResourceOut(BaseModel):
    resource_id: int
    resource_name: str
    category: str
    condition: str
    assigned: bool
    current_assignee: Optional[str]
    previous_assignee: Optional[str]
    monetary_value: Optional[str]
    deductible_donation: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {
        'from_attributes': True
    }


class ResourceMessage(BaseModel):
    message: str
    resource: ResourceOut


class MessageOut(BaseModel):
    message: str
