from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.profile import normalize_email


class MenteeApplication(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str
    country: str = Field(..., min_length=1)

    @field_validator('email')
    def validate_email_format(cls, v: str | None):
        return normalize_email(v)


class ApplicationReceived(BaseModel):
    message: str
    application: MenteeApplication
