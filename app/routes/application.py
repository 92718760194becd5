from fastapi import APIRouter, status

from app.schemas.application import ApplicationReceived, MenteeApplication
from app.services import audit

router = APIRouter(prefix="/application", tags=["Application"])


@router.post("/new/mentee", response_model=ApplicationReceived, status_code=status.HTTP_201_CREATED)
def submit_mentee_application(payload: MenteeApplication):
    """Validate a mentee application and echo back the normalized form."""
    audit.log_application_received(payload.email, payload.country)
    return {"message": "application received", "application": payload}
