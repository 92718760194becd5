from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies import get_note_or_404
from app.models.note import Note
from app.models.profile import Profile
from app.schemas.note import NoteCreate, NoteOut
from app.services import audit, notes
from app.services.auth import get_current_profile

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get("", response_model=list[NoteOut])
def list_notes(
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    return notes.find_all(db)


@router.get("/{note_id}", response_model=NoteOut)
def get_note(
    current_profile: Profile = Depends(get_current_profile),
    note: Note = Depends(get_note_or_404),
):
    return note


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteCreate,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    note = notes.create(db, payload.model_dump())
    audit.log_note_created(current_profile.profile_id, note.note_id, note.profile_id_mentee)
    return note


# Editing and removing notes are not offered yet
@router.put("/{note_id}", status_code=status.HTTP_501_NOT_IMPLEMENTED)
def update_note(note_id: int, current_profile: Profile = Depends(get_current_profile)):
    return JSONResponse(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        content={"status": 501, "message": "put by note_id not ready"},
    )


@router.delete("/{note_id}", status_code=status.HTTP_501_NOT_IMPLEMENTED)
def delete_note(note_id: int, current_profile: Profile = Depends(get_current_profile)):
    return JSONResponse(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        content={"status": 501, "message": "delete by note_id not ready"},
    )
