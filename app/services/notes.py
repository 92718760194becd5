"""Data access for mentorship notes."""
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.models.note import Note


def find_all(db: Session) -> list[Note]:
    return db.query(Note).order_by(Note.note_id).all()


def find_by_id(db: Session, note_id: int) -> Optional[Note]:
    return db.query(Note).filter(Note.note_id == note_id).first()


def create(db: Session, data: Mapping[str, Any]) -> Note:
    note = Note(**data)
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def update(db: Session, note_id: int, changes: Mapping[str, Any]) -> Optional[Note]:
    note = find_by_id(db, note_id)
    if note is None:
        return None
    for k, v in changes.items():
        setattr(note, k, v)
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def remove(db: Session, note_id: int) -> None:
    db.query(Note).filter(Note.note_id == note_id).delete()
    db.commit()
