"""Data access for mentor/mentee assignments.

Lookups by one side of a pairing join the profiles table so callers get the
other side's display fields without a second round trip.
"""
from collections import defaultdict
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session, aliased

from app.models.assignment import Assignment
from app.models.profile import Profile, ProfileRole


def find_all(db: Session) -> list[dict]:
    """Every mentee profile with the mentors assigned to it."""
    mentees = (
        db.query(Profile)
        .filter(Profile.role == ProfileRole.mentee)
        .order_by(Profile.profile_id)
        .all()
    )
    mentor = aliased(Profile)
    pairs = (
        db.query(Assignment.mentee_id, mentor.profile_id, mentor.first_name, mentor.last_name)
        .join(mentor, mentor.profile_id == Assignment.mentor_id)
        .order_by(Assignment.assignment_id)
        .all()
    )
    mentors_by_mentee: dict[str, list[dict]] = defaultdict(list)
    for mentee_id, mentor_id, first_name, last_name in pairs:
        mentors_by_mentee[mentee_id].append(
            {"profile_id": mentor_id, "first_name": first_name, "last_name": last_name}
        )
    return [
        {
            "profile_id": m.profile_id,
            "email": m.email,
            "first_name": m.first_name,
            "last_name": m.last_name,
            "is_active": m.is_active,
            "pending": m.pending,
            "mentors": mentors_by_mentee.get(m.profile_id, []),
        }
        for m in mentees
    ]


def find_by_id(db: Session, assignment_id: int) -> Optional[Assignment]:
    return db.query(Assignment).filter(Assignment.assignment_id == assignment_id).first()


def _joined(db: Session, own_column, other_column, profile_id: str, other_key: str) -> list[dict]:
    rows = (
        db.query(
            Assignment.assignment_id,
            other_column,
            Profile.email,
            Profile.first_name,
            Profile.last_name,
            Profile.role,
            Profile.created_at,
            Profile.pending,
        )
        .join(Profile, Profile.profile_id == other_column)
        .filter(own_column == profile_id)
        .order_by(Assignment.assignment_id)
        .all()
    )
    return [
        {
            "assignment_id": r[0],
            other_key: r[1],
            "email": r[2],
            "first_name": r[3],
            "last_name": r[4],
            "role": r[5],
            "created_at": r[6],
            "pending": r[7],
        }
        for r in rows
    ]


def find_by_mentor_id(db: Session, mentor_id: str) -> list[dict]:
    """Mentees paired with ``mentor_id``."""
    return _joined(db, Assignment.mentor_id, Assignment.mentee_id, mentor_id, "mentee_id")


def find_by_mentee_id(db: Session, mentee_id: str) -> list[dict]:
    """Mentors paired with ``mentee_id``."""
    return _joined(db, Assignment.mentee_id, Assignment.mentor_id, mentee_id, "mentor_id")


def create(db: Session, data: Mapping[str, Any]) -> Assignment:
    assignment = Assignment(**data)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


def update(db: Session, assignment_id: int, changes: Mapping[str, Any]) -> Optional[Assignment]:
    assignment = find_by_id(db, assignment_id)
    if assignment is None:
        return None
    for k, v in changes.items():
        setattr(assignment, k, v)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


def remove(db: Session, assignment_id: int) -> None:
    db.query(Assignment).filter(Assignment.assignment_id == assignment_id).delete()
    db.commit()
