from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies import get_assignment_or_404
from app.exceptions import NotFoundException, ValidationException
from app.models.assignment import Assignment
from app.models.profile import Profile, ProfileRole
from app.schemas.assignment import (
    AssignedProfile,
    AssignmentCreate,
    AssignmentMessage,
    AssignmentOut,
    AssignmentUpdate,
    MenteeWithMentors,
)
from app.schemas.resource import MessageOut
from app.services import assignments, audit, profiles
from app.services.auth import require_admin, require_moderator, require_self_or_role

router = APIRouter(prefix="/assignments", tags=["Assignments"])


def _check_pair(db: Session, mentor_id: str, mentee_id: str, assignment_id: int | None = None) -> None:
    if mentor_id == mentee_id:
        raise ValidationException("mentor_id and mentee_id must differ")
    for key, pid in (("mentor_id", mentor_id), ("mentee_id", mentee_id)):
        if profiles.find_by_id(db, pid) is None:
            raise NotFoundException(f"{key}: profile {pid} not found")
    existing = (
        db.query(Assignment)
        .filter(Assignment.mentor_id == mentor_id, Assignment.mentee_id == mentee_id)
        .first()
    )
    if existing and existing.assignment_id != assignment_id:
        raise ValidationException(f"Assignment of {mentee_id} to {mentor_id} already exists")


@router.get("", response_model=list[MenteeWithMentors])
def list_assignments(
    current_profile: Profile = Depends(require_moderator),
    db: Session = Depends(get_db),
):
    """Every mentee with the mentors currently assigned to them."""
    return assignments.find_all(db)


@router.get("/mentor/{profile_id}", response_model=list[AssignedProfile])
def list_mentees_of_mentor(
    profile_id: str,
    current_profile: Profile = Depends(require_self_or_role(ProfileRole.moderator)),
    db: Session = Depends(get_db),
):
    return assignments.find_by_mentor_id(db, profile_id)


@router.get("/mentee/{profile_id}", response_model=list[AssignedProfile])
def list_mentors_of_mentee(
    profile_id: str,
    current_profile: Profile = Depends(require_self_or_role(ProfileRole.moderator)),
    db: Session = Depends(get_db),
):
    return assignments.find_by_mentee_id(db, profile_id)


@router.get("/{assignment_id}", response_model=AssignmentOut)
def get_assignment(
    current_profile: Profile = Depends(require_moderator),
    assignment: Assignment = Depends(get_assignment_or_404),
):
    return assignment


@router.post("", response_model=AssignmentMessage, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    current_profile: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    _check_pair(db, payload.mentor_id, payload.mentee_id)
    assignment = assignments.create(db, payload.model_dump())
    audit.log_assignment_change(
        current_profile.profile_id, "create", assignment.assignment_id, assignment.mentor_id, assignment.mentee_id
    )
    return {"message": "new assignment created", "assignment": AssignmentOut.model_validate(assignment)}


@router.put("/{assignment_id}", response_model=AssignmentMessage)
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdate,
    current_profile: Profile = Depends(require_admin),
    assignment: Assignment = Depends(get_assignment_or_404),
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_none=True)
    _check_pair(
        db,
        changes.get("mentor_id", assignment.mentor_id),
        changes.get("mentee_id", assignment.mentee_id),
        assignment_id,
    )
    updated = assignments.update(db, assignment_id, changes)
    audit.log_assignment_change(
        current_profile.profile_id, "update", assignment_id, updated.mentor_id, updated.mentee_id
    )
    return {"message": f"Assignment #{assignment_id} updated", "assignment": AssignmentOut.model_validate(updated)}


@router.delete("/{assignment_id}", response_model=MessageOut)
def delete_assignment(
    assignment_id: int,
    current_profile: Profile = Depends(require_admin),
    assignment: Assignment = Depends(get_assignment_or_404),
    db: Session = Depends(get_db),
):
    assignments.remove(db, assignment_id)
    audit.log_assignment_change(current_profile.profile_id, "delete", assignment_id)
    return {"message": f"Assignment #{assignment_id} deleted"}
