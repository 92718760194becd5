"""Existence checks for path-identified rows.

Each dependency loads the row named by the path parameter, stores it on
``request.state`` and returns it, or stops the request with a 404 naming the
id.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.db import get_db
from app.exceptions import NotFoundException
from app.models.assignment import Assignment
from app.models.note import Note
from app.models.profile import Profile
from app.models.resource import Resource
from app.services import assignments, notes, profiles, resources


def get_resource_or_404(resource_id: int, request: Request, db: Session = Depends(get_db)) -> Resource:
    resource = resources.find_by_id(db, resource_id)
    if resource is None:
        raise NotFoundException(f"Resource #{resource_id} not found")
    request.state.resource = resource
    return resource


def get_profile_or_404(profile_id: str, request: Request, db: Session = Depends(get_db)) -> Profile:
    profile = profiles.find_by_id(db, profile_id)
    if profile is None:
        raise NotFoundException(f"Profile {profile_id} not found")
    request.state.target_profile = profile
    return profile


def get_note_or_404(note_id: int, request: Request, db: Session = Depends(get_db)) -> Note:
    note = notes.find_by_id(db, note_id)
    if note is None:
        raise NotFoundException(f"Note #{note_id} not found")
    request.state.note = note
    return note


def get_assignment_or_404(assignment_id: int, request: Request, db: Session = Depends(get_db)) -> Assignment:
    assignment = assignments.find_by_id(db, assignment_id)
    if assignment is None:
        raise NotFoundException(f"Assignment #{assignment_id} not found")
    request.state.assignment = assignment
    return assignment
