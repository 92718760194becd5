"""Audit logging helper functions for key domain events.

Standard JSON-ish single-line logs so they are easy to index.
"""
from __future__ import annotations
import logging
from datetime import datetime, UTC
from typing import Optional, Any

_logger = logging.getLogger("app.audit")


def _emit(event: str, actor_id: Optional[str] = None, **data: Any):
    payload = {"ts": datetime.now(UTC).isoformat(), "event": event}
    if actor_id:
        payload["actor_id"] = actor_id
    payload.update(data)
    parts = [f"{k}={repr(v)}" for k, v in payload.items()]
    _logger.info("AUDIT " + " ".join(parts))

# Public convenience wrappers

def log_resource_change(actor_id: str, action: str, resource_id: int, fields: list[str] | None = None):
    _emit(f"resource.{action}", actor_id=actor_id, resource_id=resource_id, fields=fields or [])

def log_profile_created(actor_id: str, profile_id: str, role: str, via: str):
    _emit("profile.create", actor_id=actor_id, profile_id=profile_id, role=role, via=via)

def log_profile_update(actor_id: str, profile_id: str, fields: list[str], actor_role: str):
    _emit("profile.update", actor_id=actor_id, profile_id=profile_id, fields=fields, actor_role=actor_role)

def log_profile_status(actor_id: str, profile_id: str, is_active: bool):
    _emit("profile.status", actor_id=actor_id, profile_id=profile_id, is_active=is_active)

def log_assignment_change(actor_id: str, action: str, assignment_id: int, mentor_id: str | None = None, mentee_id: str | None = None):
    _emit(f"assignment.{action}", actor_id=actor_id, assignment_id=assignment_id, mentor_id=mentor_id, mentee_id=mentee_id)

def log_note_created(actor_id: str, note_id: int, mentee_id: str | None):
    _emit("note.create", actor_id=actor_id, note_id=note_id, mentee_id=mentee_id)

def log_application_received(email: str, country: str):
    _emit("application.mentee", email=email, country=country)
