from app.models.profile import Profile, ProfileRole
from app.models.resource import Resource
from app.models.note import Note
from app.models.assignment import Assignment

__all__ = ["Profile", "ProfileRole", "Resource", "Note", "Assignment"]
