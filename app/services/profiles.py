"""Data access for profiles."""
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.models.profile import Profile, ProfileRole
from app.services.filters import profile_predicates


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> list[Profile]:
    q = db.query(Profile)
    if filters:
        q = q.filter(*profile_predicates(filters))
    return q.order_by(Profile.created_at, Profile.profile_id).all()


def find_by_id(db: Session, profile_id: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.profile_id == profile_id).first()


def find_by_ids(db: Session, profile_ids: list[str]) -> list[Profile]:
    """Profiles for the given ids, in the order the ids were given; unknown ids are skipped."""
    if not profile_ids:
        return []
    rows = {p.profile_id: p for p in db.query(Profile).filter(Profile.profile_id.in_(profile_ids)).all()}
    return [rows[pid] for pid in profile_ids if pid in rows]


def find_by_role(db: Session, role: ProfileRole) -> list[Profile]:
    return db.query(Profile).filter(Profile.role == role).order_by(Profile.profile_id).all()


def create(db: Session, data: Mapping[str, Any]) -> Profile:
    profile = Profile(**data)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def update(db: Session, profile_id: str, changes: Mapping[str, Any]) -> Optional[Profile]:
    profile = find_by_id(db, profile_id)
    if profile is None:
        return None
    for k, v in changes.items():
        if k == "profile_id":
            continue
        setattr(profile, k, v)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def toggle_is_active(db: Session, profile: Profile) -> Profile:
    profile.is_active = not profile.is_active
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def remove(db: Session, profile_id: str) -> None:
    db.query(Profile).filter(Profile.profile_id == profile_id).delete()
    db.commit()
