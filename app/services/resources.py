"""Data access for resources."""
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from app.exceptions import ValidationException
from app.models.resource import Resource
from app.services.filters import resource_predicates


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> list[Resource]:
    q = db.query(Resource)
    if filters:
        q = q.filter(*resource_predicates(filters))
    return q.order_by(Resource.resource_id).all()


def find_by_id(db: Session, resource_id: int) -> Optional[Resource]:
    return db.query(Resource).filter(Resource.resource_id == resource_id).first()


def _check_assignee(assigned: bool, current_assignee: Optional[str]) -> None:
    if current_assignee and not assigned:
        raise ValidationException("assigned: current_assignee requires assigned to be true")


def create(db: Session, data: Mapping[str, Any]) -> Resource:
    _check_assignee(data.get("assigned", False), data.get("current_assignee"))
    resource = Resource(**data)
    db.add(resource)
    db.commit()
    db.refresh(resource)
    return resource


def update(db: Session, resource_id: int, changes: Mapping[str, Any]) -> Optional[Resource]:
    """Apply ``changes`` on top of the stored row.

    The assignee rule is checked against the merged row. Releasing a resource
    (``assigned`` false with no assignee given) clears the current assignee,
    and whenever the current assignee is replaced the old one is kept as
    ``previous_assignee`` unless the caller set that field explicitly.
    """
    resource = find_by_id(db, resource_id)
    if resource is None:
        return None
    changes = dict(changes)
    assigned = changes.get("assigned", resource.assigned)
    if "current_assignee" in changes:
        assignee = changes["current_assignee"]
    elif not assigned:
        assignee = None
    else:
        assignee = resource.current_assignee
    _check_assignee(assigned, assignee)

    if resource.current_assignee and assignee != resource.current_assignee and "previous_assignee" not in changes:
        changes["previous_assignee"] = resource.current_assignee
    changes["current_assignee"] = assignee
    for k, v in changes.items():
        setattr(resource, k, v)
    db.add(resource)
    db.commit()
    db.refresh(resource)
    return resource


def remove(db: Session, resource_id: int) -> None:
    db.query(Resource).filter(Resource.resource_id == resource_id).delete()
    db.commit()
