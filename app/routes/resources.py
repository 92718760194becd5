from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies import get_resource_or_404
from app.models.profile import Profile
from app.models.resource import Resource
from app.schemas.resource import ResourceIn, ResourceOut, ResourceMessage, MessageOut
from app.services import audit, resources
from app.services.auth import get_current_profile, require_admin

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get("", response_model=list[ResourceOut])
def list_resources(
    request: Request,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """List resources.

    Any resource field may be passed as a query parameter; text fields match
    exactly or by case-insensitive substring, boolean and id fields match
    exactly. Every supplied parameter must match.
    """
    return resources.find_all(db, dict(request.query_params))


@router.get(
    "/{resource_id}",
    response_model=ResourceOut,
    responses={404: {"description": "Resource with the given ID could not be found"}},
)
def get_resource(
    current_profile: Profile = Depends(get_current_profile),
    resource: Resource = Depends(get_resource_or_404),
):
    return resource


@router.post("", response_model=ResourceMessage, status_code=status.HTTP_201_CREATED)
def create_resource(
    payload: ResourceIn,
    current_profile: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    resource = resources.create(db, payload.model_dump())
    audit.log_resource_change(current_profile.profile_id, "create", resource.resource_id)
    return {
        "message": "new resource created, successfully!",
        "resource": ResourceOut.model_validate(resource),
    }


@router.put(
    "/{resource_id}",
    response_model=ResourceMessage,
    responses={404: {"description": "Resource with the given ID could not be found"}},
)
def update_resource(
    resource_id: int,
    payload: ResourceIn,
    current_profile: Profile = Depends(require_admin),
    resource: Resource = Depends(get_resource_or_404),
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True)
    updated = resources.update(db, resource_id, changes)
    audit.log_resource_change(current_profile.profile_id, "update", resource_id, sorted(changes))
    return {
        "message": f"Resource #{resource_id} updated, successfully!",
        "resource": ResourceOut.model_validate(updated),
    }


@router.delete(
    "/{resource_id}",
    response_model=MessageOut,
    responses={404: {"description": "Resource with the given ID could not be found"}},
)
def delete_resource(
    resource_id: int,
    current_profile: Profile = Depends(require_admin),
    resource: Resource = Depends(get_resource_or_404),
    db: Session = Depends(get_db),
):
    resources.remove(db, resource_id)
    audit.log_resource_change(current_profile.profile_id, "delete", resource_id)
    return {"message": f"Resource #{resource_id} deleted, successfully!"}
