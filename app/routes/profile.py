from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.db import get_db
from app.dependencies import get_profile_or_404
from app.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.models.profile import Profile, ProfileRole
from app.schemas.profile import (
    AvailabilityIn,
    AvailabilityOut,
    MatchesOut,
    ParticipantInfo,
    ProfileAdminUpdate,
    ProfileCreate,
    ProfileCreated,
    ProfileOut,
    ProfileSelfUpdate,
    ProfileStatus,
    ProfileUpdated,
)
from app.services import audit, matching, profiles
from app.services.auth import (
    get_current_profile,
    require_admin,
    require_self_or_role,
    require_super_admin,
)

router = APIRouter(prefix="/profile", tags=["Profile"])


def _upstream_error(e: matching.MatchingServiceError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)


def _ensure_email_free(db: Session, email: str | None, profile_id: str | None = None) -> None:
    if not email:
        return
    owner = db.query(Profile).filter(Profile.email == email).first()
    if owner and owner.profile_id != profile_id:
        raise ValidationException(f"email: {email} is already in use")


def _apply_update(db: Session, profile_id: str, changes: dict) -> Profile:
    _ensure_email_free(db, changes.get("email"), profile_id)
    updated = profiles.update(db, profile_id, changes)
    if updated is None:
        raise NotFoundException(f"Profile {profile_id} not found")
    return updated


@router.get("", response_model=list[ProfileOut])
def list_profiles(
    request: Request,
    current_profile: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """All profiles, optionally filtered by query parameters (email, names, role, is_active, pending)."""
    return profiles.find_all(db, dict(request.query_params))


@router.get("/current_user_profile", response_model=ProfileOut)
def get_current_user_profile(current_profile: Profile = Depends(get_current_profile)):
    return current_profile


@router.get("/role/{role}", response_model=list[ProfileOut])
def list_profiles_by_role(
    role: ProfileRole,
    current_profile: Profile = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return profiles.find_by_role(db, role)


@router.get("/match/{profile_id}", response_model=MatchesOut)
async def get_matches(
    profile_id: str,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Best-matching mentors for a profile, as ranked by the matching service."""
    try:
        matched_ids = await matching.match(profile_id)
    except matching.MatchingServiceError as e:
        raise _upstream_error(e)
    found = await run_in_threadpool(profiles.find_by_ids, db, matched_ids)
    return {"matches": [ProfileOut.model_validate(p) for p in found]}


@router.get("/mentor/information", response_model=list[ParticipantInfo])
async def get_mentor_information(
    request: Request,
    current_profile: Profile = Depends(get_current_profile),
):
    try:
        return await matching.read_profiles("mentor", dict(request.query_params))
    except matching.MatchingServiceError as e:
        raise _upstream_error(e)


@router.get("/mentee/information", response_model=list[ParticipantInfo])
async def get_mentee_information(
    request: Request,
    current_profile: Profile = Depends(get_current_profile),
):
    try:
        return await matching.read_profiles("mentee", dict(request.query_params))
    except matching.MatchingServiceError as e:
        raise _upstream_error(e)


@router.get("/{profile_id}", response_model=ProfileOut, responses={404: {"description": "Profile not found"}})
def get_profile(
    current_profile: Profile = Depends(get_current_profile),
    profile: Profile = Depends(get_profile_or_404),
):
    return profile


@router.post("", response_model=ProfileCreated, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: ProfileCreate,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    if profiles.find_by_id(db, payload.profile_id):
        raise ValidationException("profile already exists")
    # Elevated roles need an admin, and nobody can create a role above their own
    if payload.role.rank > ProfileRole.mentor.rank and (
        not current_profile.role.at_least(ProfileRole.admin) or payload.role.rank > current_profile.role.rank
    ):
        raise ForbiddenException(f"Cannot create a profile with role {payload.role.value}")
    _ensure_email_free(db, payload.email)

    profile = profiles.create(db, payload.model_dump())
    audit.log_profile_created(current_profile.profile_id, profile.profile_id, profile.role.value, via="api")
    return {"message": "profile created", "profile": ProfileOut.model_validate(profile)}


@router.put("", response_model=ProfileUpdated)
async def update_own_profile(
    payload: ProfileSelfUpdate,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    """Update the caller's own name and email. Role and active status cannot be changed here."""
    changes = payload.model_dump(exclude_unset=True)
    updated = await run_in_threadpool(_apply_update, db, current_profile.profile_id, changes)
    audit.log_profile_update(current_profile.profile_id, current_profile.profile_id, sorted(changes), current_profile.role.value)
    await matching.post_profile_update(updated)
    return {"updated_profile": ProfileOut.model_validate(updated)}


@router.put("/is_active/{profile_id}", response_model=ProfileStatus)
def toggle_profile_active(
    current_profile: Profile = Depends(require_super_admin),
    profile: Profile = Depends(get_profile_or_404),
    db: Session = Depends(get_db),
):
    """Activate an inactive profile, or deactivate an active one."""
    profile = profiles.toggle_is_active(db, profile)
    audit.log_profile_status(current_profile.profile_id, profile.profile_id, profile.is_active)
    message = "profile is now active" if profile.is_active else "profile is now inactive"
    return {"message": message, "profile": ProfileOut.model_validate(profile)}


@router.put("/{profile_id}", response_model=ProfileUpdated)
async def update_profile(
    profile_id: str,
    payload: ProfileAdminUpdate,
    current_profile: Profile = Depends(require_admin),
    profile: Profile = Depends(get_profile_or_404),
    db: Session = Depends(get_db),
):
    actor_id, actor_role = current_profile.profile_id, current_profile.role
    if profile.role.rank > actor_role.rank:
        raise ForbiddenException("Cannot modify a profile with a higher role")
    changes = payload.model_dump(exclude_unset=True)
    new_role = changes.get("role")
    if new_role is not None and new_role.rank > actor_role.rank:
        raise ForbiddenException(f"Cannot grant role {new_role.value}")
    updated = await run_in_threadpool(_apply_update, db, profile_id, changes)
    audit.log_profile_update(actor_id, profile_id, sorted(changes), actor_role.value)
    await matching.post_profile_update(updated)
    return {"updated_profile": ProfileOut.model_validate(updated)}


@router.post("/availability/{profile_id}", response_model=AvailabilityOut)
async def post_availability(
    profile_id: str,
    payload: AvailabilityIn,
    current_profile: Profile = Depends(require_self_or_role(ProfileRole.admin)),
):
    """Tell the matching service whether a mentor is accepting new mentees."""
    try:
        status_code, body = await matching.update_availability(profile_id, payload.accepting_new_mentees)
    except matching.MatchingServiceError as e:
        raise _upstream_error(e)
    return {"status": status_code, "message": body}
