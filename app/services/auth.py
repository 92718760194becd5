import logging
from typing import Optional

import httpx
from fastapi import Request, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError
from sqlalchemy.orm import Session

from app.core.settings import settings
from app.db import get_db
from app.exceptions import UnauthorizedException, ForbiddenException
from app.models.profile import Profile, ProfileRole
from app.services import audit

logger = logging.getLogger("app.auth")

security = HTTPBearer(auto_error=False)

# Fixed tokens for local development and tests (ALLOW_MOCK_TOKENS)
MOCK_TOKENS = {
    "mock-mentee-token": ("mentee-1", "Mentee", "One", "mentee@example.com", ProfileRole.mentee),
    "mock-mentor-token": ("mentor-1", "Mentor", "One", "mentor@example.com", ProfileRole.mentor),
    "mock-moderator-token": ("moderator-1", "Moderator", "One", "moderator@example.com", ProfileRole.moderator),
    "mock-admin-token": ("admin-1", "Admin", "One", "admin@example.com", ProfileRole.admin),
    "mock-super-admin-token": ("super-admin-1", "Super", "Admin", "superadmin@example.com", ProfileRole.super_admin),
}

_jwks_cache: Optional[dict] = None


def _fetch_jwks() -> dict:
    url = f"{settings.auth0_issuer}.well-known/jwks.json"
    try:
        response = httpx.get(url, timeout=10.0)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        logger.error(f"Could not fetch JWKS from {url}: {e}")
        raise UnauthorizedException("Could not verify token")


def _signing_key(token: str) -> dict:
    global _jwks_cache
    kid = jwt.get_unverified_header(token).get("kid")
    for attempt in range(2):
        if _jwks_cache is None or attempt == 1:
            # Keys rotate; an unknown kid triggers one refetch
            _jwks_cache = _fetch_jwks()
        for key in _jwks_cache.get("keys", []):
            if key.get("kid") == kid:
                return key
    raise UnauthorizedException("Invalid token: unknown signing key")


def decode_token(token: str) -> dict:
    """Verify an Auth0 access token and return its claims."""
    if not settings.auth0_configured:
        raise UnauthorizedException("Token verification is not configured")
    try:
        key = _signing_key(token)
        return jwt.decode(
            token,
            key,
            algorithms=settings.auth0_algorithms,
            audience=settings.auth0_audience,
            issuer=settings.auth0_issuer,
        )
    except ExpiredSignatureError:
        raise UnauthorizedException("Token has expired")
    except JWTError:
        raise UnauthorizedException("Invalid token")


def _profile_from_mock(db: Session, token: str) -> Profile:
    profile_id, first, last, email, role = MOCK_TOKENS[token]
    profile = db.query(Profile).filter(Profile.profile_id == profile_id).first()
    if not profile:
        profile = Profile(
            profile_id=profile_id,
            first_name=first,
            last_name=last,
            email=email,
            role=role,
            is_active=True,
            pending=False,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
    return profile


def _profile_from_claims(db: Session, claims: dict) -> Profile:
    profile_id = claims.get("sub")
    if not profile_id:
        raise UnauthorizedException("Invalid token: missing subject")

    profile = db.query(Profile).filter(Profile.profile_id == profile_id).first()
    if profile:
        return profile

    # First login: create a pending mentee profile from the token claims
    email = claims.get("email") or claims.get(settings.auth0_email_claim)
    if email:
        email = email.lower()
        if db.query(Profile).filter(Profile.email == email).first():
            logger.warning(f"Email {email} already belongs to another profile; creating {profile_id} without it")
            email = None
    profile = Profile(
        profile_id=profile_id,
        email=email,
        first_name=claims.get("given_name"),
        last_name=claims.get("family_name"),
        avatar_url=claims.get("picture"),
        role=ProfileRole.mentee,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    audit.log_profile_created(profile_id, profile_id, ProfileRole.mentee.value, via="first_login")
    return profile


def get_current_profile(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Profile:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Authorization header missing or invalid")
    token = credentials.credentials

    if settings.allow_mock_tokens and token in MOCK_TOKENS:
        profile = _profile_from_mock(db, token)
    else:
        profile = _profile_from_claims(db, decode_token(token))

    if not profile.is_active:
        raise ForbiddenException("Profile is inactive")

    request.state.profile = profile
    return profile


def require_role(minimum: ProfileRole):
    """Dependency factory: the caller's role must rank at or above ``minimum``."""
    def role_checker(profile: Profile = Depends(get_current_profile)) -> Profile:
        if not profile.role.at_least(minimum):
            raise ForbiddenException(f"Forbidden: {minimum.value} role required")
        return profile
    return role_checker


def require_self_or_role(minimum: ProfileRole):
    """The path ``profile_id`` must be the caller's own, unless the caller ranks at or above ``minimum``."""
    def self_checker(profile_id: str, profile: Profile = Depends(get_current_profile)) -> Profile:
        if profile.profile_id != profile_id and not profile.role.at_least(minimum):
            raise ForbiddenException("Forbidden: can only act on your own profile")
        return profile
    return self_checker


require_moderator = require_role(ProfileRole.moderator)
require_admin = require_role(ProfileRole.admin)
require_super_admin = require_role(ProfileRole.super_admin)
