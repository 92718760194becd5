"""Client for the external mentor-matching service.

The service is addressed by ``DS_API_URL``. Every call is a POST, and every
successful response wraps its payload in a ``result`` key.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from app.core.settings import settings
from app.models.profile import Profile

logger = logging.getLogger(__name__)

DEFAULT_MATCH_COUNT = 5


class MatchingServiceError(Exception):
    """Raised when the matching service is unconfigured, unreachable, or returns an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _headers() -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if settings.ds_api_token:
        headers["Authorization"] = f"Bearer {settings.ds_api_token}"
    return headers


async def _post(path: str, payload: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
    if not settings.matching_configured:
        raise MatchingServiceError("Matching service is not configured")
    url = f"{settings.ds_api_url}{path}"
    try:
        async with httpx.AsyncClient(timeout=settings.ds_timeout) as client:
            response = await client.post(url, json=payload or {}, params=params, headers=_headers())
    except httpx.RequestError as e:
        logger.error(f"Network error calling matching service {path}: {e}")
        raise MatchingServiceError("Could not connect to matching service")

    if response.status_code >= 400:
        logger.error(f"Matching service error: {response.status_code} - {response.text}")
        raise MatchingServiceError(
            f"Matching service returned {response.status_code}", status_code=response.status_code
        )
    return response


def _result(response: httpx.Response) -> Any:
    try:
        return response.json().get("result", [])
    except (ValueError, AttributeError):
        raise MatchingServiceError("Matching service returned an unreadable body")


async def match(profile_id: str, n_matches: int = DEFAULT_MATCH_COUNT) -> List[str]:
    """Ids of the best-matching mentors for ``profile_id``."""
    response = await _post(f"/match/{profile_id}/", params={"n_matches": n_matches})
    return [str(pid) for pid in _result(response)]


async def read_profiles(role: str, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Directory rows for ``role`` ("mentor" or "mentee"), reduced to display fields."""
    response = await _post(f"/read/{role}", payload=filters)
    rows = []
    for item in _result(response):
        rows.append({
            "name": f"{item.get('first_name', '')} {item.get('last_name', '')}".strip(),
            "city": item.get("city"),
            "state": item.get("state"),
            "availability": item.get("accepting_new_mentees"),
        })
    return rows


async def update_availability(profile_id: str, accepting_new_mentees: bool) -> Tuple[int, Any]:
    response = await _post(
        f"/update/mentor/{profile_id}",
        payload={"accepting_new_mentees": accepting_new_mentees},
    )
    try:
        body = response.json()
    except ValueError:
        body = response.text
    return response.status_code, body


async def post_profile_update(profile: Profile) -> bool:
    """Push a changed profile to the matching service.

    Best effort: returns False instead of raising when the push fails.
    """
    if not settings.matching_configured:
        return False
    role = profile.role.value if hasattr(profile.role, "value") else str(profile.role)
    payload = {
        "profile_id": profile.profile_id,
        "email": profile.email,
        "first_name": profile.first_name,
        "last_name": profile.last_name,
        "is_active": profile.is_active,
    }
    try:
        await _post(f"/update/{role}/{profile.profile_id}", payload=payload)
        return True
    except MatchingServiceError as e:
        logger.warning(f"Could not push profile {profile.profile_id} to matching service: {e.message}")
        return False
