# admin_portal/core/auth.py
import uuid
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from admin_portal.core.config import Settings, get_settings
from admin_portal.core.errors import Unauthorized
from admin_portal.core.policy import Action, Actor, authorize
from admin_portal.core.security import decode_access_token
from admin_portal.models.user import Role

# HTTP Bearer scheme:
# - auto_error=False => we raise our own 401 with a consistent message
bearer_scheme = HTTPBearer(auto_error=False)


def actor_from_claims(payload: dict[str, Any]) -> Actor:
    """
    Build an Actor from verified token claims.

    Raises:
        Unauthorized(401): if required claims are missing or malformed.
    """
    sub = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")
    if not sub or not email or not role:
        raise Unauthorized("Token missing sub/email/role")

    try:
        group_id = payload.get("group_id")
        return Actor(
            id=uuid.UUID(sub),
            email=email,
            role=Role(role),
            group_id=uuid.UUID(group_id) if group_id else None,
        )
    except ValueError:
        raise Unauthorized("Invalid claims in token")


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """
    Return the verified claims of the bearer token.

    Raises:
        Unauthorized(401): if the header is missing or the token is invalid/expired.
    """
    if credentials is None:
        raise Unauthorized("Authentication required")
    return decode_access_token(credentials.credentials, settings)


def require_auth(claims: dict[str, Any] = Depends(get_current_claims)) -> Actor:
    """
    Enforce authentication and return the caller as an Actor.

    No database lookup: the token is the source of the actor's role and group.
    """
    return actor_from_claims(claims)


def require_action(action: Action):
    """
    Route-level guard for actions that do not depend on a target row.

    Usage:
        @router.post("", dependencies=[Depends(require_action(Action.MANAGE_GROUPS))])
    """

    def _guard(actor: Actor = Depends(require_auth)) -> Actor:
        authorize(action, actor)
        return actor

    return _guard
