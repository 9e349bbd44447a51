from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from fleet.data.facade import DataAccessFacade
from fleet.schemas.auth import RoleName, SessionIdentity
from fleet.utils.security import verify_access_token
from fleet.utils.exceptions import UnauthorizedException, ForbiddenException

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Data Access ──────────────────────────────────────────────────────────────
def get_facade(request: Request) -> DataAccessFacade:
    """FastAPI dependency returning the process-wide Data Access Facade."""
    return request.app.state.facade


# ─── Get Current User ─────────────────────────────────────────────────────────
def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionIdentity:
    """
    Validate the JWT Bearer token and return the session identity it carries.
    Raises 401 if token is missing, invalid, or expired.
    """
    if not credentials:
        raise UnauthorizedException("No authentication token provided")

    payload = verify_access_token(credentials.credentials)
    if payload.get("sub") is None or payload.get("role") is None:
        raise UnauthorizedException("Invalid token payload")

    try:
        return SessionIdentity(
            id=payload["sub"],
            email=payload.get("email"),
            role=payload["role"],
            name=payload.get("name"),
            driverId=payload.get("driverId"),
        )
    except ValueError:
        raise UnauthorizedException("Invalid token payload")


# ─── Role Guards ──────────────────────────────────────────────────────────────
def require_roles(*roles: RoleName):
    """
    Factory that returns a FastAPI dependency requiring one of the given roles.

    Usage:
        @router.post("/vehicles")
        def create(current_user = Depends(require_roles(RoleName.ADMIN))):
            ...
    """
    def dependency(current_user: SessionIdentity = Depends(get_current_user)) -> SessionIdentity:
        if current_user.role not in roles:
            raise ForbiddenException(
                f"This action requires one of these roles: {[r.value for r in roles]}"
            )
        return current_user
    return dependency


def get_admin_user(current_user: SessionIdentity = Depends(require_roles(RoleName.ADMIN))) -> SessionIdentity:
    return current_user


def get_any_authenticated(current_user: SessionIdentity = Depends(get_current_user)) -> SessionIdentity:
    """Any authenticated identity regardless of role."""
    return current_user
