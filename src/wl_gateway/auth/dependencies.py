"""FastAPI dependency: get_current_user_id.

Usage in any protected router:
    from src.wl_gateway.auth.dependencies import get_current_user_id

    @router.get("/protected")
    async def protected(user_id: str = Depends(get_current_user_id)):
        ...

Only resolves identity. Whether a profile exists for that id is a
business check made by the service that needs the profile.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.wl_common.errors import UnauthorizedError
from src.wl_gateway.auth.jwt_handler import user_id_from_token

# auto_error=False so a missing header yields our own 401 body, not FastAPI's
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Extract and validate the Bearer token, return the caller's user id.

    Raises UnauthorizedError (401) if the token is missing, invalid, or expired.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return user_id_from_token(credentials.credentials)


async def get_optional_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Like get_current_user_id, but returns None instead of raising.

    For endpoints whose own checks must run before the identity check.
    """
    if credentials is None or not credentials.credentials:
        return None
    try:
        return user_id_from_token(credentials.credentials)
    except UnauthorizedError:
        return None
