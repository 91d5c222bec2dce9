"""JWT verification for tokens issued by the external auth provider.

The provider signs access tokens with a shared HS256 secret and puts the
user id in the ``sub`` claim. This service never issues tokens; it only
verifies them and trusts ``sub`` once the signature and expiry check out.
"""

from jose import JWTError, jwt

from config.settings import settings
from src.wl_common.errors import UnauthorizedError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate a bearer token.

    Audience is verified only when JWT_AUDIENCE is configured.

    Raises:
        UnauthorizedError: Token invalid, expired, or for another audience.
    """
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
    except JWTError:
        raise UnauthorizedError() from None
    return payload


def user_id_from_token(token: str) -> str:
    payload = decode_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError()
    return str(user_id)
