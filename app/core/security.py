"""
Security utilities: the acting user and JWT handling.

Token issuance for login lives outside this service; ``create_access_token``
exists for tooling and tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, ExpiredSignatureError, jwt

from app.config.settings import settings
from app.core.exceptions import InvalidTokenError, TokenExpiredError
from app.core.logging import get_logger
from app.models.base.enums import UserRole

logger = get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    """The authenticated user an operation is performed for."""

    id: str
    role: UserRole = UserRole.OWNER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def can_access_property(actor: Actor, prop: Any) -> bool:
    """Admins reach every property; everyone else only their own."""
    if actor.is_admin:
        return True
    return getattr(prop, "owner_id", None) == actor.id


def create_access_token(
    subject: str,
    role: UserRole = UserRole.OWNER,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token for ``subject``."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"sub": subject, "role": role.value, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT access token.

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is malformed or badly signed
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        raise InvalidTokenError()


def actor_from_token(token: str) -> Actor:
    """Build the acting user from a bearer token."""
    payload = decode_access_token(token)
    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError(reason="missing subject")
    try:
        role = UserRole(payload.get("role", UserRole.OWNER.value))
    except ValueError:
        raise InvalidTokenError(reason="unknown role")
    return Actor(id=str(subject), role=role)
