"""Password hashing and JWT issuance/verification for authentication."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError

from hrdesk.core.config import get_settings
from hrdesk.schemas.auth import PASSWORD_MAX_BYTES, CurrentUser

if TYPE_CHECKING:
    from hrdesk.core.config import Settings

logger = logging.getLogger(__name__)

# Signing key used only in dev when JWT_SECRET is unset. Settings refuse it in prod.
INSECURE_DEV_SECRET = "change-me-in-production"

# Longer passwords are refused, never truncated.
BCRYPT_MAX_BYTES = PASSWORD_MAX_BYTES


def password_fits_bcrypt(plain_password: str) -> bool:
    return len(plain_password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.
    Raises ValueError for passwords longer than 72 UTF-8 bytes.
    """
    if not password_fits_bcrypt(plain_password):
        raise ValueError(f"password exceeds {BCRYPT_MAX_BYTES} bytes")
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(
        plain_password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes and over-long passwords never match."""
    if not password_fits_bcrypt(plain_password):
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


@dataclass(frozen=True)
class TokenConfig:
    """Signing parameters for access tokens, loaded once at startup."""

    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(hours=1)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenConfig":
        if settings.JWT_SECRET is None:
            logger.warning(
                "JWT_SECRET is not set; signing tokens with an insecure development key"
            )
            secret = INSECURE_DEV_SECRET
        else:
            secret = settings.JWT_SECRET.get_secret_value()
        return cls(
            secret=secret,
            algorithm=settings.JWT_ALGORITHM,
            ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )


class TokenService:
    """Issues and verifies stateless bearer tokens carrying (username, role)."""

    def __init__(self, config: TokenConfig) -> None:
        self._config = config

    @property
    def ttl_seconds(self) -> int:
        return int(self._config.ttl.total_seconds())

    def issue(self, identity: CurrentUser, now: datetime | None = None) -> str:
        """Create a JWT with sub (username), role, iat and exp = iat + TTL."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": identity.username,
            "role": identity.role.value,
            "iat": issued_at,
            "exp": issued_at + self._config.ttl,
        }
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def verify(self, token: str) -> CurrentUser | None:
        """
        Return the embedded identity, or None for a bad signature, malformed
        payload or expired token. Never raises.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.PyJWTError as e:
            logger.debug("Rejected token: %s", type(e).__name__)
            return None
        try:
            return CurrentUser(username=payload["sub"], role=payload.get("role"))
        except (PydanticValidationError, KeyError):
            logger.debug("Rejected token with invalid claims")
            return None


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings (dependency)."""
    return TokenService(TokenConfig.from_settings(get_settings()))
