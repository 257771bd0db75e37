"""Auth operations: register, login, change password and password recovery."""

import logging
from dataclasses import dataclass

from hrdesk.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from hrdesk.core.security import (
    BCRYPT_MAX_BYTES,
    TokenService,
    hash_password,
    password_fits_bcrypt,
    verify_password,
)
from hrdesk.models.user import User, UserRole, UserStatus
from hrdesk.schemas.auth import CurrentUser
from hrdesk.services.credential_store import CredentialStore
from hrdesk.services.notifications import RecoveryNotifier

logger = logging.getLogger(__name__)

# Same reply whether or not the account exists.
RECOVERY_MESSAGE = "If the account is registered, a recovery link has been sent."

BLOCKED_MESSAGE = "User is blocked. Contact the administrator."
INACTIVE_MESSAGE = "User is inactive. Contact the administrator."


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"Required fields missing: {', '.join(missing)}")


def _require_hashable(password: str) -> None:
    if not password_fits_bcrypt(password):
        raise ValidationError(f"password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")


def register_user(
    store: CredentialStore,
    username: str,
    password: str,
    display_name: str,
    role: UserRole | str,
) -> User:
    """
    Create an active account with access_count 0.

    Raises ValidationError for bad input, including passwords over bcrypt's
    72-byte limit. Raises ConflictError if the username already exists
    (the existing record is untouched).
    """
    _require(username=username, password=password, display_name=display_name, role=role)
    _require_hashable(password)
    try:
        role = UserRole(role)
    except ValueError as e:
        raise ValidationError("role must be 'admin' or 'standard'") from e

    if store.find_by_username(username) is not None:
        logger.info("Registration rejected", extra={"username": username, "reason": "exists"})
        raise ConflictError("User already exists")

    user = store.create(
        username=username,
        password_hash=hash_password(password),
        display_name=display_name,
        role=role,
    )
    logger.info("User registered", extra={"username": username, "role": role.value})
    return user


def login_user(
    store: CredentialStore,
    tokens: TokenService,
    username: str,
    password: str,
) -> LoginResult:
    """
    Check credentials and issue an access token.

    Unknown users and wrong passwords both raise InvalidCredentialsError.
    Blocked and inactive accounts raise ForbiddenError before the password is checked.
    """
    _require(username=username, password=password)

    user = store.find_by_username(username)
    if user is None:
        logger.info("Login failed", extra={"username": username, "reason": "unknown_user"})
        raise InvalidCredentialsError()
    if user.status == UserStatus.BLOCKED:
        logger.info("Login refused", extra={"username": username, "reason": "blocked"})
        raise ForbiddenError(BLOCKED_MESSAGE)
    if user.status == UserStatus.INACTIVE:
        logger.info("Login refused", extra={"username": username, "reason": "inactive"})
        raise ForbiddenError(INACTIVE_MESSAGE)
    if not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"username": username, "reason": "bad_password"})
        raise InvalidCredentialsError()

    store.increment_access_count(username)
    token = tokens.issue(CurrentUser(username=user.username, role=user.role))
    logger.info("Login succeeded", extra={"username": username})
    return LoginResult(token=token, user=store.find_by_username(username) or user)


def change_password(
    store: CredentialStore,
    identity: CurrentUser | None,
    current_password: str,
    new_password: str,
) -> None:
    """Replace the password hash. Tokens issued earlier stay valid until they expire."""
    if identity is None:
        raise UnauthenticatedError()
    _require(current_password=current_password, new_password=new_password)
    _require_hashable(new_password)

    user = store.find_by_username(identity.username)
    if user is None:
        raise NotFoundError("User not found")
    if not verify_password(current_password, user.password_hash):
        logger.info("Password change refused", extra={"username": identity.username})
        raise InvalidCredentialsError("Current password is incorrect.")

    store.update_password_hash(identity.username, hash_password(new_password))
    logger.info("Password changed", extra={"username": identity.username})


def recover_password(
    store: CredentialStore,
    notifier: RecoveryNotifier,
    identifier: str,
) -> str:
    """Notify the account holder if one exists; the reply never reveals which case applied."""
    _require(identifier=identifier)

    user = store.find_by_username(identifier)
    if user is not None:
        notifier.send_recovery(user)
    return RECOVERY_MESSAGE
