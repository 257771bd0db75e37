"""JWT auth routes and the auth gate dependencies (get_current_user, require_role)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hrdesk.core.database import get_db
from hrdesk.core.errors import ForbiddenError, InvalidTokenError, UnauthenticatedError
from hrdesk.core.security import TokenService, get_token_service
from hrdesk.models.user import UserRole
from hrdesk.schemas.auth import (
    ChangePasswordRequest,
    CurrentUser,
    LoginRequest,
    LoginUser,
    MessageResponse,
    RecoverPasswordRequest,
    RegisterRequest,
    TokenResponse,
    UserListItem,
    UserPublic,
    UsersListResponse,
    UserStatusUpdate,
)
from hrdesk.services import auth as auth_service
from hrdesk.services.credential_store import CredentialStore
from hrdesk.services.notifications import RecoveryNotifier, get_recovery_notifier

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_credential_store(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    return CredentialStore(db)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and bind its identity to request.state.user.
    Missing header -> Unauthenticated; bad or expired token -> InvalidToken (both 401).
    """
    if credentials is None:
        raise UnauthenticatedError()
    identity = tokens.verify(credentials.credentials)
    if identity is None:
        raise InvalidTokenError()
    request.state.user = identity
    return identity


def authorize(identity: CurrentUser | None, required_role: UserRole) -> CurrentUser:
    """Role check for gated operations. No identity -> 401, other role -> 403."""
    if identity is None:
        raise UnauthenticatedError("User not authenticated.")
    if identity.role != required_role:
        raise ForbiddenError("Access denied. You do not have permission to perform this action.")
    return identity


def require_role(required_role: UserRole) -> Callable[..., CurrentUser]:
    """Build a dependency that admits only identities holding required_role."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        return authorize(current_user, required_role)

    return dependency


require_admin = require_role(UserRole.ADMIN)


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> UserPublic:
    """Create an account. The response never includes the password hash."""
    user = auth_service.register_user(
        store,
        username=body.username,
        password=body.password,
        display_name=body.display_name,
        role=body.role,
    )
    return UserPublic.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    result = auth_service.login_user(store, tokens, body.username, body.password)
    return TokenResponse(
        access_token=result.token,
        token_type="bearer",
        expires_in=tokens.ttl_seconds,
        user=LoginUser.model_validate(result.user),
    )


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> MessageResponse:
    auth_service.change_password(
        store, current_user, body.current_password, body.new_password
    )
    return MessageResponse(message="Password changed successfully.")


@router.post("/recover-password", response_model=MessageResponse)
def recover_password(
    body: RecoverPasswordRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    notifier: Annotated[RecoveryNotifier, Depends(get_recovery_notifier)],
) -> MessageResponse:
    message = auth_service.recover_password(store, notifier, body.identifier)
    return MessageResponse(message=message)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> UsersListResponse:
    """List all accounts (admin only)."""
    return UsersListResponse(
        users=[UserListItem.model_validate(u) for u in store.list_users()]
    )


@router.patch("/users/{username}/status", response_model=UserListItem)
def set_user_status(
    username: str,
    body: UserStatusUpdate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> UserListItem:
    """Activate, deactivate or block an account (admin only)."""
    return UserListItem.model_validate(store.set_status(username, body.status))
