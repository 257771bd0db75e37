"""Request/response schemas for auth endpoints."""

from pydantic import AliasChoices, BaseModel, Field, field_validator

from hrdesk.models.user import UserRole, UserStatus

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
# bcrypt only looks at the first 72 bytes of its input.
PASSWORD_MAX_BYTES = 72


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be blank")
    return v.strip()


def _hashable(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"must be at most {PASSWORD_MAX_BYTES} bytes when UTF-8 encoded")
    return v


class RegisterRequest(BaseModel):
    """New account: all four fields are required."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    display_name: str = Field(..., min_length=1, max_length=255)
    role: UserRole

    @field_validator("username", "display_name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("password")
    @classmethod
    def password_hashable(cls, v: str) -> str:
        return _hashable(v)


class LoginRequest(BaseModel):
    """Credentials for login. The username is trimmed the same way registration trims it."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("username")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _not_blank(v)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("new_password")
    @classmethod
    def password_hashable(cls, v: str) -> str:
        return _hashable(v)


class RecoverPasswordRequest(BaseModel):
    """Account identifier for recovery; older clients send it as 'email'."""

    identifier: str = Field(
        ...,
        min_length=1,
        max_length=USERNAME_MAX_LEN,
        validation_alias=AliasChoices("identifier", "email"),
    )

    @field_validator("identifier")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _not_blank(v)


class CurrentUser(BaseModel):
    """Identity carried by a verified token (username, role)."""

    username: str
    role: UserRole

    class Config:
        from_attributes = True


class UserPublic(BaseModel):
    """Public fields of an account; never includes the password hash."""

    username: str
    display_name: str
    role: UserRole

    class Config:
        from_attributes = True


class LoginUser(UserPublic):
    access_count: int


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: LoginUser


class MessageResponse(BaseModel):
    message: str


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    username: str
    display_name: str
    role: UserRole
    status: UserStatus
    access_count: int

    class Config:
        from_attributes = True


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserListItem]


class UserStatusUpdate(BaseModel):
    status: UserStatus
