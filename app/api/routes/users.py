from fastapi import APIRouter, Depends, status

from app.api.deps import get_identity, get_user_service
from app.core.config import Settings, get_settings
from app.core.security import IdentityContext
from app.schemas.user import (
    AccountDelete,
    LoginRequest,
    PasswordChange,
    TokenResponse,
    UserRead,
    UserRegister,
    UserUpdate,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserRegister, users: UserService = Depends(get_user_service)) -> UserRead:
    """Create a new account; the email must be unused."""

    return UserRead.model_validate(users.register(payload))


@router.post("/login", response_model=TokenResponse)
def login_user(
    payload: LoginRequest,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Exchange email and password for a bearer token."""

    token, expires_in, record = users.login(payload.email, payload.password, settings)
    return TokenResponse(access_token=token, expires_in=expires_in, user=UserRead.model_validate(record))


@router.get("/me", response_model=UserRead)
def get_current_user(
    identity: IdentityContext = Depends(get_identity),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    return UserRead.model_validate(users.get_profile(identity))


@router.put("/me", response_model=UserRead)
def edit_current_user(
    payload: UserUpdate,
    identity: IdentityContext = Depends(get_identity),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """Update profile fields; requires the current password."""

    return UserRead.model_validate(users.edit_profile(identity, payload))


@router.put("/me/password", response_model=UserRead)
def change_current_user_password(
    payload: PasswordChange,
    identity: IdentityContext = Depends(get_identity),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    return UserRead.model_validate(users.change_password(identity, payload))


@router.delete("/me", response_model=UserRead)
def delete_current_user(
    payload: AccountDelete,
    identity: IdentityContext = Depends(get_identity),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """Permanently delete the account after confirming its password."""

    return UserRead.model_validate(users.delete_account(identity, payload.password))
