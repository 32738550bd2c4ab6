from typing import Any

from fastapi import APIRouter, Depends, Response, status

from ....application.services.auth_service import AuthService
from ....core.config import Settings
from ....core.dependencies import get_auth_service, get_settings
from ....domain.models import User
from ...api.dependencies import (
    clear_session_cookie,
    read_json_body,
    require_identity,
    set_session_cookie,
)
from ...api.schemas.auth import AuthResponse, MessageResponse, UserResponse

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    response: Response,
    payload: Any = Depends(read_json_body),
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    user = auth_service.register(payload)
    _start_session(response, user, auth_service, settings)
    return AuthResponse(user=UserResponse.from_domain(user))


@router.post("/login", response_model=AuthResponse)
def login(
    response: Response,
    payload: Any = Depends(read_json_body),
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    user = auth_service.authenticate(payload)
    _start_session(response, user, auth_service, settings)
    return AuthResponse(user=UserResponse.from_domain(user))


@router.get("/me", response_model=AuthResponse)
def me(current_user: User = Depends(require_identity)) -> AuthResponse:
    return AuthResponse(user=UserResponse.from_domain(current_user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)) -> MessageResponse:
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out")


def _start_session(response: Response, user: User, auth_service: AuthService, settings: Settings) -> None:
    token = auth_service.issue_session(user)
    max_age = int(auth_service.session_lifetime.total_seconds())
    set_session_cookie(response, token, settings, max_age)
