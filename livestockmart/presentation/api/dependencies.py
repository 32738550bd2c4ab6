import json
from typing import Any, Optional

from fastapi import Depends, Request, Response
from fastapi.security import APIKeyCookie

from ...application.services.auth_service import AuthService
from ...core.config import Settings
from ...core.dependencies import get_auth_service
from ...domain.errors import ValidationError
from ...domain.models import User

SESSION_COOKIE_NAME = "token"

_session_cookie = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


def require_session(
    token: Optional[str] = Depends(_session_cookie),
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    """Resolve the session cookie to the caller's user id."""
    return auth_service.verify_session(token)


def require_identity(
    user_id: str = Depends(require_session),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Re-read the caller's account; the token is trusted for nothing beyond its id."""
    return auth_service.get_by_id(user_id)


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError("Malformed JSON body") from exc


def set_session_cookie(response: Response, token: str, settings: Settings, max_age: int) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
