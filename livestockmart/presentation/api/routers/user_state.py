from typing import Any

from fastapi import APIRouter, Depends

from ....application.services.user_state_service import UserStateService
from ....core.dependencies import get_user_state_service
from ....domain.models import User
from ...api.dependencies import read_json_body, require_identity
from ...api.schemas.user_state import UserStateResponse

router = APIRouter(prefix="/api/user", tags=["User State"])


@router.get("/state", response_model=UserStateResponse)
def get_state(
    current_user: User = Depends(require_identity),
    service: UserStateService = Depends(get_user_state_service),
) -> UserStateResponse:
    return UserStateResponse.from_state(service.get_state(current_user.id))


@router.put("/state", response_model=UserStateResponse)
def update_state(
    current_user: User = Depends(require_identity),
    payload: Any = Depends(read_json_body),
    service: UserStateService = Depends(get_user_state_service),
) -> UserStateResponse:
    return UserStateResponse.from_state(service.set_state(current_user.id, payload))
