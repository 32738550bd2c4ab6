from typing import Any, List

from fastapi import APIRouter, Depends, status

from ....application.services.livestock_service import LivestockService
from ....core.dependencies import get_livestock_service
from ...api.dependencies import read_json_body
from ...api.schemas.auth import MessageResponse
from ...api.schemas.livestock import LivestockResponse

router = APIRouter(prefix="/api/livestock", tags=["Livestock"])


@router.get("", response_model=List[LivestockResponse])
def list_livestock(
    service: LivestockService = Depends(get_livestock_service),
) -> List[LivestockResponse]:
    return [LivestockResponse.from_domain(item) for item in service.list_items()]


@router.post("", response_model=LivestockResponse, status_code=status.HTTP_201_CREATED)
def create_livestock(
    payload: Any = Depends(read_json_body),
    service: LivestockService = Depends(get_livestock_service),
) -> LivestockResponse:
    return LivestockResponse.from_domain(service.create_item(payload))


@router.get("/{livestock_id}", response_model=LivestockResponse)
def get_livestock(
    livestock_id: str,
    service: LivestockService = Depends(get_livestock_service),
) -> LivestockResponse:
    return LivestockResponse.from_domain(service.get_item(livestock_id))


@router.delete("/{livestock_id}", response_model=MessageResponse)
def delete_livestock(
    livestock_id: str,
    service: LivestockService = Depends(get_livestock_service),
) -> MessageResponse:
    service.delete_item(livestock_id)
    return MessageResponse(message="Item deleted")
