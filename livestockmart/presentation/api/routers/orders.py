from typing import Any, List

from fastapi import APIRouter, Depends, status

from ....application.services.order_service import OrderService
from ....core.dependencies import get_order_service
from ....domain.models import User
from ...api.dependencies import read_json_body, require_identity
from ...api.schemas.order import OrderResponse

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("", response_model=List[OrderResponse])
def list_orders(
    current_user: User = Depends(require_identity),
    service: OrderService = Depends(get_order_service),
) -> List[OrderResponse]:
    return [OrderResponse.from_domain(order) for order in service.list_for_user(current_user.id)]


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    current_user: User = Depends(require_identity),
    payload: Any = Depends(read_json_body),
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    return OrderResponse.from_domain(service.create_order(current_user.id, payload))


@router.put("/{order_id}", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    payload: Any = Depends(read_json_body),
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    return OrderResponse.from_domain(service.update_status(order_id, payload))
