from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from .base import CamelModel
from ....domain.models import Address, Order, OrderItem


class AddressResponse(CamelModel):
    name: str
    phone: str
    line1: str
    city: str
    state: str
    pincode: str

    @classmethod
    def from_domain(cls, address: Address) -> AddressResponse:
        return cls(
            name=address.name,
            phone=address.phone,
            line1=address.line1,
            city=address.city,
            state=address.state,
            pincode=address.pincode,
        )


class OrderItemResponse(CamelModel):
    id: str
    name: str
    price: float
    breed: Optional[str] = None

    @classmethod
    def from_domain(cls, item: OrderItem) -> OrderItemResponse:
        return cls(id=item.id, name=item.name, price=item.price, breed=item.breed)


class OrderResponse(CamelModel):
    id: str
    user_id: str
    items: List[OrderItemResponse]
    total: float
    status: str
    date: str
    address: AddressResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> OrderResponse:
        return cls(
            id=order.id,
            user_id=order.user_id,
            items=[OrderItemResponse.from_domain(item) for item in order.items],
            total=order.total,
            status=order.status.value,
            date=order.date,
            address=AddressResponse.from_domain(order.address),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
