"""Order domain model and its status lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from .user import Address


class OrderStatus(str, Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Return True when ``target`` is reachable from this status in one step.

        Re-applying the current status is accepted so status updates stay idempotent.
        """
        if target is self:
            return True
        return target in _TRANSITIONS[self]


_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(slots=True)
class OrderItem:
    """Snapshot of a catalog item copied when the order was placed."""

    id: str
    name: str
    price: float
    breed: Optional[str] = None


@dataclass(slots=True)
class Order:
    id: str
    user_id: str
    items: List[OrderItem]
    total: float
    status: OrderStatus
    date: str
    address: Address
    created_at: datetime
    updated_at: datetime
