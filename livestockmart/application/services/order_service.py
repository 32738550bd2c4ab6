from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, List

from ..validation import validate_new_order, validate_status_update
from ...domain.errors import NotFound, ValidationError
from ...domain.models import Order, OrderStatus
from ...domain.ports.persistence import OrderRepository

logger = logging.getLogger(__name__)

DISPLAY_DATE_FORMAT = "%d/%m/%Y"


class OrderService:
    """Places orders and moves them through their status lifecycle.

    Orders snapshot their line items and address at creation time. The total is
    stored exactly as the client sent it and is never recomputed from the items.
    """

    def __init__(self, orders: OrderRepository, today: Callable[[], date] = date.today) -> None:
        self._orders = orders
        self._today = today

    def list_for_user(self, user_id: str) -> List[Order]:
        return self._orders.get_orders_for_user(user_id)

    def create_order(self, user_id: str, payload: Any) -> Order:
        new_order = validate_new_order(payload).unwrap()
        item_sum = sum(item.price for item in new_order.items)
        if item_sum != new_order.total:
            logger.debug(
                "Order total %s for user %s differs from item sum %s", new_order.total, user_id, item_sum
            )
        order = self._orders.create_order(
            user_id=user_id,
            items=new_order.items,
            total=new_order.total,
            status=OrderStatus.PROCESSING,
            date=new_order.date or self._today().strftime(DISPLAY_DATE_FORMAT),
            address=new_order.address,
        )
        logger.info("User %s placed order %s with %d item(s)", user_id, order.id, len(order.items))
        return order

    def update_status(self, order_id: str, payload: Any) -> Order:
        target = validate_status_update(payload).unwrap()
        order = self._orders.get_order(order_id)
        # A lost conditional write is re-checked against the status that won.
        while True:
            if not order:
                raise NotFound("Order not found")
            if not order.status.can_transition_to(target):
                raise ValidationError(
                    f"Cannot change order status from {order.status.value} to {target.value}"
                )
            if target is order.status:
                return order
            updated = self._orders.update_order_status(order_id, target, expected=order.status)
            if updated and updated.status is target:
                logger.info("Order %s moved from %s to %s", order_id, order.status.value, target.value)
                return updated
            logger.debug("Order %s changed while moving it to %s; re-checking", order_id, target.value)
            order = updated
