"""Domain models for the LivestockMart application."""

from .livestock import Livestock, LivestockType
from .order import Order, OrderItem, OrderStatus
from .user import Address, CartEntry, User

__all__ = [
    "Address",
    "CartEntry",
    "Livestock",
    "LivestockType",
    "Order",
    "OrderItem",
    "OrderStatus",
    "User",
]
