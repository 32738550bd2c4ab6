from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

from ..models import Address, CartEntry, Livestock, LivestockType, Order, OrderItem, OrderStatus, User


class UserRepository(Protocol):
    """Persistence functions related to shopper accounts and their saved state."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        ...

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        ...

    def update_user_state(
        self,
        user_id: str,
        *,
        cart: Optional[List[CartEntry]] = None,
        wishlist: Optional[List[str]] = None,
        addresses: Optional[List[Address]] = None,
    ) -> Optional[User]:
        ...


class LivestockRepository(Protocol):
    """Persistence functions related to the livestock catalog."""

    def create_livestock(
        self,
        name: str,
        type: LivestockType,
        breed: str,
        age: float,
        price: float,
        image: str,
    ) -> Livestock:
        ...

    def get_livestock(self, livestock_id: str) -> Optional[Livestock]:
        ...

    def get_livestock_many(self, livestock_ids: Iterable[str]) -> List[Livestock]:
        ...

    def list_livestock(self) -> List[Livestock]:
        ...

    def delete_livestock(self, livestock_id: str) -> bool:
        ...


class OrderRepository(Protocol):
    """Persistence functions related to placed orders."""

    def create_order(
        self,
        user_id: str,
        items: List[OrderItem],
        total: float,
        status: OrderStatus,
        date: str,
        address: Address,
    ) -> Order:
        ...

    def get_order(self, order_id: str) -> Optional[Order]:
        ...

    def get_orders_for_user(self, user_id: str) -> List[Order]:
        ...

    def update_order_status(
        self, order_id: str, status: OrderStatus, *, expected: OrderStatus
    ) -> Optional[Order]:
        """Write `status` only while the stored status is still `expected`.

        Returns the stored order either way, or None when it does not exist.
        """
        ...


class PersistenceGateway(
    UserRepository,
    LivestockRepository,
    OrderRepository,
    Protocol,
):
    """Composite gateway combining every persistence concern used by the app."""

    def close(self) -> None:
        ...
