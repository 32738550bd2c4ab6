from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..validation import validate_state_patch
from ...domain.errors import NotFound
from ...domain.models import Address, Livestock, Order, User
from ...domain.ports.persistence import LivestockRepository, OrderRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogLine:
    """A saved catalog reference joined with the live listing.

    A reference whose listing was deleted keeps its id and falls back to empty values.
    """

    livestock_id: str
    name: str = ""
    type: str = ""
    breed: str = ""
    price: float = 0
    image: str = ""
    available: bool = False


@dataclass(slots=True)
class CartLine:
    item: CatalogLine
    selected: bool


@dataclass(slots=True)
class UserState:
    cart: List[CartLine]
    wishlist: List[CatalogLine]
    addresses: List[Address]
    orders: List[Order]


class UserStateService:
    """Reads and updates a shopper's saved cart, wishlist and addresses.

    Updates are partial and idempotent. There is no concurrency check: two sessions
    of the same user saving at once race and the last write wins.
    """

    def __init__(
        self,
        users: UserRepository,
        livestock: LivestockRepository,
        orders: OrderRepository,
    ) -> None:
        self._users = users
        self._livestock = livestock
        self._orders = orders

    def get_state(self, user_id: str) -> UserState:
        user = self._users.get_user_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return self._build_state(user)

    def set_state(self, user_id: str, payload: Any) -> UserState:
        patch = validate_state_patch(payload).unwrap()
        if patch.is_empty:
            return self.get_state(user_id)
        user = self._users.update_user_state(
            user_id,
            cart=patch.cart,
            wishlist=patch.wishlist,
            addresses=patch.addresses,
        )
        if not user:
            raise NotFound("User not found")
        logger.debug(
            "Saved state for user %s (cart=%s wishlist=%s addresses=%s)",
            user_id,
            patch.cart is not None,
            patch.wishlist is not None,
            patch.addresses is not None,
        )
        return self._build_state(user)

    # ------------------------------------------------------------------
    def _build_state(self, user: User) -> UserState:
        referenced = [entry.livestock_id for entry in user.cart] + list(user.wishlist)
        catalog = self._catalog_index(referenced)
        return UserState(
            cart=[
                CartLine(item=self._join(entry.livestock_id, catalog), selected=entry.selected)
                for entry in user.cart
            ],
            wishlist=[self._join(livestock_id, catalog) for livestock_id in user.wishlist],
            addresses=list(user.addresses),
            orders=self._orders.get_orders_for_user(user.id),
        )

    def _catalog_index(self, livestock_ids: Iterable[str]) -> Dict[str, Livestock]:
        return {item.id: item for item in self._livestock.get_livestock_many(livestock_ids)}

    @staticmethod
    def _join(livestock_id: str, catalog: Dict[str, Livestock]) -> CatalogLine:
        listing: Optional[Livestock] = catalog.get(livestock_id)
        if listing is None:
            return CatalogLine(livestock_id=livestock_id)
        return CatalogLine(
            livestock_id=livestock_id,
            name=listing.name,
            type=listing.type.value,
            breed=listing.breed,
            price=listing.price,
            image=listing.image,
            available=True,
        )
