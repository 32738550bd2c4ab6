"""Pydantic schemas for the saved user state."""

from __future__ import annotations

from typing import List

from .base import CamelModel
from .order import AddressResponse, OrderResponse
from ....application.services.user_state_service import CartLine, CatalogLine, UserState


class WishlistEntryResponse(CamelModel):
    """Wishlist reference joined with the current catalog listing."""

    livestock_id: str
    name: str
    type: str
    breed: str
    price: float
    image: str
    available: bool

    @classmethod
    def from_line(cls, line: CatalogLine) -> WishlistEntryResponse:
        return cls(
            livestock_id=line.livestock_id,
            name=line.name,
            type=line.type,
            breed=line.breed,
            price=line.price,
            image=line.image,
            available=line.available,
        )


class CartEntryResponse(WishlistEntryResponse):
    selected: bool

    @classmethod
    def from_cart_line(cls, line: CartLine) -> CartEntryResponse:
        item = line.item
        return cls(
            livestock_id=item.livestock_id,
            selected=line.selected,
            name=item.name,
            type=item.type,
            breed=item.breed,
            price=item.price,
            image=item.image,
            available=item.available,
        )


class UserStateResponse(CamelModel):
    cart: List[CartEntryResponse]
    wishlist: List[WishlistEntryResponse]
    addresses: List[AddressResponse]
    orders: List[OrderResponse]

    @classmethod
    def from_state(cls, state: UserState) -> UserStateResponse:
        return cls(
            cart=[CartEntryResponse.from_cart_line(line) for line in state.cart],
            wishlist=[WishlistEntryResponse.from_line(line) for line in state.wishlist],
            addresses=[AddressResponse.from_domain(address) for address in state.addresses],
            orders=[OrderResponse.from_domain(order) for order in state.orders],
        )
