"""User domain model for shoppers and their saved state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass(slots=True)
class CartEntry:
    livestock_id: str
    selected: bool = True


@dataclass(slots=True)
class Address:
    name: str
    phone: str
    line1: str
    city: str
    state: str
    pincode: str


@dataclass(slots=True)
class User:
    """
    Registered shopper account.

    Attributes:
        id: Opaque identifier assigned on registration
        name: Display name
        email: Lower-cased email address (unique, never changes)
        password_hash: bcrypt hash, never serialized outward
        cart: Cart entries keyed by livestock id
        wishlist: Livestock ids the user saved for later
        addresses: Saved shipping addresses in the order the user keeps them
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    cart: List[CartEntry] = field(default_factory=list)
    wishlist: List[str] = field(default_factory=list)
    addresses: List[Address] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"
