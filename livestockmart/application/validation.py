"""Explicit validation of request payloads.

Every function takes the decoded JSON body (or a fragment of it) and returns a
``ValidationResult`` holding either the typed value or the issues found. Services
call ``unwrap()`` to turn a failed result into ``ValidationError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from email_validator import EmailNotValidError, validate_email

from ..domain.errors import ValidationError
from ..domain.models import Address, CartEntry, LivestockType, OrderItem, OrderStatus

T = TypeVar("T")

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72
# Integers must fit a signed 64-bit store column.
MAX_INTEGER_MAGNITUDE = 2**63 - 1
ADDRESS_FIELDS = ("name", "phone", "line1", "city", "state", "pincode")


class ValidationFailure(str, Enum):
    MISSING = "missing"
    WRONG_TYPE = "wrong_type"
    BLANK = "blank"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_EMAIL = "invalid_email"
    INVALID_CHOICE = "invalid_choice"
    NEGATIVE = "negative"
    EMPTY = "empty"


_MESSAGES = {
    ValidationFailure.MISSING: "{field} is required",
    ValidationFailure.WRONG_TYPE: "{field} has the wrong type",
    ValidationFailure.BLANK: "{field} must not be blank",
    ValidationFailure.TOO_SHORT: "{field} is too short",
    ValidationFailure.TOO_LONG: "{field} is too long",
    ValidationFailure.INVALID_EMAIL: "{field} is not a valid email address",
    ValidationFailure.INVALID_CHOICE: "{field} is not an allowed value",
    ValidationFailure.NEGATIVE: "{field} must not be negative",
    ValidationFailure.EMPTY: "{field} must not be empty",
}


@dataclass(frozen=True)
class FieldIssue:
    field: str
    failure: ValidationFailure

    def describe(self) -> str:
        return _MESSAGES[self.failure].format(field=self.field)


@dataclass
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    issues: List[FieldIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def unwrap(self) -> T:
        if self.issues:
            raise ValidationError(issues=self.issues)
        return self.value  # type: ignore[return-value]


# Typed payloads -------------------------------------------------------------
@dataclass(frozen=True)
class Registration:
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True)
class StatePatch:
    """Fields of a user-state update; ``None`` means leave the stored value alone."""

    cart: Optional[List[CartEntry]] = None
    wishlist: Optional[List[str]] = None
    addresses: Optional[List[Address]] = None

    @property
    def is_empty(self) -> bool:
        return self.cart is None and self.wishlist is None and self.addresses is None


@dataclass(frozen=True)
class NewLivestock:
    name: str
    type: LivestockType
    breed: str
    age: float
    price: float
    image: str


@dataclass(frozen=True)
class NewOrder:
    items: List[OrderItem]
    total: float
    address: Address
    date: Optional[str] = None


# Primitive checks -----------------------------------------------------------
class _Collector:
    def __init__(self) -> None:
        self.issues: List[FieldIssue] = []

    def add(self, field_name: str, failure: ValidationFailure) -> None:
        self.issues.append(FieldIssue(field_name, failure))

    def text(
        self, data: Mapping[str, Any], key: str, prefix: str = "", *, required: bool = True
    ) -> Optional[str]:
        name = f"{prefix}{key}"
        value = data.get(key)
        if value is None:
            if required:
                self.add(name, ValidationFailure.MISSING)
            return None
        if not isinstance(value, str):
            self.add(name, ValidationFailure.WRONG_TYPE)
            return None
        if required and not value.strip():
            self.add(name, ValidationFailure.BLANK)
            return None
        return value

    def number(
        self, data: Mapping[str, Any], key: str, prefix: str = "", *, required: bool = True
    ) -> Optional[float]:
        name = f"{prefix}{key}"
        value = data.get(key)
        if value is None:
            if required:
                self.add(name, ValidationFailure.MISSING)
            return None
        if not _is_number(value):
            self.add(name, ValidationFailure.WRONG_TYPE)
            return None
        return value


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return abs(value) <= MAX_INTEGER_MAGNITUDE
    return math.isfinite(value)


def _body(payload: Any) -> Optional[Dict[str, Any]]:
    return payload if isinstance(payload, dict) else None


def _body_issue() -> List[FieldIssue]:
    return [FieldIssue("body", ValidationFailure.WRONG_TYPE)]


# Auth -------------------------------------------------------------------------
def validate_registration(payload: Any) -> ValidationResult[Registration]:
    data = _body(payload)
    if data is None:
        return ValidationResult(issues=_body_issue())
    check = _Collector()

    name = check.text(data, "name")
    if name is not None and len(name.strip()) < MIN_NAME_LENGTH:
        check.add("name", ValidationFailure.TOO_SHORT)

    email = check.text(data, "email")
    if email is not None:
        try:
            validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            check.add("email", ValidationFailure.INVALID_EMAIL)

    password = check.text(data, "password")
    if password is not None:
        if len(password) < MIN_PASSWORD_LENGTH:
            check.add("password", ValidationFailure.TOO_SHORT)
        elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            check.add("password", ValidationFailure.TOO_LONG)

    if check.issues:
        return ValidationResult(issues=check.issues)
    return ValidationResult(
        Registration(name=name.strip(), email=email.strip().lower(), password=password)
    )


def validate_credentials(payload: Any) -> ValidationResult[Credentials]:
    data = _body(payload)
    if data is None:
        return ValidationResult(issues=_body_issue())
    check = _Collector()
    email = check.text(data, "email")
    password = check.text(data, "password")
    if check.issues:
        return ValidationResult(issues=check.issues)
    return ValidationResult(Credentials(email=email.strip().lower(), password=password))


# User state -------------------------------------------------------------------
def validate_address(payload: Any, prefix: str = "address") -> ValidationResult[Address]:
    if payload is None:
        return ValidationResult(issues=[FieldIssue(prefix, ValidationFailure.MISSING)])
    if not isinstance(payload, dict):
        return ValidationResult(issues=[FieldIssue(prefix, ValidationFailure.WRONG_TYPE)])
    check = _Collector()
    values = {key: check.text(payload, key, f"{prefix}.") for key in ADDRESS_FIELDS}
    if check.issues:
        return ValidationResult(issues=check.issues)
    return ValidationResult(Address(**values))


def validate_cart_entry(payload: Any, prefix: str = "cart") -> ValidationResult[CartEntry]:
    if not isinstance(payload, dict):
        return ValidationResult(issues=[FieldIssue(prefix, ValidationFailure.WRONG_TYPE)])
    check = _Collector()
    livestock_id = check.text(payload, "livestockId", f"{prefix}.")
    selected = payload.get("selected", True)
    if selected is None:
        selected = True
    elif not isinstance(selected, bool):
        check.add(f"{prefix}.selected", ValidationFailure.WRONG_TYPE)
    if check.issues:
        return ValidationResult(issues=check.issues)
    return ValidationResult(CartEntry(livestock_id=livestock_id.strip(), selected=selected))


def validate_wishlist_entry(payload: Any, prefix: str = "wishlist") -> ValidationResult[str]:
    if isinstance(payload, dict):
        check = _Collector()
        livestock_id = check.text(payload, "livestockId", f"{prefix}.")
        if check.issues:
            return ValidationResult(issues=check.issues)
        return ValidationResult(livestock_id.strip())
    if not isinstance(payload, str):
        return ValidationResult(issues=[FieldIssue(prefix, ValidationFailure.WRONG_TYPE)])
    if not payload.strip():
        return ValidationResult(issues=[FieldIssue(prefix, ValidationFailure.BLANK)])
    return ValidationResult(payload.strip())


def validate_state_patch(payload: Any) -> ValidationResult[StatePatch]:
    """Validate a partial user-state update.

    Only list-valued ``cart``, ``wishlist`` and ``addresses`` keys are applied;
    anything else in the body is ignored. Each element of an applied list must be
    valid, otherwise the whole patch is rejected.
    """
    data = _body(payload)
    if data is None:
        return ValidationResult(issues=_body_issue())
    issues: List[FieldIssue] = []

    cart: Optional[List[CartEntry]] = None
    if isinstance(data.get("cart"), list):
        entries: Dict[str, CartEntry] = {}
        for index, raw in enumerate(data["cart"]):
            result = validate_cart_entry(raw, f"cart[{index}]")
            if result.ok:
                entries[result.value.livestock_id] = result.value
            issues.extend(result.issues)
        cart = list(entries.values())

    wishlist: Optional[List[str]] = None
    if isinstance(data.get("wishlist"), list):
        ids: Dict[str, None] = {}
        for index, raw in enumerate(data["wishlist"]):
            result = validate_wishlist_entry(raw, f"wishlist[{index}]")
            if result.ok:
                ids.setdefault(result.value)
            issues.extend(result.issues)
        wishlist = list(ids)

    addresses: Optional[List[Address]] = None
    if isinstance(data.get("addresses"), list):
        addresses = []
        for index, raw in enumerate(data["addresses"]):
            result = validate_address(raw, f"addresses[{index}]")
            if result.ok:
                addresses.append(result.value)
            issues.extend(result.issues)

    if issues:
        return ValidationResult(issues=issues)
    return ValidationResult(StatePatch(cart=cart, wishlist=wishlist, addresses=addresses))


# Catalog ----------------------------------------------------------------------
def validate_livestock(payload: Any) -> ValidationResult[NewLivestock]:
    data = _body(payload)
    if data is None:
        return ValidationResult(issues=_body_issue())
    check = _Collector()

    name = check.text(data, "name")

    livestock_type = LivestockType.GOAT
    raw_type = data.get("type")
    if raw_type is not None:
        try:
            livestock_type = LivestockType(raw_type)
        except ValueError:
            check.add("type", ValidationFailure.INVALID_CHOICE)

    breed = check.text(data, "breed", required=False)

    age = check.number(data, "age", required=False)
    if age is not None and age < 0:
        check.add("age", ValidationFailure.NEGATIVE)

    price = check.number(data, "price")
    if price is not None and price < 0:
        check.add("price", ValidationFailure.NEGATIVE)

    image = check.text(data, "image", required=False)

    if check.issues:
        return ValidationResult(issues=check.issues)
    return ValidationResult(
        NewLivestock(
            name=name.strip(),
            type=livestock_type,
            breed=(breed or "").strip(),
            age=age or 0,
            price=price,
            image=image or "",
        )
    )


# Orders -----------------------------------------------------------------------
def validate_order_item(payload: Any, prefix: str) -> ValidationResult[OrderItem]:
    if not isinstance(payload, dict):
        return ValidationResult(issues=[FieldIssue(prefix, ValidationFailure.WRONG_TYPE)])
    check = _Collector()
    item_id = check.text(payload, "id", f"{prefix}.")
    name = check.text(payload, "name", f"{prefix}.")
    price = check.number(payload, "price", f"{prefix}.")
    breed = check.text(payload, "breed", f"{prefix}.", required=False)
    if check.issues:
        return ValidationResult(issues=check.issues)
    return ValidationResult(OrderItem(id=item_id, name=name, price=price, breed=breed))


def validate_new_order(payload: Any) -> ValidationResult[NewOrder]:
    data = _body(payload)
    if data is None:
        return ValidationResult(issues=_body_issue())
    check = _Collector()

    items: List[OrderItem] = []
    raw_items = data.get("items")
    if raw_items is None:
        check.add("items", ValidationFailure.MISSING)
    elif not isinstance(raw_items, list):
        check.add("items", ValidationFailure.WRONG_TYPE)
    elif not raw_items:
        check.add("items", ValidationFailure.EMPTY)
    else:
        for index, raw in enumerate(raw_items):
            result = validate_order_item(raw, f"items[{index}]")
            if result.ok:
                items.append(result.value)
            check.issues.extend(result.issues)

    total = check.number(data, "total")

    address = validate_address(data.get("address"))
    check.issues.extend(address.issues)

    date = check.text(data, "date", required=False)

    raw_status = data.get("status")
    if raw_status is not None and raw_status != OrderStatus.PROCESSING.value:
        check.add("status", ValidationFailure.INVALID_CHOICE)

    if check.issues:
        return ValidationResult(issues=check.issues)
    return ValidationResult(
        NewOrder(
            items=items,
            total=total,
            address=address.value,
            date=date.strip() if date and date.strip() else None,
        )
    )


def validate_status_update(payload: Any) -> ValidationResult[OrderStatus]:
    data = _body(payload)
    if data is None:
        return ValidationResult(issues=_body_issue())
    raw_status = data.get("status")
    if raw_status is None:
        return ValidationResult(issues=[FieldIssue("status", ValidationFailure.MISSING)])
    try:
        return ValidationResult(OrderStatus(raw_status))
    except ValueError:
        return ValidationResult(issues=[FieldIssue("status", ValidationFailure.INVALID_CHOICE)])
