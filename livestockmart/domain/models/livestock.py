from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class LivestockType(str, Enum):
    GOAT = "Goat"
    SHEEP = "Sheep"
    BUFFALO = "Buffalo"
    COW = "Cow"
    OTHER = "Other"


@dataclass(slots=True)
class Livestock:
    id: str
    name: str
    type: LivestockType
    breed: str
    age: float
    price: float
    image: str
    created_at: datetime
    updated_at: datetime
