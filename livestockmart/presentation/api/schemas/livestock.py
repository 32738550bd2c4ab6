from __future__ import annotations

from datetime import datetime

from .base import CamelModel
from ....domain.models import Livestock


class LivestockResponse(CamelModel):
    id: str
    name: str
    type: str
    breed: str
    age: float
    price: float
    image: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, item: Livestock) -> LivestockResponse:
        return cls(
            id=item.id,
            name=item.name,
            type=item.type.value,
            breed=item.breed,
            age=item.age,
            price=item.price,
            image=item.image,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
