import logging
from typing import Any, List

from ..validation import validate_livestock
from ...domain.errors import NotFound
from ...domain.models import Livestock
from ...domain.ports.persistence import LivestockRepository

logger = logging.getLogger(__name__)


class LivestockService:
    """Catalog listings: plain storage with field validation."""

    def __init__(self, livestock: LivestockRepository) -> None:
        self._livestock = livestock

    def list_items(self) -> List[Livestock]:
        return self._livestock.list_livestock()

    def get_item(self, livestock_id: str) -> Livestock:
        item = self._livestock.get_livestock(livestock_id)
        if not item:
            raise NotFound("Livestock not found")
        return item

    def create_item(self, payload: Any) -> Livestock:
        listing = validate_livestock(payload).unwrap()
        item = self._livestock.create_livestock(
            name=listing.name,
            type=listing.type,
            breed=listing.breed,
            age=listing.age,
            price=listing.price,
            image=listing.image,
        )
        logger.info("Created livestock %s (%s)", item.id, item.type.value)
        return item

    def delete_item(self, livestock_id: str) -> None:
        if not self._livestock.delete_livestock(livestock_id):
            raise NotFound("Livestock not found")
        logger.info("Deleted livestock %s", livestock_id)
