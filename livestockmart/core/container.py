from dataclasses import dataclass

from ..application.services.auth_service import AuthService
from ..application.services.livestock_service import LivestockService
from ..application.services.order_service import OrderService
from ..application.services.user_state_service import UserStateService
from .config import Settings
from ..domain.ports.persistence import PersistenceGateway


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    persistence: PersistenceGateway
    auth_service: AuthService
    user_state_service: UserStateService
    livestock_service: LivestockService
    order_service: OrderService
