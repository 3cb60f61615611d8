from app.repositories.ports import (
    ProProfileRepository,
    UserRepository,
    WebhookDeliveryRepository,
)
from app.repositories.pro_profile_repository import SqlAlchemyProProfileRepository
from app.repositories.user_repository import SqlAlchemyUserRepository
from app.repositories.webhook_delivery_repository import SqlAlchemyWebhookDeliveryRepository

__all__ = [
    "UserRepository",
    "ProProfileRepository",
    "WebhookDeliveryRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyProProfileRepository",
    "SqlAlchemyWebhookDeliveryRepository",
]
