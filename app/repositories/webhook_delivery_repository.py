"""
Repository SQLAlchemy des accusés de réception de webhooks.
"""

from app.domain.entities import WebhookEvent
from app.models.webhook.webhook_delivery import WebhookDeliveryModel
from app.repositories.base_repository import BaseRepository


class SqlAlchemyWebhookDeliveryRepository(BaseRepository[WebhookDeliveryModel]):
    model = WebhookDeliveryModel

    def exists(self, id: str) -> bool:
        return self._get(id) is not None

    def record(self, event: WebhookEvent) -> None:
        self.db.add(WebhookDeliveryModel(id=event.id, event_type=event.type))
        self._commit()
