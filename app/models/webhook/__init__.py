from app.models.webhook.webhook_delivery import WebhookDeliveryModel

__all__ = [
    "WebhookDeliveryModel",
]
