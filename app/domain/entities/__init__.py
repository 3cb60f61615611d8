from app.domain.entities.pro_profile import ProProfile
from app.domain.entities.user import User
from app.domain.entities.webhook_event import (
    ClerkDeletedUserData,
    ClerkUserData,
    WebhookEvent,
)

__all__ = [
    "User",
    "ProProfile",
    "WebhookEvent",
    "ClerkUserData",
    "ClerkDeletedUserData",
]
