"""
Modèle WebhookDelivery - Accusés de réception des webhooks Clerk.

Svix peut relivrer un même message : l'identifiant `svix-id` d'un
webhook traité avec succès est enregistré ici, et une relivraison
est ignorée.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database.base_class import Base
from app.domain.entities.base import utcnow


class WebhookDeliveryModel(Base):
    """Webhook traité (identifié par son message id Svix)."""

    __tablename__ = "webhook_deliveries"
    __table_args__ = {
        "comment": "Webhooks Clerk déjà traités (déduplication des relivraisons)"
    }

    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        doc="Message id Svix",
        info={"example": "msg_2abc"}
    )

    event_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        doc="Type d'événement",
        info={"example": "user.created"}
    )

    received_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        doc="Date de traitement"
    )

    def __repr__(self) -> str:
        return f"<WebhookDeliveryModel(id={self.id!r}, event_type={self.event_type!r})>"
