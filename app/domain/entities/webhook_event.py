"""
Entité WebhookEvent - Événement entrant du fournisseur d'identité (Clerk).

Cycle de vie : construction → vérification → traitement → abandon.
L'événement lui-même n'est pas persisté.

Le payload est opaque tant qu'il n'a pas été décodé : `extract_clerk_user_data()`
le valide selon le type d'événement et échoue (ValidationError) sur toute
forme inattendue plutôt que de propager des valeurs manquantes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from app.domain.entities.base import ensure_utc, utcnow
from app.domain.enums import WebhookEventType
from app.domain.errors import ValidationError

# Fenêtre de tolérance anti-rejeu (secondes)
DEFAULT_TOLERANCE_SECONDS = 300


# =============================================================================
# PAYLOADS CLERK
# =============================================================================

class ClerkEmailAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    email_address: str


class ClerkUserData(BaseModel):
    """Données utilisateur des événements user.created / user.updated."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    email_addresses: list[ClerkEmailAddress] = Field(default_factory=list)
    primary_email_address_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def email(self) -> Optional[str]:
        """Email principal, à défaut le premier email déclaré."""
        for address in self.email_addresses:
            if address.id and address.id == self.primary_email_address_id:
                return address.email_address
        if self.email_addresses:
            return self.email_addresses[0].email_address
        return None


class ClerkDeletedUserData(BaseModel):
    """Données de l'événement user.deleted."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    deleted: bool = True


ClerkPayload = Union[ClerkUserData, ClerkDeletedUserData]

_PAYLOAD_BY_TYPE: dict[WebhookEventType, type[BaseModel]] = {
    WebhookEventType.USER_CREATED: ClerkUserData,
    WebhookEventType.USER_UPDATED: ClerkUserData,
    WebhookEventType.USER_DELETED: ClerkDeletedUserData,
}


# =============================================================================
# ENTITÉ
# =============================================================================

@dataclass(frozen=True)
class WebhookEvent:
    """
    Événement webhook.

    Attributes:
        id: Identifiant de livraison (svix-id)
        type: Type d'événement brut (ex: "user.created")
        data: Payload opaque
        timestamp: Horodatage d'émission
        verified: Signature vérifiée
    """

    id: str
    type: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utcnow)
    verified: bool = False

    @classmethod
    def create_verified(
            cls,
            id: str,
            type: str,
            data: dict[str, Any],
            timestamp: datetime,
    ) -> "WebhookEvent":
        """Construit un événement dont la signature a été vérifiée."""
        return cls(
            id=id,
            type=type,
            data=data or {},
            timestamp=ensure_utc(timestamp),
            verified=True,
        )

    @property
    def event_type(self) -> Optional[WebhookEventType]:
        """Type connu de l'événement, ou None pour un type non géré."""
        try:
            return WebhookEventType(self.type)
        except ValueError:
            return None

    def is_user_event(self) -> bool:
        return self.event_type is not None

    def is_recent(self, tolerance_in_seconds: int = DEFAULT_TOLERANCE_SECONDS) -> bool:
        """Horodatage dans la fenêtre de tolérance (passé ou futur)."""
        diff = abs((utcnow() - self.timestamp).total_seconds())
        return diff <= tolerance_in_seconds

    def extract_clerk_user_data(self) -> ClerkPayload:
        """
        Décode le payload selon le type d'événement.

        Raises:
            ValidationError: Type non géré ou payload de forme inattendue
        """
        event_type = self.event_type
        if event_type is None:
            raise ValidationError(f"Type d'événement non géré : {self.type}")

        payload_model = _PAYLOAD_BY_TYPE[event_type]
        try:
            return payload_model.model_validate(self.data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Payload {self.type} invalide",
                errors={
                    ".".join(str(p) for p in err["loc"]) or "data": [err["msg"]]
                    for err in e.errors()
                },
            ) from e
