"""
Services métier pour le module Webhooks (Clerk via Svix).

Deux phases :
1. Vérification : SvixWebhookVerifier authentifie la requête brute
   (en-têtes svix-*, HMAC-SHA256, comparaison en temps constant), puis
   WebhookService contrôle la fraîcheur de l'horodatage (300 s).
2. Traitement : dispatch par type d'événement vers UserService.
   Les événements déjà traités (même svix-id) sont ignorés.
"""
import base64
import binascii
import hashlib
import hmac
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from app.api.v1.user.schemas import UserCreate, UserUpdate
from app.api.v1.user.services import UserService
from app.domain.entities import ClerkDeletedUserData, ClerkUserData, WebhookEvent
from app.domain.enums import UserRole, WebhookEventType
from app.domain.errors import DomainError, ValidationError, WebhookVerificationError
from app.repositories.ports import WebhookDeliveryRepository

logger = logging.getLogger(__name__)

# En-têtes Svix obligatoires
SVIX_ID_HEADER = "svix-id"
SVIX_TIMESTAMP_HEADER = "svix-timestamp"
SVIX_SIGNATURE_HEADER = "svix-signature"
REQUIRED_HEADERS = (SVIX_ID_HEADER, SVIX_TIMESTAMP_HEADER, SVIX_SIGNATURE_HEADER)

SECRET_PREFIX = "whsec_"
SIGNATURE_VERSION = "v1"


# =============================================================================
# RÉSULTATS DE TRAITEMENT
# =============================================================================

PROCESSED = "processed"
IGNORED = "ignored"
DUPLICATE = "duplicate"


# =============================================================================
# VÉRIFICATION SVIX
# =============================================================================

class WebhookVerifier(Protocol):
    def verify(self, payload: bytes, headers: Mapping[str, str]) -> Dict[str, Any]: ...


class SvixWebhookVerifier:
    """
    Vérifie la signature Svix d'un webhook Clerk.

    Message signé : `{svix-id}.{svix-timestamp}.{body}`, clé = partie
    base64 du secret `whsec_...`. L'en-tête svix-signature peut contenir
    plusieurs signatures `v1,<base64>` séparées par des espaces (rotation
    du secret) : une seule correspondance suffit.
    """

    def __init__(self, secret: Optional[str]):
        self.secret = secret

    def _signing_key(self) -> bytes:
        if not self.secret:
            raise WebhookVerificationError("Secret des webhooks non configuré")
        encoded = self.secret[len(SECRET_PREFIX):] if self.secret.startswith(SECRET_PREFIX) else self.secret
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise WebhookVerificationError("Secret des webhooks invalide") from e

    def sign(self, msg_id: str, timestamp: str, payload: bytes) -> str:
        """Signature attendue (base64) pour un message."""
        signed_message = b".".join([msg_id.encode("utf-8"), timestamp.encode("utf-8"), payload])
        digest = hmac.new(self._signing_key(), signed_message, hashlib.sha256).digest()
        return base64.b64encode(digest).decode("utf-8")

    def verify(self, payload: bytes, headers: Mapping[str, str]) -> Dict[str, Any]:
        """
        Authentifie le webhook et retourne le corps JSON décodé.

        Raises:
            WebhookVerificationError: En-tête manquant, secret absent,
                signature invalide ou corps illisible
        """
        missing = [name for name in REQUIRED_HEADERS if not headers.get(name)]
        if missing:
            raise WebhookVerificationError(f"En-têtes webhook manquants : {', '.join(missing)}")

        msg_id = headers[SVIX_ID_HEADER]
        timestamp = headers[SVIX_TIMESTAMP_HEADER]
        expected = self.sign(msg_id, timestamp, payload)

        received = []
        for entry in headers[SVIX_SIGNATURE_HEADER].split():
            version, _, signature = entry.partition(",")
            if version == SIGNATURE_VERSION and signature:
                received.append(signature)

        if not any(hmac.compare_digest(expected, signature) for signature in received):
            raise WebhookVerificationError("Signature du webhook invalide")

        try:
            body = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise WebhookVerificationError("Corps du webhook illisible") from e
        if not isinstance(body, dict):
            raise WebhookVerificationError("Corps du webhook illisible")
        return body


def parse_timestamp(value: str) -> datetime:
    """
    Convertit l'en-tête svix-timestamp (secondes Unix) en datetime UTC.

    Raises:
        WebhookVerificationError: Valeur non numérique
    """
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError) as e:
        raise WebhookVerificationError("Horodatage du webhook invalide") from e


# =============================================================================
# WEBHOOK SERVICE
# =============================================================================

class WebhookService:
    """Vérification et traitement des webhooks Clerk."""

    def __init__(
            self,
            verifier: WebhookVerifier,
            user_service: UserService,
            delivery_repository: WebhookDeliveryRepository,
    ):
        self.verifier = verifier
        self.user_service = user_service
        self.delivery_repository = delivery_repository

    # === Vérification ===

    def verify_webhook(self, payload: bytes, headers: Mapping[str, str]) -> WebhookEvent:
        """
        Authentifie un webhook et construit l'événement vérifié.

        Raises:
            WebhookVerificationError: Requête non authentifiable ou horodatage
                hors de la fenêtre de tolérance
        """
        try:
            body = self.verifier.verify(payload, headers)
            timestamp = parse_timestamp(headers[SVIX_TIMESTAMP_HEADER])

            event_type = body.get("type")
            if not isinstance(event_type, str) or not event_type:
                raise WebhookVerificationError("Type d'événement absent")
            data = body.get("data")
            if data is not None and not isinstance(data, dict):
                raise WebhookVerificationError("Données d'événement invalides")

            event = WebhookEvent.create_verified(
                id=headers[SVIX_ID_HEADER],
                type=event_type,
                data=data or {},
                timestamp=timestamp,
            )
            if not event.is_recent():
                raise WebhookVerificationError("Horodatage du webhook hors tolérance")
        except WebhookVerificationError as e:
            logger.warning(f"Webhook rejeté : {e.message}")
            raise

        return event

    # === Traitement ===

    def process_webhook(self, event: WebhookEvent) -> str:
        """
        Applique un événement vérifié sur les utilisateurs.

        Returns:
            PROCESSED, IGNORED (type non géré) ou DUPLICATE (déjà traité)

        Raises:
            WebhookVerificationError: Événement non vérifié
            ValidationError: Payload de forme inattendue
            DomainError: Échec de la création/mise à jour/suppression
        """
        if not event.verified:
            raise WebhookVerificationError("Événement webhook non vérifié")

        if self.delivery_repository.exists(event.id):
            logger.warning(f"Webhook {event.id} déjà traité, ignoré")
            return DUPLICATE

        if not event.is_user_event():
            logger.warning(f"Type d'événement webhook inconnu : {event.type}")
            return IGNORED

        try:
            payload = event.extract_clerk_user_data()
            if event.event_type == WebhookEventType.USER_CREATED:
                self._handle_user_created(payload)
            elif event.event_type == WebhookEventType.USER_UPDATED:
                self._handle_user_updated(payload)
            else:
                self._handle_user_deleted(payload)
        except DomainError as e:
            logger.error(f"Erreur de traitement du webhook {event.id} ({event.type}) : {e.message}")
            raise

        self.delivery_repository.record(event)
        return PROCESSED

    def _handle_user_created(self, data: ClerkUserData) -> None:
        command = _build(
            UserCreate,
            id=data.id,
            email=data.email,
            role=UserRole.CLIENT,
            first_name=data.first_name or None,
            last_name=data.last_name or None,
        )
        self.user_service.create_user(command)
        logger.info(f"Utilisateur créé depuis Clerk : {data.id}")

    def _handle_user_updated(self, data: ClerkUserData) -> None:
        changes = {
            "first_name": data.first_name or None,
            "last_name": data.last_name or None,
        }
        if data.email:
            changes["email"] = data.email
        self.user_service.update_user(data.id, _build(UserUpdate, **changes))
        logger.info(f"Utilisateur mis à jour depuis Clerk : {data.id}")

    def _handle_user_deleted(self, data: ClerkDeletedUserData) -> None:
        self.user_service.delete_user(data.id)
        logger.info(f"Utilisateur supprimé depuis Clerk : {data.id}")


def _build(schema, **values):
    """Construit une commande ; une donnée Clerk invalide devient une ValidationError."""
    try:
        return schema(**values)
    except PydanticValidationError as e:
        raise ValidationError(
            "Données utilisateur Clerk invalides",
            errors={
                ".".join(str(p) for p in err["loc"]): [err["msg"]]
                for err in e.errors()
            },
        ) from e
