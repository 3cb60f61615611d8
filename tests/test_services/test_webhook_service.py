"""
Tests du WebhookService (vérification Svix et synchronisation des utilisateurs).
"""

import base64
import time

import pytest

from app.api.v1.webhooks.services import (
    DUPLICATE,
    IGNORED,
    PROCESSED,
    SvixWebhookVerifier,
    WebhookService,
    parse_timestamp,
)
from app.domain.entities import WebhookEvent
from app.domain.entities.base import utcnow
from app.domain.enums import UserRole
from app.domain.errors import NotFoundError, ValidationError, WebhookVerificationError

SECRET = "whsec_" + base64.b64encode(b"marketplace-test-webhook-secret!").decode()


@pytest.fixture
def verifier() -> SvixWebhookVerifier:
    return SvixWebhookVerifier(SECRET)


@pytest.fixture
def webhook_service(verifier, user_service, delivery_repository) -> WebhookService:
    return WebhookService(verifier, user_service, delivery_repository)


def _event(event_type: str, data: dict, msg_id: str = "msg_1") -> WebhookEvent:
    return WebhookEvent.create_verified(id=msg_id, type=event_type, data=data, timestamp=utcnow())


# =============================================================================
# VÉRIFICATION
# =============================================================================

class TestSvixVerifier:
    """Tests de la vérification de signature."""

    def test_valid_signature(self, verifier, webhook_headers, clerk_payload):
        body = clerk_payload("user.created")
        decoded = verifier.verify(body, webhook_headers(body, secret=SECRET))
        assert decoded["type"] == "user.created"

    def test_rotated_secret_list(self, verifier, webhook_headers, clerk_payload):
        """Une seule des signatures listées doit correspondre."""
        body = clerk_payload("user.created")
        headers = webhook_headers(body, secret=SECRET)
        headers["svix-signature"] = "v1,aW52YWxpZA== " + headers["svix-signature"]
        assert verifier.verify(body, headers)["type"] == "user.created"

    @pytest.mark.parametrize("header", ["svix-id", "svix-timestamp", "svix-signature"])
    def test_missing_header(self, verifier, webhook_headers, clerk_payload, header):
        body = clerk_payload("user.created")
        headers = webhook_headers(body, secret=SECRET)
        del headers[header]
        with pytest.raises(WebhookVerificationError):
            verifier.verify(body, headers)

    def test_tampered_body(self, verifier, webhook_headers, clerk_payload):
        headers = webhook_headers(clerk_payload("user.created"), secret=SECRET)
        with pytest.raises(WebhookVerificationError):
            verifier.verify(clerk_payload("user.deleted"), headers)

    def test_wrong_version(self, verifier, webhook_headers, clerk_payload):
        body = clerk_payload("user.created")
        headers = webhook_headers(body, secret=SECRET)
        headers["svix-signature"] = headers["svix-signature"].replace("v1,", "v2,")
        with pytest.raises(WebhookVerificationError):
            verifier.verify(body, headers)

    @pytest.mark.parametrize("secret", [None, "", "whsec_%%%"])
    def test_secret_not_usable(self, webhook_headers, clerk_payload, secret):
        body = clerk_payload("user.created")
        with pytest.raises(WebhookVerificationError):
            SvixWebhookVerifier(secret).verify(body, webhook_headers(body, secret=SECRET))

    def test_signed_non_json_body(self, verifier, webhook_headers):
        body = b"not json"
        with pytest.raises(WebhookVerificationError):
            verifier.verify(body, webhook_headers(body, secret=SECRET))

    def test_parse_timestamp(self):
        assert parse_timestamp("0").year == 1970
        with pytest.raises(WebhookVerificationError):
            parse_timestamp("hier")


class TestVerifyWebhook:
    """Tests de construction de l'événement vérifié."""

    def test_verified_event(self, webhook_service, webhook_headers, clerk_payload):
        body = clerk_payload("user.updated")
        event = webhook_service.verify_webhook(body, webhook_headers(body, msg_id="msg_42", secret=SECRET))
        assert event.verified
        assert event.id == "msg_42"
        assert event.type == "user.updated"
        assert event.data["id"] == "user_clerk_1"

    @pytest.mark.parametrize("offset", [-301, 301])
    def test_stale_timestamp(self, webhook_service, webhook_headers, clerk_payload, offset):
        body = clerk_payload("user.created")
        headers = webhook_headers(body, timestamp=int(time.time()) + offset, secret=SECRET)
        with pytest.raises(WebhookVerificationError):
            webhook_service.verify_webhook(body, headers)

    def test_missing_type(self, webhook_service, webhook_headers):
        body = b'{"data": {"id": "user_1"}}'
        with pytest.raises(WebhookVerificationError):
            webhook_service.verify_webhook(body, webhook_headers(body, secret=SECRET))


# =============================================================================
# TRAITEMENT
# =============================================================================

class TestProcessWebhook:
    """Tests du dispatch des événements utilisateur."""

    def test_user_created(self, webhook_service, user_service):
        event = _event("user.created", {
            "id": "user_clerk_1",
            "email_addresses": [{"id": "idn_1", "email_address": "jeanne@example.com"}],
            "primary_email_address_id": "idn_1",
            "first_name": "Jeanne",
            "last_name": "",
        })
        assert webhook_service.process_webhook(event) == PROCESSED

        user = user_service.get_by_id("user_clerk_1")
        assert user.role == UserRole.CLIENT
        assert str(user.email) == "jeanne@example.com"
        assert user.first_name == "Jeanne"
        assert user.last_name is None

    def test_user_updated(self, webhook_service, user_client):
        event = _event("user.updated", {
            "id": user_client.id,
            "email_addresses": [{"id": "idn_1", "email_address": "claire.new@example.com"}],
            "primary_email_address_id": "idn_1",
            "first_name": "Claire-Marie",
            "last_name": "Client",
        })
        assert webhook_service.process_webhook(event) == PROCESSED

        user = webhook_service.user_service.get_by_id(user_client.id)
        assert str(user.email) == "claire.new@example.com"
        assert user.first_name == "Claire-Marie"

    def test_user_deleted(self, webhook_service, user_service, user_client):
        event = _event("user.deleted", {"id": user_client.id, "deleted": True})
        assert webhook_service.process_webhook(event) == PROCESSED
        assert user_service.get_by_id(user_client.id) is None

    def test_unknown_type_ignored(self, webhook_service, delivery_repository):
        event = _event("session.created", {"id": "sess_1"})
        assert webhook_service.process_webhook(event) == IGNORED
        assert not delivery_repository.exists(event.id)

    def test_duplicate_delivery(self, webhook_service, user_service, user_client):
        """Une relivraison du même svix-id n'est pas ré-appliquée."""
        deleted = _event("user.deleted", {"id": user_client.id}, msg_id="msg_dup")
        assert webhook_service.process_webhook(deleted) == PROCESSED
        assert webhook_service.process_webhook(deleted) == DUPLICATE

    def test_unverified_event(self, webhook_service):
        event = WebhookEvent(id="msg_1", type="user.created", data={"id": "user_1"})
        with pytest.raises(WebhookVerificationError):
            webhook_service.process_webhook(event)

    def test_update_unknown_user(self, webhook_service, delivery_repository):
        event = _event("user.updated", {"id": "user_unknown", "first_name": "X"})
        with pytest.raises(NotFoundError):
            webhook_service.process_webhook(event)
        assert not delivery_repository.exists(event.id)

    def test_malformed_payload(self, webhook_service):
        with pytest.raises(ValidationError):
            webhook_service.process_webhook(_event("user.created", {"first_name": "Sans id"}))

    def test_invalid_clerk_email(self, webhook_service):
        event = _event("user.created", {
            "id": "user_clerk_2",
            "email_addresses": [{"id": "idn_1", "email_address": "pas-un-email"}],
        })
        with pytest.raises(ValidationError):
            webhook_service.process_webhook(event)

    def test_failure_is_logged(self, webhook_service, caplog):
        with caplog.at_level("ERROR"):
            with pytest.raises(NotFoundError):
                webhook_service.process_webhook(_event("user.deleted", {"id": "user_unknown"}))
        assert "user_unknown" in caplog.text
