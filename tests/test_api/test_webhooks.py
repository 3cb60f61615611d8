"""
Tests API pour le module Webhooks et les endpoints de santé.

Les webhooks sont signés avec le secret de test (voir conftest.sign_webhook).
"""

import time

from fastapi import status

from app.api.v1.dependencies import get_webhook_verifier
from app.api.v1.webhooks.services import SvixWebhookVerifier
from app.main import app

URL = "/api/v1/webhooks/clerk"


class TestClerkWebhook:
    """Tests de POST /api/v1/webhooks/clerk."""

    def test_user_created(self, client, webhook_headers, clerk_payload):
        body = clerk_payload("user.created", user_id="user_clerk_1")
        response = client.post(URL, content=body, headers=webhook_headers(body, msg_id="msg_1"))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "status": "processed",
            "event_id": "msg_1",
            "event_type": "user.created",
        }

    def test_created_then_updated_then_deleted(self, client, admin_client, webhook_headers, clerk_payload):
        body = clerk_payload("user.created", user_id="user_clerk_1")
        client.post(URL, content=body, headers=webhook_headers(body, msg_id="msg_1"))

        body = clerk_payload("user.updated", user_id="user_clerk_1", last_name="Durand")
        response = client.post(URL, content=body, headers=webhook_headers(body, msg_id="msg_2"))
        assert response.json()["status"] == "processed"

        user = admin_client.get("/api/v1/users/user_clerk_1").json()
        assert user["role"] == "CLIENT"
        assert user["full_name"] == "Jeanne Durand"

        body = clerk_payload("user.deleted", user_id="user_clerk_1")
        response = client.post(URL, content=body, headers=webhook_headers(body, msg_id="msg_3"))
        assert response.json()["status"] == "processed"

        response = admin_client.get("/api/v1/users/user_clerk_1")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_duplicate_delivery(self, client, webhook_headers, clerk_payload):
        body = clerk_payload("user.created")
        headers = webhook_headers(body, msg_id="msg_dup")

        assert client.post(URL, content=body, headers=headers).json()["status"] == "processed"
        response = client.post(URL, content=body, headers=headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "duplicate"

    def test_unknown_event_type(self, client, webhook_headers):
        body = b'{"type": "organization.created", "data": {"id": "org_1"}}'
        response = client.post(URL, content=body, headers=webhook_headers(body))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ignored"

    def test_missing_headers(self, client, clerk_payload):
        response = client.post(URL, content=clerk_payload("user.created"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_signature(self, client, webhook_headers, clerk_payload):
        body = clerk_payload("user.created")
        headers = webhook_headers(body)
        headers["svix-signature"] = "v1,aW52YWxpZA=="
        response = client.post(URL, content=body, headers=headers)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_stale_timestamp(self, client, webhook_headers, clerk_payload):
        body = clerk_payload("user.created")
        headers = webhook_headers(body, timestamp=int(time.time()) - 600)
        response = client.post(URL, content=body, headers=headers)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_secret_not_configured(self, client, webhook_headers, clerk_payload):
        app.dependency_overrides[get_webhook_verifier] = lambda: SvixWebhookVerifier(None)
        body = clerk_payload("user.created")
        response = client.post(URL, content=body, headers=webhook_headers(body))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_user_already_exists(self, client, user_client, webhook_headers, clerk_payload):
        body = clerk_payload("user.created", user_id=user_client.id, email=None)
        response = client.post(URL, content=body, headers=webhook_headers(body))
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_unknown_user(self, client, webhook_headers, clerk_payload):
        body = clerk_payload("user.deleted", user_id="user_unknown")
        response = client.post(URL, content=body, headers=webhook_headers(body))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_malformed_payload(self, client, webhook_headers):
        body = b'{"type": "user.created", "data": {"first_name": "Sans id"}}'
        response = client.post(URL, content=body, headers=webhook_headers(body))
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestHealth:
    """Endpoints de santé."""

    def test_api_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] in ("healthy", "degraded")
