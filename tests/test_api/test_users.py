"""
Tests API pour le module User.

Ce module teste les endpoints :
- /api/v1/users : CRUD Utilisateurs
- /api/v1/users/me : Utilisateur connecté
- /api/v1/users/email/{email} : Recherche par email

Authentification mockée (get_current_user surchargé).
"""

from fastapi import status

from app.core.auth import AuthenticatedUser, get_current_user
from app.core.security.clerk import ClerkSessionVerifier, get_clerk_verifier
from app.main import app


class TestAuthentication:
    """Les routes utilisateurs exigent un token."""

    def test_requires_token(self, client):
        response = client.get("/api/v1/users/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_token(self, client):
        """Un token illisible est refusé avec 401."""
        app.dependency_overrides[get_clerk_verifier] = lambda: ClerkSessionVerifier(
            jwks_url="https://clerk.example.com/.well-known/jwks.json",
        )
        response = client.get(
            "/api/v1/users/me", headers={"Authorization": "Bearer pas-un-jwt"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_jwks_not_configured(self, client):
        app.dependency_overrides[get_clerk_verifier] = lambda: ClerkSessionVerifier(jwks_url=None)
        response = client.get(
            "/api/v1/users/me", headers={"Authorization": "Bearer token"},
        )
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


class TestUserEndpoints:
    """Tests des endpoints /api/v1/users."""

    def test_me(self, client_client, user_client):
        response = client_client.get("/api/v1/users/me")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == user_client.id
        assert data["email"] == "claire.client@example.com"
        assert data["full_name"] == "Claire Client"
        assert data["role"] == "CLIENT"

    def test_me_not_registered(self, admin_client):
        response = admin_client.get("/api/v1/users/me")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_users(self, client_client, user_client, user_pro):
        response = client_client.get("/api/v1/users")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total"] == 2

    def test_list_users_filter_by_role(self, client_client, user_client, user_pro):
        response = client_client.get("/api/v1/users?role=PRO")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == user_pro.id

    def test_list_users_invalid_email_filter(self, client_client):
        response = client_client.get("/api/v1/users?email=pas-un-email")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_get_user(self, client_client, user_pro):
        response = client_client.get(f"/api/v1/users/{user_pro.id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] == "PRO"

    def test_get_user_not_found(self, client_client):
        response = client_client.get("/api/v1/users/user_unknown")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_user_by_email(self, client_client, user_pro):
        response = client_client.get("/api/v1/users/email/Paul.Pro@example.com")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == user_pro.id

    def test_create_own_account(self, client):
        """Un appelant authentifié crée son propre compte."""
        app.dependency_overrides[get_current_user] = lambda: AuthenticatedUser(id="user_new")
        response = client.post(
            "/api/v1/users",
            json={"id": "user_new", "role": "PRO", "email": "Nouveau@Example.com", "first_name": "Léa"},
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["id"] == "user_new"
        assert data["email"] == "nouveau@example.com"
        assert data["role"] == "PRO"

    def test_create_for_someone_else(self, client_client):
        response = client_client.post(
            "/api/v1/users", json={"id": "user_other", "role": "CLIENT"},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_existing(self, client_client, user_client):
        response = client_client.post(
            "/api/v1/users", json={"id": user_client.id, "role": "CLIENT"},
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_invalid_email(self, admin_client):
        response = admin_client.post(
            "/api/v1/users", json={"id": "user_new", "role": "CLIENT", "email": "not-an-email"},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_update_own_account(self, client_client, user_client):
        response = client_client.patch(
            f"/api/v1/users/{user_client.id}",
            json={"phone": "0699887766", "role": "PRO"},
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["phone"] == "0699887766"
        assert data["role"] == "PRO"
        assert data["first_name"] == "Claire"

    def test_update_other_account(self, client_client, user_pro):
        response = client_client.patch(f"/api/v1/users/{user_pro.id}", json={"phone": "0600000000"})
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_email_taken(self, client_client, user_client, user_pro):
        response = client_client.patch(
            f"/api/v1/users/{user_client.id}", json={"email": "paul.pro@example.com"},
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_admin_updates_any_account(self, admin_client, user_pro):
        response = admin_client.patch(f"/api/v1/users/{user_pro.id}", json={"last_name": "Martin"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["full_name"] == "Paul Martin"

    def test_update_not_found(self, admin_client):
        response = admin_client.patch("/api/v1/users/user_unknown", json={"phone": "0600000000"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_own_account(self, client_client, user_client):
        response = client_client.delete(f"/api/v1/users/{user_client.id}")
        assert response.status_code == status.HTTP_204_NO_CONTENT

        response = client_client.get(f"/api/v1/users/{user_client.id}")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_other_account(self, client_client, user_pro):
        response = client_client.delete(f"/api/v1/users/{user_pro.id}")
        assert response.status_code == status.HTTP_403_FORBIDDEN
