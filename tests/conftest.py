"""
Fixtures pytest partagées pour les tests de la marketplace.

Ce module fournit :
- Une base de données SQLite en mémoire pour les tests (rapide, isolé)
- Les repositories et services construits sur cette base
- Des fixtures pour créer des objets de test (utilisateurs, profils)
- Des clients HTTP avec authentification mockée et webhooks signés
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Generator, Optional

# Configuration de test, avant tout import de l'application
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.api.v1.dependencies import get_webhook_verifier
from app.api.v1.pro_profile.schemas import ProProfileCreate
from app.api.v1.pro_profile.services import ProProfileService
from app.api.v1.user.schemas import UserCreate
from app.api.v1.user.services import UserService
from app.api.v1.webhooks.services import SvixWebhookVerifier
from app.core.auth import AuthenticatedUser, get_current_user
from app.database.session import get_db
from app.domain.entities import ProProfile, User
from app.domain.enums import UserRole
from app.main import app
from app.models.base import Base
from app.repositories import (
    SqlAlchemyProProfileRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyWebhookDeliveryRepository,
)

# Secret Svix de test (format whsec_<base64>)
WEBHOOK_SECRET = "whsec_" + base64.b64encode(b"marketplace-test-webhook-secret!").decode()

ADMIN_ID = "user_admin"
CLIENT_ID = "user_client"
PRO_ID = "user_pro"


# =============================================================================
# HELPERS - Webhooks signés
# =============================================================================

def sign_webhook(
        body: bytes,
        msg_id: str = "msg_test_1",
        timestamp: Optional[int] = None,
        secret: str = WEBHOOK_SECRET,
) -> dict:
    """
    Construit les en-têtes Svix d'un webhook signé.

    Args:
        body: Corps brut de la requête
        msg_id: svix-id
        timestamp: Secondes Unix (maintenant par défaut)
        secret: Secret whsec_ utilisé pour signer
    """
    timestamp = int(time.time()) if timestamp is None else timestamp
    key = base64.b64decode(secret[len("whsec_"):])
    signed = f"{msg_id}.{timestamp}.".encode() + body
    signature = base64.b64encode(hmac.new(key, signed, hashlib.sha256).digest()).decode()
    return {
        "svix-id": msg_id,
        "svix-timestamp": str(timestamp),
        "svix-signature": f"v1,{signature}",
        "content-type": "application/json",
    }


def clerk_user_payload(
        event_type: str,
        user_id: str = "user_clerk_1",
        email: Optional[str] = "jeanne.martin@example.com",
        first_name: Optional[str] = "Jeanne",
        last_name: Optional[str] = "Martin",
) -> bytes:
    """Corps JSON d'un événement utilisateur Clerk."""
    if event_type == "user.deleted":
        data = {"id": user_id, "deleted": True, "object": "user"}
    else:
        addresses = [{"id": "idn_1", "email_address": email}] if email else []
        data = {
            "id": user_id,
            "object": "user",
            "email_addresses": addresses,
            "primary_email_address_id": "idn_1" if email else None,
            "first_name": first_name,
            "last_name": last_name,
        }
    return json.dumps({"type": event_type, "object": "event", "data": data}).encode()


@pytest.fixture
def webhook_headers():
    """Fabrique d'en-têtes Svix signés."""
    return sign_webhook


@pytest.fixture
def clerk_payload():
    """Fabrique de corps d'événements Clerk."""
    return clerk_user_payload


# =============================================================================
# BASE DE DONNÉES
# =============================================================================

@pytest.fixture(scope="function")
def engine():
    """
    Crée un engine SQLite en mémoire pour les tests.

    Chaque test a sa propre base : les commits des repositories
    n'ont pas besoin d'être annulés.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,  # Mettre True pour debug SQL
    )

    # Activer les clés étrangères (ON DELETE CASCADE)
    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """Session de base de données du test."""
    session = Session(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORIES & SERVICES
# =============================================================================

@pytest.fixture
def user_repository(db_session: Session) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(db_session)


@pytest.fixture
def pro_profile_repository(db_session: Session) -> SqlAlchemyProProfileRepository:
    return SqlAlchemyProProfileRepository(db_session)


@pytest.fixture
def delivery_repository(db_session: Session) -> SqlAlchemyWebhookDeliveryRepository:
    return SqlAlchemyWebhookDeliveryRepository(db_session)


@pytest.fixture
def user_service(user_repository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def pro_profile_service(pro_profile_repository, user_repository) -> ProProfileService:
    return ProProfileService(pro_profile_repository, user_repository)


# =============================================================================
# OBJETS DE TEST
# =============================================================================

@pytest.fixture
def user_client(user_service: UserService) -> User:
    """Utilisateur CLIENT."""
    return user_service.create_user(UserCreate(
        id=CLIENT_ID,
        email="claire.client@example.com",
        role=UserRole.CLIENT,
        first_name="Claire",
        last_name="Client",
    ))


@pytest.fixture
def user_pro(user_service: UserService) -> User:
    """Utilisateur PRO (sans profil)."""
    return user_service.create_user(UserCreate(
        id=PRO_ID,
        email="paul.pro@example.com",
        role=UserRole.PRO,
        first_name="Paul",
        last_name="Dupont",
    ))


@pytest.fixture
def pro_profile(pro_profile_service: ProProfileService, user_pro: User) -> ProProfile:
    """Profil professionnel en début d'onboarding."""
    return pro_profile_service.create_pro_profile(ProProfileCreate(
        user_id=user_pro.id,
        business_name="Plomberie Dupont",
        profession="Plombier",
        experience=12,
        city="Lyon",
    ))


@pytest.fixture
def completed_pro_profile(pro_profile_repository, pro_profile: ProProfile) -> ProProfile:
    """Profil professionnel dont l'onboarding est terminé (prêt pour la modération)."""
    pro_profile.complete_onboarding()
    return pro_profile_repository.update(pro_profile.id, pro_profile)


# =============================================================================
# CLIENTS HTTP
# =============================================================================

def _make_client(db_session: Session, current_user: Optional[AuthenticatedUser]) -> TestClient:
    """
    Client de test avec dépendances surchargées :
    - db_session (SQLite) au lieu de PostgreSQL
    - Vérificateur Svix avec le secret de test
    - Utilisateur courant mocké (si fourni)
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_webhook_verifier] = lambda: SvixWebhookVerifier(WEBHOOK_SECRET)
    if current_user is not None:
        app.dependency_overrides[get_current_user] = lambda: current_user

    return TestClient(app)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Client anonyme (routes publiques et webhooks)."""
    with _make_client(db_session, None) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def pro_client(db_session: Session, user_pro: User) -> Generator[TestClient, None, None]:
    """Client authentifié en tant que professionnel."""
    with _make_client(db_session, AuthenticatedUser(id=user_pro.id)) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def client_client(db_session: Session, user_client: User) -> Generator[TestClient, None, None]:
    """Client authentifié en tant que client."""
    with _make_client(db_session, AuthenticatedUser(id=user_client.id)) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(db_session: Session) -> Generator[TestClient, None, None]:
    """Client authentifié en tant qu'administrateur."""
    with _make_client(db_session, AuthenticatedUser(id=ADMIN_ID, is_admin=True)) as test_client:
        yield test_client
    app.dependency_overrides.clear()
