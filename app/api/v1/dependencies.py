# app/api/v1/dependencies.py
"""
Dépendances générales de l'API v1 : racine de composition.

Chaque requête reçoit sa propre session SQLAlchemy ; les repositories et
les services sont construits à partir d'elle par injection explicite via
le constructeur. Aucun service n'est partagé entre requêtes.

Usage:
    @router.get("/users/{user_id}")
    def get_user(user_id: str, service: UserService = Depends(get_user_service)):
        ...

Les tests remplacent get_db (SQLite en mémoire) et, au besoin,
get_webhook_verifier via app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.v1.pro_profile.services import ProProfileService
from app.api.v1.user.services import UserService
from app.api.v1.webhooks.services import SvixWebhookVerifier, WebhookService, WebhookVerifier
from app.core.config import settings
from app.database.session import get_db
from app.repositories import (
    SqlAlchemyProProfileRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyWebhookDeliveryRepository,
)


# =============================================================================
# REPOSITORIES
# =============================================================================

def get_user_repository(db: Session = Depends(get_db)) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(db)


def get_pro_profile_repository(db: Session = Depends(get_db)) -> SqlAlchemyProProfileRepository:
    return SqlAlchemyProProfileRepository(db)


def get_webhook_delivery_repository(db: Session = Depends(get_db)) -> SqlAlchemyWebhookDeliveryRepository:
    return SqlAlchemyWebhookDeliveryRepository(db)


# =============================================================================
# SERVICES
# =============================================================================

def get_user_service(
        user_repository: SqlAlchemyUserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(user_repository)


def get_pro_profile_service(
        pro_profile_repository: SqlAlchemyProProfileRepository = Depends(get_pro_profile_repository),
        user_repository: SqlAlchemyUserRepository = Depends(get_user_repository),
) -> ProProfileService:
    return ProProfileService(pro_profile_repository, user_repository)


def get_webhook_verifier() -> WebhookVerifier:
    """Vérificateur Svix configuré avec CLERK_WEBHOOK_SECRET."""
    return SvixWebhookVerifier(settings.CLERK_WEBHOOK_SECRET)


def get_webhook_service(
        verifier: WebhookVerifier = Depends(get_webhook_verifier),
        user_service: UserService = Depends(get_user_service),
        delivery_repository: SqlAlchemyWebhookDeliveryRepository = Depends(get_webhook_delivery_repository),
) -> WebhookService:
    return WebhookService(verifier, user_service, delivery_repository)
