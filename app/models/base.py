"""
Import centralisé de tous les modèles.

Ce fichier importe tous les modèles pour que SQLAlchemy et Alembic
puissent découvrir les métadonnées de toutes les tables.

Usage dans Alembic (env.py):
    from app.models.base import Base
    target_metadata = Base.metadata

Usage pour créer les tables:
    from app.models.base import Base
    from app.database.session import engine
    Base.metadata.create_all(bind=engine)
"""

from app.database.base_class import Base

# L'ordre est important : les tables référencées doivent être importées en premier
from app.models.user.user import UserModel  # noqa: F401
from app.models.pro_profile.pro_profile import ProProfileModel  # noqa: F401  dépend de users
from app.models.webhook.webhook_delivery import WebhookDeliveryModel  # noqa: F401

__all__ = ["Base"]
