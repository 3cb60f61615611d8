"""
Modèles SQLAlchemy - Export centralisé.

Ce fichier permet d'importer tous les modèles depuis un seul endroit :
    from app.models import UserModel, ProProfileModel, WebhookDeliveryModel

Structure des sous-dossiers :
    user/           - Utilisateurs synchronisés depuis Clerk
    pro_profile/    - Profils professionnels
    webhook/        - Accusés de réception des webhooks

Les entités métier correspondantes vivent dans app/domain ; la conversion
modèle <-> entité est faite par les repositories.
"""

# === Mixins ===
from app.models.mixins import TimestampMixin

# === Modèles ===
from app.models.user.user import UserModel
from app.models.pro_profile.pro_profile import ProProfileModel
from app.models.webhook.webhook_delivery import WebhookDeliveryModel


# === Export explicite ===
__all__ = [
    "TimestampMixin",
    "UserModel",
    "ProProfileModel",
    "WebhookDeliveryModel",
]
