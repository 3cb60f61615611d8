"""
Enums du domaine.

Ces enums sont partagés par les entités, les modèles SQLAlchemy
(convertis en types ENUM PostgreSQL via SQLEnum) et les schémas Pydantic.
"""

from enum import Enum
from typing import Optional


# =============================================================================
# UTILISATEURS
# =============================================================================

class UserRole(str, Enum):
    """Rôle d'un utilisateur sur la marketplace."""
    CLIENT = "CLIENT"                    # Client qui réserve des prestations
    PRO = "PRO"                          # Professionnel avec profil réservable


# =============================================================================
# PROFILS PROFESSIONNELS
# =============================================================================

class OnboardingStep(str, Enum):
    """
    Étapes de l'onboarding professionnel, dans l'ordre strict du parcours.

    L'ordre de déclaration fait foi : `position`, `next_step()` et
    `progress()` s'appuient dessus.
    """
    ENTERPRISE_INFO = "ENTERPRISE_INFO"      # SIRET, raison sociale, forme juridique
    PROFESSIONAL_INFO = "PROFESSIONAL_INFO"  # Métier, expérience, certifications
    LOCATION = "LOCATION"                    # Adresse et rayon d'intervention
    MEDIA = "MEDIA"                          # Photos
    COMPLETED = "COMPLETED"                  # Parcours terminé

    @classmethod
    def ordered(cls) -> list["OnboardingStep"]:
        """Étapes dans l'ordre du parcours."""
        return list(cls)

    @property
    def position(self) -> int:
        """Position (0-based) de l'étape dans le parcours."""
        return OnboardingStep.ordered().index(self)

    @property
    def is_terminal(self) -> bool:
        return self is OnboardingStep.COMPLETED

    def next_step(self) -> Optional["OnboardingStep"]:
        """Étape suivante, ou None si l'étape est terminale."""
        return _NEXT_STEP.get(self)

    def progress(self) -> int:
        """Pourcentage de progression une fois cette étape atteinte."""
        total = len(OnboardingStep.ordered())
        return round((self.position + 1) * 100 / total)

    @classmethod
    def from_value(cls, value: "OnboardingStep | str") -> "OnboardingStep":
        """
        Convertit une valeur en étape.

        Raises:
            ValueError: Si la valeur ne correspond à aucune étape
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Étape d'onboarding invalide : {value}") from None


_NEXT_STEP: dict[OnboardingStep, OnboardingStep] = {
    current: following
    for current, following in zip(OnboardingStep.ordered(), OnboardingStep.ordered()[1:])
}


class ValidationStatus(str, Enum):
    """Statut de modération d'un profil professionnel."""
    PENDING = "PENDING"                  # En attente de modération
    APPROVED = "APPROVED"                # Validé, peut être publié
    REJECTED = "REJECTED"                # Refusé (motif obligatoire)


# =============================================================================
# WEBHOOKS
# =============================================================================

class WebhookEventType(str, Enum):
    """Types d'événements Clerk traités par l'application."""
    USER_CREATED = "user.created"
    USER_UPDATED = "user.updated"
    USER_DELETED = "user.deleted"
