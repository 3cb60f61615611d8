"""
Modèle ProProfile - Profils professionnels réservables.

Ce module définit la table `pro_profiles`, extension 1-1 d'un utilisateur
PRO : informations d'entreprise, localisation, onboarding, modération,
premium et agrégats d'avis.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.base_class import Base
from app.domain.enums import OnboardingStep, ValidationStatus
from app.models.mixins import TimestampMixin
from app.models.types import JSONList

if TYPE_CHECKING:
    from app.models.user.user import UserModel


# =============================================================================
# MODÈLE
# =============================================================================

class ProProfileModel(TimestampMixin, Base):
    """
    Représente le profil d'un professionnel.

    Un utilisateur possède au plus un profil (user_id unique) ; le profil
    est supprimé avec son utilisateur.

    Attributes:
        id: UUID du profil
        user_id: Utilisateur propriétaire
        onboarding_step: Étape courante de l'onboarding
        validation_status: PENDING, APPROVED, REJECTED
        is_premium / subscription_end: Abonnement premium
        rating / review_count: Agrégats d'avis
    """

    __tablename__ = "pro_profiles"
    __table_args__ = (
        CheckConstraint("experience IS NULL OR experience >= 0", name="ck_pro_profiles_experience"),
        CheckConstraint("radius IS NULL OR radius >= 0", name="ck_pro_profiles_radius"),
        CheckConstraint("review_count >= 0", name="ck_pro_profiles_review_count"),
        CheckConstraint(
            "onboarding_progress >= 0 AND onboarding_progress <= 100",
            name="ck_pro_profiles_onboarding_progress",
        ),
        {"comment": "Profils professionnels (onboarding, modération, premium)"},
    )

    # ========================
    # Clé primaire
    # ========================
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="UUID du profil"
    )

    # ========================
    # Clé étrangère
    # ========================
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
        doc="Utilisateur propriétaire",
        info={"description": "Un seul profil par utilisateur"}
    )

    # ========================
    # Informations d'entreprise
    # ========================
    business_name: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
        doc="Nom commercial",
        info={"example": "Plomberie Dupont"}
    )

    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True, doc="Présentation")

    profession: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
        doc="Métier exercé",
        info={"example": "Plombier"}
    )

    experience: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        doc="Années d'expérience"
    )

    certifications: Mapped[List[str]] = mapped_column(
        JSONList,
        nullable=False,
        default=list,
        doc="Certifications",
        info={"description": "Liste de chaînes sans doublon"}
    )

    # ========================
    # Informations légales
    # ========================
    siret: Mapped[Optional[str]] = mapped_column(
        String(14),
        nullable=True,
        doc="Numéro SIRET",
        info={"description": "14 chiffres", "example": "73282932000074"}
    )

    corporate_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, doc="Raison sociale")
    legal_form: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, doc="Forme juridique")
    legal_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, doc="Statut légal")

    # ========================
    # Localisation
    # ========================
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, doc="Adresse")
    postal_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, doc="Code postal")

    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
        doc="Ville"
    )

    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True, doc="Latitude GPS")
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True, doc="Longitude GPS")

    radius: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        doc="Rayon d'intervention",
        info={"unit": "km"}
    )

    # ========================
    # Médias
    # ========================
    photos: Mapped[List[str]] = mapped_column(
        JSONList,
        nullable=False,
        default=list,
        doc="URLs des photos"
    )

    # ========================
    # Onboarding
    # ========================
    onboarding_step: Mapped[OnboardingStep] = mapped_column(
        Enum(OnboardingStep, name="onboarding_step_enum", create_constraint=True),
        nullable=False,
        default=OnboardingStep.ENTERPRISE_INFO,
        doc="Étape courante de l'onboarding"
    )

    onboarding_progress: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Progression de l'onboarding",
        info={"unit": "%"}
    )

    onboarding_complete: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Onboarding terminé"
    )

    # ========================
    # Modération
    # ========================
    validation_status: Mapped[ValidationStatus] = mapped_column(
        Enum(ValidationStatus, name="validation_status_enum", create_constraint=True),
        nullable=False,
        default=ValidationStatus.PENDING,
        index=True,
        doc="Statut de modération",
        info={"description": "PENDING, APPROVED, REJECTED"}
    )

    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True, doc="Motif du refus")

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        doc="Profil actif"
    )

    # ========================
    # Premium
    # ========================
    is_premium: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        doc="Premium souscrit"
    )

    subscription_end: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Fin de l'abonnement premium",
        info={"description": "NULL si jamais souscrit ou désactivé"}
    )

    # ========================
    # Avis
    # ========================
    rating: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        doc="Note moyenne (0-5)",
        info={"description": "NULL tant qu'aucun avis"}
    )

    review_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Nombre d'avis"
    )

    # === Relations ===

    user: Mapped["UserModel"] = relationship(
        "UserModel",
        back_populates="pro_profile",
    )

    def __repr__(self) -> str:
        return f"<ProProfileModel(id={self.id!r}, user_id={self.user_id!r}, status={self.validation_status})>"
