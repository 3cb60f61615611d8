"""
Schémas Pydantic pour le module ProProfile.

Contient les schémas pour :
- ProProfileCreate / ProProfileUpdate (entrées)
- RejectProProfile, ActivatePremium, RenewPremium (actions)
- ProProfileFilters (filtres de liste)
- ProProfileResponse (sortie, avec les indicateurs calculés)
"""
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from app.domain.entities import ProProfile
from app.domain.enums import OnboardingStep, ValidationStatus

SIRET_PATTERN = r"^[0-9]{14}$"
MAX_PREMIUM_DAYS = 3650  # 10 ans


# =============================================================================
# PRO PROFILE SCHEMAS
# =============================================================================

class ProProfileFields(BaseModel):
    """Champs modifiables communs à la création et à la mise à jour."""
    # Entreprise
    business_name: Optional[str] = Field(None, min_length=1, max_length=200)
    bio: Optional[str] = Field(None, max_length=1000)
    profession: Optional[str] = Field(None, min_length=1, max_length=100)
    experience: Optional[int] = Field(None, ge=0, le=100, description="Années d'expérience")
    certifications: Optional[List[str]] = None

    # Légal
    siret: Optional[str] = Field(None, pattern=SIRET_PATTERN, description="SIRET (14 chiffres)")
    corporate_name: Optional[str] = Field(None, min_length=1, max_length=200)
    legal_form: Optional[str] = Field(None, min_length=1, max_length=50)
    legal_status: Optional[str] = Field(None, min_length=1, max_length=50)

    # Localisation
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    postal_code: Optional[str] = Field(None, min_length=1, max_length=10)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius: Optional[int] = Field(None, ge=0, le=100, description="Rayon d'intervention (km)")

    # Médias
    photos: Optional[List[HttpUrl]] = None


class ProProfileCreate(ProProfileFields):
    """Schéma pour créer un profil professionnel."""
    user_id: str = Field(..., min_length=1, description="Identifiant Clerk du propriétaire")


class ProProfileUpdate(ProProfileFields):
    """Schéma pour mettre à jour un profil (champs partiels)."""
    onboarding_step: Optional[OnboardingStep] = None


class RejectProProfile(BaseModel):
    """Motif de refus d'un profil."""
    reason: str = Field(..., min_length=1, max_length=500)


class ActivatePremium(BaseModel):
    """Activation du premium."""
    duration_in_days: int = Field(..., ge=1, le=MAX_PREMIUM_DAYS)


class RenewPremium(BaseModel):
    """Renouvellement du premium."""
    additional_days: int = Field(..., ge=1, le=MAX_PREMIUM_DAYS)


class ProProfileFilters(BaseModel):
    """Filtres pour la recherche de profils (égalité stricte)."""
    profession: Optional[str] = None
    city: Optional[str] = None
    is_premium: Optional[bool] = None
    validation_status: Optional[ValidationStatus] = None
    is_active: Optional[bool] = None


class ProProfileResponse(BaseModel):
    """Schéma de réponse pour un profil professionnel."""
    id: str
    user_id: str
    business_name: Optional[str] = None
    bio: Optional[str] = None
    profession: Optional[str] = None
    experience: Optional[int] = None
    certifications: List[str] = Field(default_factory=list)
    siret: Optional[str] = None
    corporate_name: Optional[str] = None
    legal_form: Optional[str] = None
    legal_status: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[int] = None
    photos: List[str] = Field(default_factory=list)
    onboarding_step: OnboardingStep
    onboarding_progress: int
    onboarding_complete: bool
    validation_status: ValidationStatus
    rejection_reason: Optional[str] = None
    is_active: bool
    is_premium: bool
    subscription_end: Optional[datetime] = None
    rating: Optional[float] = None
    review_count: int = 0
    created_at: datetime
    updated_at: datetime

    # Indicateurs calculés à la lecture
    display_name: str
    is_premium_active: bool
    remaining_premium_days: int
    is_publicly_visible: bool
    is_complete: bool

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, profile: ProProfile) -> "ProProfileResponse":
        return cls(
            **{name: getattr(profile, name) for name in cls._entity_fields()},
            display_name=profile.get_display_name(),
            is_premium_active=profile.is_premium_active(),
            remaining_premium_days=profile.get_remaining_premium_days(),
            is_publicly_visible=profile.is_publicly_visible(),
            is_complete=profile.is_complete(),
        )

    @classmethod
    def _entity_fields(cls) -> List[str]:
        computed = {
            "display_name",
            "is_premium_active",
            "remaining_premium_days",
            "is_publicly_visible",
            "is_complete",
        }
        return [name for name in cls.model_fields if name not in computed]


class ProProfileList(BaseModel):
    """Liste de profils professionnels."""
    items: List[ProProfileResponse]
    total: int
