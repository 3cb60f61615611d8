"""
Entité ProProfile - Profil professionnel réservable.

Extension 1-1 d'un utilisateur PRO. L'entité porte trois cycles de vie :

1. Onboarding : ENTERPRISE_INFO → PROFESSIONAL_INFO → LOCATION → MEDIA → COMPLETED
2. Modération : PENDING → APPROVED | REJECTED, retour à PENDING par reset
3. Premium : calculé à la lecture depuis (is_premium, subscription_end)

Toutes les mutations passent par les méthodes métier, qui lèvent
ValidationError quand un invariant serait violé.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional

from app.domain.entities.base import check_fields, utcnow
from app.domain.enums import OnboardingStep, ValidationStatus
from app.domain.errors import ValidationError
from app.domain.value_objects import Siret

BUSINESS_FIELDS = ("business_name", "bio", "profession", "experience")
LEGAL_FIELDS = ("siret", "corporate_name", "legal_form", "legal_status")
LOCATION_FIELDS = ("address", "postal_code", "city", "latitude", "longitude", "radius")

GOOD_RATING = 4.0
EXCELLENT_RATING = 4.5


@dataclass
class ProProfile:
    """
    Profil professionnel.

    Attributes:
        id: Identifiant (UUID, attribué à la persistance)
        user_id: Utilisateur propriétaire
        business_name: Nom commercial
        profession: Métier exercé
        experience: Années d'expérience (>= 0)
        certifications: Certifications (sans doublon)
        siret: SIRET (14 chiffres)
        latitude / longitude: Coordonnées GPS
        radius: Rayon d'intervention en km (>= 0)
        photos: URLs des photos (sans doublon)
        onboarding_step: Étape courante de l'onboarding
        onboarding_progress: Progression en pourcentage
        onboarding_complete: Onboarding terminé
        validation_status: Statut de modération
        rejection_reason: Motif du refus
        is_active: Profil actif (visible si approuvé)
        is_premium: Abonnement premium souscrit
        subscription_end: Fin de l'abonnement premium
        rating: Note moyenne (0-5), None sans avis
        review_count: Nombre d'avis
    """

    user_id: str
    id: str = ""
    business_name: Optional[str] = None
    bio: Optional[str] = None
    profession: Optional[str] = None
    experience: Optional[int] = None
    certifications: list[str] = field(default_factory=list)
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[int] = None
    siret: Optional[str] = None
    corporate_name: Optional[str] = None
    legal_form: Optional[str] = None
    legal_status: Optional[str] = None
    onboarding_step: OnboardingStep = OnboardingStep.ENTERPRISE_INFO
    onboarding_progress: int = 0
    onboarding_complete: bool = False
    validation_status: ValidationStatus = ValidationStatus.PENDING
    rejection_reason: Optional[str] = None
    is_active: bool = False
    photos: list[str] = field(default_factory=list)
    is_premium: bool = False
    subscription_end: Optional[datetime] = None
    rating: Optional[float] = None
    review_count: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # =========================================================================
    # FABRIQUE
    # =========================================================================

    @classmethod
    def create(
            cls,
            user_id: str,
            certifications: Optional[list[str]] = None,
            photos: Optional[list[str]] = None,
            **fields: Any,
    ) -> "ProProfile":
        """
        Crée un nouveau profil : onboarding à ENTERPRISE_INFO, en attente de
        modération, inactif, sans premium ni avis.

        Args:
            user_id: Utilisateur propriétaire (obligatoire)
            certifications: Certifications initiales
            photos: Photos initiales
            **fields: Champs business, légaux et de localisation

        Raises:
            ValidationError: user_id manquant ou valeur hors bornes
        """
        if not user_id:
            raise ValidationError("L'identifiant utilisateur est requis")
        check_fields(fields, BUSINESS_FIELDS + LEGAL_FIELDS + LOCATION_FIELDS, "create")

        _check_experience(fields.get("experience"))
        _check_coordinates(fields.get("latitude"), fields.get("longitude"))
        _check_radius(fields.get("radius"))
        if fields.get("siret") is not None:
            fields["siret"] = str(Siret(fields["siret"]))

        return cls(
            user_id=user_id,
            certifications=_clean_list(certifications or []),
            photos=_clean_list(photos or []),
            **fields,
        )

    # =========================================================================
    # ONBOARDING
    # =========================================================================

    def advance_onboarding_step(self) -> None:
        """
        Passe à l'étape suivante de l'onboarding.

        Raises:
            ValidationError: Étape courante inconnue ou déjà terminale
        """
        current = self._current_step()
        following = current.next_step()
        if following is None:
            raise ValidationError("Onboarding déjà à l'étape finale")

        self.onboarding_step = following
        self.onboarding_progress = following.progress()
        if following.is_terminal:
            self.onboarding_complete = True
        self.touch()

    def set_onboarding_step(self, step: OnboardingStep | str) -> None:
        """
        Positionne directement l'onboarding sur une étape (saut libre).

        Revenir sur une étape antérieure ne remet pas en cause la
        complétion : le drapeau n'est jamais effacé.

        Raises:
            ValidationError: Étape inconnue
        """
        try:
            target = OnboardingStep.from_value(step)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        self.onboarding_step = target
        self.onboarding_progress = target.progress()
        if target.is_terminal:
            self.onboarding_complete = True
        self.touch()

    def complete_onboarding(self) -> None:
        """Termine l'onboarding quelle que soit l'étape courante."""
        self.onboarding_step = OnboardingStep.COMPLETED
        self.onboarding_progress = 100
        self.onboarding_complete = True
        self.touch()

    def is_onboarding_finished(self) -> bool:
        return self.onboarding_complete or self.onboarding_step == OnboardingStep.COMPLETED

    def _current_step(self) -> OnboardingStep:
        try:
            return OnboardingStep.from_value(self.onboarding_step)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    # =========================================================================
    # MODÉRATION
    # =========================================================================

    def approve(self) -> None:
        """
        Approuve le profil et l'active.

        Raises:
            ValidationError: Déjà approuvé, ou onboarding non terminé
        """
        if self.validation_status == ValidationStatus.APPROVED:
            raise ValidationError("Profil déjà approuvé")
        if not self.is_onboarding_finished():
            raise ValidationError("Impossible d'approuver le profil : onboarding non terminé")

        self.validation_status = ValidationStatus.APPROVED
        self.rejection_reason = None
        self.is_active = True
        self.touch()

    def reject(self, reason: str) -> None:
        """
        Refuse le profil et le désactive.

        Raises:
            ValidationError: Motif vide, ou profil déjà refusé
        """
        if not reason or not reason.strip():
            raise ValidationError("Le motif de refus est obligatoire")
        if self.validation_status == ValidationStatus.REJECTED:
            raise ValidationError("Profil déjà refusé")

        self.validation_status = ValidationStatus.REJECTED
        self.rejection_reason = reason
        self.is_active = False
        self.touch()

    def reset_validation(self) -> None:
        """Remet le profil en attente de modération (inactif)."""
        self.validation_status = ValidationStatus.PENDING
        self.rejection_reason = None
        self.is_active = False
        self.touch()

    def is_approved(self) -> bool:
        return self.validation_status == ValidationStatus.APPROVED

    def is_rejected(self) -> bool:
        return self.validation_status == ValidationStatus.REJECTED

    def is_publicly_visible(self) -> bool:
        return self.is_approved() and self.is_active

    def activate(self) -> None:
        """
        Réactive un profil approuvé.

        Raises:
            ValidationError: Profil non approuvé
        """
        if not self.is_approved():
            raise ValidationError("Activation impossible : profil non approuvé")
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    # =========================================================================
    # PREMIUM
    # =========================================================================

    def activate_premium(self, duration_in_days: int) -> None:
        """
        Active le premium pour `duration_in_days` jours à partir de maintenant.

        Raises:
            ValidationError: Durée nulle ou négative
        """
        if duration_in_days <= 0:
            raise ValidationError("La durée doit être positive")

        self.is_premium = True
        self.subscription_end = utcnow() + timedelta(days=duration_in_days)
        self.touch()

    def is_premium_active(self) -> bool:
        """Premium souscrit et non expiré (évalué à chaque appel)."""
        if not self.is_premium or self.subscription_end is None:
            return False
        return self.subscription_end > utcnow()

    def deactivate_premium(self) -> None:
        self.is_premium = False
        self.subscription_end = None
        self.touch()

    def renew_premium(self, additional_days: int) -> None:
        """
        Prolonge le premium.

        Un abonnement actif est prolongé à partir de sa date de fin ; un
        abonnement expiré (ou jamais souscrit) repart de maintenant.

        Raises:
            ValidationError: Nombre de jours nul ou négatif
        """
        if additional_days <= 0:
            raise ValidationError("Le nombre de jours supplémentaires doit être positif")

        if not self.is_premium_active():
            self.activate_premium(additional_days)
            return

        self.subscription_end = self.subscription_end + timedelta(days=additional_days)
        self.touch()

    def get_remaining_premium_days(self) -> int:
        """Jours de premium restants (arrondis au jour supérieur), 0 si inactif."""
        if not self.is_premium_active():
            return 0
        remaining = (self.subscription_end - utcnow()).total_seconds()
        return max(0, math.ceil(remaining / 86400))

    # =========================================================================
    # MISES À JOUR DU PROFIL
    # =========================================================================

    def update_business_info(self, **changes: Any) -> None:
        """Met à jour business_name, bio, profession et/ou experience."""
        check_fields(changes, BUSINESS_FIELDS, "update_business_info")
        if "experience" in changes:
            _check_experience(changes["experience"])
        self._apply(changes)

    def update_legal_info(self, **changes: Any) -> None:
        """Met à jour siret, corporate_name, legal_form et/ou legal_status."""
        check_fields(changes, LEGAL_FIELDS, "update_legal_info")
        if changes.get("siret") is not None:
            changes["siret"] = str(Siret(changes["siret"]))
        self._apply(changes)

    def update_location(self, **changes: Any) -> None:
        """Met à jour l'adresse, les coordonnées et/ou le rayon d'intervention."""
        check_fields(changes, LOCATION_FIELDS, "update_location")
        _check_coordinates(changes.get("latitude"), changes.get("longitude"))
        if "radius" in changes:
            _check_radius(changes["radius"])
        self._apply(changes)

    def has_complete_location(self) -> bool:
        return bool(
            self.address
            and self.postal_code
            and self.city
            and self.latitude is not None
            and self.longitude is not None
        )

    def _apply(self, changes: dict[str, Any]) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        self.touch()

    # =========================================================================
    # CERTIFICATIONS & PHOTOS
    # =========================================================================

    def add_certification(self, certification: str) -> None:
        self._add_item(self.certifications, certification, "Certification")

    def remove_certification(self, certification: str) -> None:
        self._remove_item(self.certifications, certification, "Certification")

    def set_certifications(self, certifications: list[str]) -> None:
        self.certifications = _clean_list(certifications)
        self.touch()

    def add_photo(self, photo_url: str) -> None:
        self._add_item(self.photos, photo_url, "Photo")

    def remove_photo(self, photo_url: str) -> None:
        self._remove_item(self.photos, photo_url, "Photo")

    def set_photos(self, photo_urls: list[str]) -> None:
        self.photos = _clean_list(photo_urls)
        self.touch()

    def has_photos(self) -> bool:
        return len(self.photos) > 0

    def _add_item(self, items: list[str], value: str, label: str) -> None:
        if not value or not value.strip():
            raise ValidationError(f"{label} vide")
        trimmed = value.strip()
        if trimmed in items:
            raise ValidationError(f"{label} déjà présente")
        items.append(trimmed)
        self.touch()

    def _remove_item(self, items: list[str], value: str, label: str) -> None:
        if value not in items:
            raise ValidationError(f"{label} introuvable")
        items.remove(value)
        self.touch()

    # =========================================================================
    # AVIS
    # =========================================================================

    def update_rating(self, new_rating: float, new_review_count: int) -> None:
        """
        Met à jour la note moyenne après ajout/suppression d'un avis.

        La note est arrondie à une décimale, et vaut None sans avis.

        Raises:
            ValidationError: Note hors [0, 5] ou nombre d'avis négatif
        """
        if new_rating < 0 or new_rating > 5:
            raise ValidationError("La note doit être comprise entre 0 et 5")
        if new_review_count < 0:
            raise ValidationError("Le nombre d'avis ne peut pas être négatif")

        self.rating = math.floor(new_rating * 10 + 0.5) / 10 if new_review_count > 0 else None
        self.review_count = new_review_count
        self.touch()

    def has_reviews(self) -> bool:
        return self.review_count > 0

    def has_good_rating(self) -> bool:
        return self.rating is not None and self.rating >= GOOD_RATING

    def has_excellent_rating(self) -> bool:
        return self.rating is not None and self.rating >= EXCELLENT_RATING

    # =========================================================================
    # HELPERS
    # =========================================================================

    def is_complete(self) -> bool:
        """Profil prêt pour la modération."""
        return bool(
            self.is_onboarding_finished()
            and self.business_name
            and self.profession
            and self.has_complete_location()
            and self.siret
        )

    def get_display_name(self) -> str:
        return self.business_name or "Professionnel"

    def touch(self) -> None:
        self.updated_at = utcnow()


# =============================================================================
# VALIDATEURS
# =============================================================================

def _check_experience(experience: Optional[int]) -> None:
    if experience is not None and experience < 0:
        raise ValidationError("L'expérience ne peut pas être négative")


def _check_radius(radius: Optional[int]) -> None:
    if radius is not None and radius < 0:
        raise ValidationError("Le rayon ne peut pas être négatif")


def _check_coordinates(latitude: Optional[float], longitude: Optional[float]) -> None:
    if latitude is not None and not -90 <= latitude <= 90:
        raise ValidationError("La latitude doit être comprise entre -90 et 90")
    if longitude is not None and not -180 <= longitude <= 180:
        raise ValidationError("La longitude doit être comprise entre -180 et 180")


def _clean_list(values: list[str]) -> list[str]:
    """Retire les valeurs vides en conservant l'ordre."""
    return [v for v in values if v and v.strip()]
