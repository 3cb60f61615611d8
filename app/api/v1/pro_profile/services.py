"""
Services métier pour le module ProProfile.

ProProfileService orchestre l'entité ProProfile : chargement par
identifiant (NotFoundError si absent), mutation via les méthodes métier
(onboarding, modération, premium), puis une seule écriture.
"""
import logging
from typing import Optional, List

from app.api.v1.pro_profile.schemas import (
    ProProfileCreate, ProProfileUpdate, ProProfileFilters,
)
from app.domain.entities import ProProfile
from app.domain.entities.pro_profile import BUSINESS_FIELDS, LEGAL_FIELDS, LOCATION_FIELDS
from app.domain.errors import ConflictError, NotFoundError
from app.repositories.ports import ProProfileRepository, UserRepository

logger = logging.getLogger(__name__)


def _pick(changes: dict, fields: tuple) -> dict:
    return {name: changes[name] for name in fields if name in changes}


# =============================================================================
# PRO PROFILE SERVICE
# =============================================================================

class ProProfileService:
    """Service pour la gestion des profils professionnels."""

    def __init__(
            self,
            pro_profile_repository: ProProfileRepository,
            user_repository: UserRepository,
    ):
        self.pro_profile_repository = pro_profile_repository
        self.user_repository = user_repository

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_pro_profile(self, data: ProProfileCreate) -> ProProfile:
        """
        Crée le profil professionnel d'un utilisateur.

        Raises:
            ConflictError: L'utilisateur possède déjà un profil
            NotFoundError: Utilisateur inexistant
            ValidationError: Valeur hors bornes
        """
        if self.pro_profile_repository.find_by_user_id(data.user_id) is not None:
            raise ConflictError("L'utilisateur possède déjà un profil professionnel")

        if self.user_repository.find_by_id(data.user_id) is None:
            raise NotFoundError("Utilisateur", data.user_id)

        profile = ProProfile.create(**data.model_dump(mode="json", exclude_unset=True))
        created = self.pro_profile_repository.create(profile)
        logger.info(f"Profil professionnel créé : {created.id} (utilisateur {created.user_id})")
        return created

    def update_pro_profile(self, profile_id: str, data: ProProfileUpdate) -> ProProfile:
        """
        Met à jour un profil (seuls les champs fournis).

        Raises:
            NotFoundError: Profil inexistant
            ValidationError: Valeur hors bornes ou étape inconnue
        """
        profile = self._get_or_raise(profile_id)
        changes = data.model_dump(mode="json", exclude_unset=True)

        business = _pick(changes, BUSINESS_FIELDS)
        if business:
            profile.update_business_info(**business)

        legal = _pick(changes, LEGAL_FIELDS)
        if legal:
            profile.update_legal_info(**legal)

        location = _pick(changes, LOCATION_FIELDS)
        if location:
            profile.update_location(**location)

        if "certifications" in changes:
            profile.set_certifications(changes["certifications"] or [])

        if "photos" in changes:
            profile.set_photos(changes["photos"] or [])

        if changes.get("onboarding_step") is not None:
            profile.set_onboarding_step(changes["onboarding_step"])

        return self.pro_profile_repository.update(profile_id, profile)

    def delete_pro_profile(self, profile_id: str) -> ProProfile:
        """
        Raises:
            NotFoundError: Profil inexistant
        """
        self._get_or_raise(profile_id)
        return self.pro_profile_repository.delete(profile_id)

    # =========================================================================
    # LECTURE
    # =========================================================================

    def find_by_id(self, profile_id: str) -> Optional[ProProfile]:
        return self.pro_profile_repository.find_by_id(profile_id)

    def find_by_user_id(self, user_id: str) -> Optional[ProProfile]:
        return self.pro_profile_repository.find_by_user_id(user_id)

    def find_all(self, filters: Optional[ProProfileFilters] = None) -> List[ProProfile]:
        """Liste les profils correspondant aux filtres (tous si aucun)."""
        filter = filters.model_dump(exclude_none=True) if filters else {}
        return self.pro_profile_repository.find_many(filter)

    # =========================================================================
    # MODÉRATION
    # =========================================================================

    def approve_pro_profile(self, profile_id: str) -> ProProfile:
        """
        Raises:
            NotFoundError: Profil inexistant
            ValidationError: Déjà approuvé ou onboarding non terminé
        """
        profile = self._get_or_raise(profile_id)
        profile.approve()
        logger.info(f"Profil professionnel approuvé : {profile_id}")
        return self.pro_profile_repository.update(profile_id, profile)

    def reject_pro_profile(self, profile_id: str, reason: str) -> ProProfile:
        """
        Raises:
            NotFoundError: Profil inexistant
            ValidationError: Motif vide ou profil déjà refusé
        """
        profile = self._get_or_raise(profile_id)
        profile.reject(reason)
        logger.info(f"Profil professionnel refusé : {profile_id}")
        return self.pro_profile_repository.update(profile_id, profile)

    # =========================================================================
    # PREMIUM
    # =========================================================================

    def activate_premium(self, profile_id: str, duration_in_days: int) -> ProProfile:
        """
        Raises:
            NotFoundError: Profil inexistant
            ValidationError: Durée non positive
        """
        profile = self._get_or_raise(profile_id)
        profile.activate_premium(duration_in_days)
        return self.pro_profile_repository.update(profile_id, profile)

    def renew_premium(self, profile_id: str, additional_days: int) -> ProProfile:
        """
        Raises:
            NotFoundError: Profil inexistant
            ValidationError: Nombre de jours non positif
        """
        profile = self._get_or_raise(profile_id)
        profile.renew_premium(additional_days)
        return self.pro_profile_repository.update(profile_id, profile)

    def deactivate_premium(self, profile_id: str) -> ProProfile:
        profile = self._get_or_raise(profile_id)
        profile.deactivate_premium()
        return self.pro_profile_repository.update(profile_id, profile)

    def _get_or_raise(self, profile_id: str) -> ProProfile:
        profile = self.pro_profile_repository.find_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Profil professionnel", profile_id)
        return profile
