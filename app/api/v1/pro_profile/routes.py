"""
Routes FastAPI pour le module ProProfile.

Endpoints pour :
- /pro-profiles : CRUD des profils professionnels
- /pro-profiles/user/{user_id} : Profil d'un utilisateur
- /pro-profiles/{id}/approve, /reject : Modération (administrateurs)
- /pro-profiles/{id}/premium/* : Gestion de l'abonnement premium

Lecture publique de la liste et du détail ; les écritures exigent un
token Clerk et sont réservées au propriétaire du profil ou à un
administrateur.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.v1.dependencies import get_pro_profile_service
from app.api.v1.pro_profile.schemas import (
    ProProfileCreate, ProProfileUpdate, ProProfileFilters,
    ProProfileResponse, ProProfileList,
    RejectProProfile, ActivatePremium, RenewPremium,
)
from app.api.v1.pro_profile.services import ProProfileService
from app.core.auth import AuthenticatedUser, ensure_can_access, get_current_user, require_admin
from app.domain.entities import ProProfile
from app.domain.enums import ValidationStatus
from app.domain.errors import ConflictError, NotFoundError, ValidationError

# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter(prefix="/pro-profiles", tags=["Pro Profiles"])


def _get_owned_profile(
        service: ProProfileService,
        profile_id: str,
        current_user: AuthenticatedUser,
) -> ProProfile:
    """Charge un profil et vérifie que l'appelant peut le modifier."""
    profile = service.find_by_id(profile_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profil professionnel non trouvé")
    ensure_can_access(current_user, profile.user_id)
    return profile


# =============================================================================
# CRUD ENDPOINTS
# =============================================================================

@router.get("", response_model=ProProfileList)
def list_pro_profiles(
        profession: Optional[str] = Query(None, description="Filtrer par métier"),
        city: Optional[str] = Query(None, description="Filtrer par ville"),
        is_premium: Optional[bool] = Query(None),
        validation_status: Optional[ValidationStatus] = Query(None),
        is_active: Optional[bool] = Query(None),
        service: ProProfileService = Depends(get_pro_profile_service),
):
    """Liste les profils professionnels avec filtres."""
    filters = ProProfileFilters(
        profession=profession,
        city=city,
        is_premium=is_premium,
        validation_status=validation_status,
        is_active=is_active,
    )
    profiles = service.find_all(filters)
    return ProProfileList(
        items=[ProProfileResponse.from_entity(p) for p in profiles],
        total=len(profiles),
    )


@router.get("/user/{user_id}", response_model=ProProfileResponse)
def get_pro_profile_by_user(
        user_id: str,
        service: ProProfileService = Depends(get_pro_profile_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Récupère le profil professionnel d'un utilisateur."""
    profile = service.find_by_user_id(user_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profil professionnel non trouvé")
    return ProProfileResponse.from_entity(profile)


@router.get("/{profile_id}", response_model=ProProfileResponse)
def get_pro_profile(
        profile_id: str,
        service: ProProfileService = Depends(get_pro_profile_service),
):
    """Récupère un profil professionnel par ID."""
    profile = service.find_by_id(profile_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profil professionnel non trouvé")
    return ProProfileResponse.from_entity(profile)


@router.post("", response_model=ProProfileResponse, status_code=status.HTTP_201_CREATED)
def create_pro_profile(
        data: ProProfileCreate,
        service: ProProfileService = Depends(get_pro_profile_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """
    Crée un profil professionnel.

    Un utilisateur ne possède qu'un seul profil (409 sinon).
    """
    ensure_can_access(current_user, data.user_id)
    try:
        return ProProfileResponse.from_entity(service.create_pro_profile(data))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.patch("/{profile_id}", response_model=ProProfileResponse)
def update_pro_profile(
        profile_id: str,
        data: ProProfileUpdate,
        service: ProProfileService = Depends(get_pro_profile_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Met à jour un profil professionnel (propriétaire ou admin)."""
    _get_owned_profile(service, profile_id, current_user)
    try:
        return ProProfileResponse.from_entity(service.update_pro_profile(profile_id, data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pro_profile(
        profile_id: str,
        service: ProProfileService = Depends(get_pro_profile_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Supprime un profil professionnel (propriétaire ou admin)."""
    _get_owned_profile(service, profile_id, current_user)
    try:
        service.delete_pro_profile(profile_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


# =============================================================================
# MODÉRATION (ADMINISTRATEURS)
# =============================================================================

@router.post("/{profile_id}/approve", response_model=ProProfileResponse)
def approve_pro_profile(
        profile_id: str,
        service: ProProfileService = Depends(get_pro_profile_service),
        admin: AuthenticatedUser = Depends(require_admin),
):
    """Approuve un profil dont l'onboarding est terminé."""
    try:
        return ProProfileResponse.from_entity(service.approve_pro_profile(profile_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/{profile_id}/reject", response_model=ProProfileResponse)
def reject_pro_profile(
        profile_id: str,
        data: RejectProProfile,
        service: ProProfileService = Depends(get_pro_profile_service),
        admin: AuthenticatedUser = Depends(require_admin),
):
    """Refuse un profil avec un motif."""
    try:
        return ProProfileResponse.from_entity(service.reject_pro_profile(profile_id, data.reason))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


# =============================================================================
# PREMIUM
# =============================================================================

@router.post("/{profile_id}/premium/activate", response_model=ProProfileResponse)
def activate_premium(
        profile_id: str,
        data: ActivatePremium,
        service: ProProfileService = Depends(get_pro_profile_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Active le premium pour la durée demandée."""
    _get_owned_profile(service, profile_id, current_user)
    try:
        return ProProfileResponse.from_entity(service.activate_premium(profile_id, data.duration_in_days))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/{profile_id}/premium/renew", response_model=ProProfileResponse)
def renew_premium(
        profile_id: str,
        data: RenewPremium,
        service: ProProfileService = Depends(get_pro_profile_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Prolonge le premium (repart de maintenant s'il a expiré)."""
    _get_owned_profile(service, profile_id, current_user)
    try:
        return ProProfileResponse.from_entity(service.renew_premium(profile_id, data.additional_days))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/{profile_id}/premium/deactivate", response_model=ProProfileResponse)
def deactivate_premium(
        profile_id: str,
        service: ProProfileService = Depends(get_pro_profile_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Désactive le premium."""
    _get_owned_profile(service, profile_id, current_user)
    try:
        return ProProfileResponse.from_entity(service.deactivate_premium(profile_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
