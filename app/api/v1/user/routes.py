"""
Routes FastAPI pour le module User.

Endpoints pour :
- /users : Gestion des utilisateurs
- /users/me : Utilisateur connecté
- /users/email/{email} : Recherche par email

Toutes les routes exigent un token de session Clerk. Un utilisateur ne
peut modifier ou supprimer que son propre compte, sauf administrateur.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.v1.dependencies import get_user_service
from app.api.v1.user.schemas import (
    UserCreate, UserUpdate, UserFilters, UserResponse, UserList,
)
from app.api.v1.user.services import UserService
from app.core.auth import AuthenticatedUser, ensure_can_access, get_current_user
from app.domain.enums import UserRole
from app.domain.errors import ConflictError, NotFoundError, ValidationError

# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter(prefix="/users", tags=["Users"])


# =============================================================================
# USER ENDPOINTS
# =============================================================================

@router.get("", response_model=UserList)
def list_users(
        role: Optional[UserRole] = Query(None, description="Filtrer par rôle"),
        email: Optional[str] = Query(None, description="Filtrer par email"),
        service: UserService = Depends(get_user_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Liste les utilisateurs avec filtres."""
    try:
        filters = UserFilters(role=role, email=email)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    users = service.get_many(filters)
    return UserList(items=[UserResponse.from_entity(u) for u in users], total=len(users))


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
        service: UserService = Depends(get_user_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Récupère l'utilisateur connecté."""
    user = service.get_by_id(current_user.id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Utilisateur non trouvé")
    return UserResponse.from_entity(user)


@router.get("/email/{email}", response_model=UserResponse)
def get_user_by_email(
        email: str,
        service: UserService = Depends(get_user_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Récupère un utilisateur par email."""
    user = service.get_by_email(email)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Utilisateur non trouvé")
    return UserResponse.from_entity(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
        user_id: str,
        service: UserService = Depends(get_user_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Récupère un utilisateur par son identifiant Clerk."""
    user = service.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Utilisateur non trouvé")
    return UserResponse.from_entity(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
        data: UserCreate,
        service: UserService = Depends(get_user_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """
    Crée un utilisateur (inscription explicite).

    Un utilisateur ne peut créer que son propre compte, sauf administrateur.
    """
    ensure_can_access(current_user, data.id)
    try:
        return UserResponse.from_entity(service.create_user(data))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
        user_id: str,
        data: UserUpdate,
        service: UserService = Depends(get_user_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """
    Met à jour un utilisateur (champs partiels).

    Le passage CLIENT -> PRO précède la création du profil professionnel.
    """
    ensure_can_access(current_user, user_id)
    try:
        return UserResponse.from_entity(service.update_user(user_id, data))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
        user_id: str,
        service: UserService = Depends(get_user_service),
        current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Supprime un utilisateur et son profil professionnel."""
    ensure_can_access(current_user, user_id)
    try:
        service.delete_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
