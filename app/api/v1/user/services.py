"""
Services métier pour le module User.

UserService orchestre l'entité User et le repository injecté :
chargement, mutation via les méthodes métier, puis une seule écriture.
Les erreurs du domaine (ValidationError, NotFoundError, ConflictError)
sont propagées telles quelles aux routes.
"""
import logging
from typing import Optional, List

from app.api.v1.user.schemas import UserCreate, UserUpdate, UserFilters
from app.domain.entities import User
from app.domain.errors import ConflictError, NotFoundError
from app.repositories.ports import UserRepository

logger = logging.getLogger(__name__)


# =============================================================================
# USER SERVICE
# =============================================================================

class UserService:
    """Service pour la gestion des utilisateurs."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    # === Écriture ===

    def create_user(self, data: UserCreate) -> User:
        """
        Crée un utilisateur.

        L'entité est construite (et validée) avant tout accès au repository.

        Raises:
            ValidationError: Identifiant, email ou rôle invalide
            ConflictError: Utilisateur déjà existant
        """
        user = User.create(**data.model_dump(mode="json"))

        if self.user_repository.find_by_id(user.id) is not None:
            raise ConflictError(f"L'utilisateur {user.id} existe déjà")

        created = self.user_repository.create(user)
        logger.debug(f"Utilisateur créé : {created.id}")
        return created

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        """
        Met à jour un utilisateur (seuls les champs fournis).

        Raises:
            NotFoundError: Utilisateur inexistant
            ValidationError: Email ou rôle invalide
        """
        user = self._get_or_raise(user_id)
        changes = data.model_dump(mode="json", exclude_unset=True)

        email = changes.pop("email", None)
        if email:
            user.update_email(email)

        role = changes.pop("role", None)
        if role:
            user.change_role(role)

        if changes:
            user.update_profile(**changes)

        return self.user_repository.update(user_id, user)

    def delete_user(self, user_id: str) -> User:
        """
        Supprime physiquement un utilisateur (et son profil professionnel).

        Raises:
            NotFoundError: Utilisateur inexistant
        """
        self._get_or_raise(user_id)
        return self.user_repository.delete(user_id)

    # === Lecture ===

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.user_repository.find_by_id(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.user_repository.find_by_email(email)

    def get_many(self, filters: Optional[UserFilters] = None) -> List[User]:
        """Liste les utilisateurs correspondant aux filtres (tous si aucun)."""
        filter = filters.model_dump(exclude_none=True) if filters else {}
        return self.user_repository.find_many(filter)

    def _get_or_raise(self, user_id: str) -> User:
        user = self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("Utilisateur", user_id)
        return user
