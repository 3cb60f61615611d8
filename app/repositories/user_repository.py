"""
Repository SQLAlchemy des utilisateurs.
"""

from typing import Any, Mapping, Optional

from sqlalchemy import select

from app.domain.entities import User
from app.domain.entities.base import ensure_utc
from app.domain.errors import NotFoundError
from app.domain.value_objects import Email
from app.models.user.user import UserModel
from app.repositories.base_repository import BaseRepository


def to_domain(model: UserModel) -> User:
    return User(
        id=model.id,
        role=model.role,
        email=Email(model.email) if model.email else None,
        first_name=model.first_name,
        last_name=model.last_name,
        phone=model.phone,
        avatar=model.avatar,
        created_at=ensure_utc(model.created_at),
        updated_at=ensure_utc(model.updated_at),
    )


def apply_to_model(user: User, model: UserModel) -> UserModel:
    """Recopie l'état de l'entité sur la ligne (hors identifiant)."""
    model.email = str(user.email) if user.email else None
    model.role = user.role
    model.first_name = user.first_name
    model.last_name = user.last_name
    model.phone = user.phone
    model.avatar = user.avatar
    model.updated_at = user.updated_at
    return model


class SqlAlchemyUserRepository(BaseRepository[UserModel]):
    model = UserModel
    filterable_fields = ("role", "email")

    def create(self, user: User) -> User:
        model = apply_to_model(user, UserModel(id=user.id, created_at=user.created_at))
        self.db.add(model)
        self._commit(model)
        return to_domain(model)

    def update(self, id: str, user: User) -> User:
        model = self._get(id)
        if model is None:
            raise NotFoundError("Utilisateur", id)
        apply_to_model(user, model)
        self._commit(model)
        return to_domain(model)

    def delete(self, id: str) -> User:
        model = self._get(id)
        if model is None:
            raise NotFoundError("Utilisateur", id)
        deleted = to_domain(model)
        self.db.delete(model)
        self._commit()
        return deleted

    def find_by_id(self, id: str) -> Optional[User]:
        model = self._get(id)
        return to_domain(model) if model else None

    def find_by_email(self, email: str) -> Optional[User]:
        model = self.db.scalars(
            select(UserModel).where(UserModel.email == email.strip().lower())
        ).first()
        return to_domain(model) if model else None

    def find_many(self, filter: Optional[Mapping[str, Any]] = None) -> list[User]:
        filter = dict(filter or {})
        if filter.get("email"):
            filter["email"] = filter["email"].strip().lower()
        return [to_domain(model) for model in self._select_many(filter)]
