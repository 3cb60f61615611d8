"""
Tests du UserService et du repository SQLAlchemy des utilisateurs.
"""

from unittest.mock import Mock

import pytest

from app.api.v1.user.schemas import UserCreate, UserFilters, UserUpdate
from app.api.v1.user.services import UserService
from app.domain.enums import UserRole
from app.domain.errors import ConflictError, NotFoundError, ValidationError


class TestCreateUser:
    """Tests de création d'utilisateur."""

    def test_create(self, user_service, user_repository):
        user = user_service.create_user(UserCreate(
            id="user_new", email="Nouveau@Example.com", role=UserRole.PRO, first_name="Léa",
        ))
        assert user.id == "user_new"
        assert user.is_pro()

        stored = user_repository.find_by_id("user_new")
        assert str(stored.email) == "nouveau@example.com"
        assert stored.first_name == "Léa"
        assert stored.created_at.tzinfo is not None

    def test_create_existing_id(self, user_service, user_client):
        with pytest.raises(ConflictError):
            user_service.create_user(UserCreate(id=user_client.id, role=UserRole.CLIENT))

    def test_create_existing_email(self, user_service, user_client):
        """L'unicité de l'email est garantie par la base."""
        with pytest.raises(ConflictError):
            user_service.create_user(UserCreate(
                id="user_other", email=str(user_client.email), role=UserRole.CLIENT,
            ))

    def test_invalid_email_fails_before_repository(self):
        """Un email invalide échoue avant tout appel au repository."""
        repository = Mock()
        service = UserService(repository)
        command = UserCreate.model_construct(
            id="user_1", email="not-an-email", role=UserRole.CLIENT, first_name=None, last_name=None,
        )

        with pytest.raises(ValidationError):
            service.create_user(command)
        assert repository.mock_calls == []


class TestUpdateUser:
    """Tests de mise à jour d'utilisateur."""

    def test_update_given_fields_only(self, user_service, user_client):
        updated = user_service.update_user(user_client.id, UserUpdate(phone="0601020304"))
        assert updated.phone == "0601020304"
        assert updated.first_name == "Claire"
        assert updated.email == user_client.email

    def test_update_email_and_role(self, user_service, user_client):
        updated = user_service.update_user(
            user_client.id, UserUpdate(email="claire@example.com", role=UserRole.PRO),
        )
        assert str(updated.email) == "claire@example.com"
        assert updated.is_pro()

    def test_update_clears_field(self, user_service, user_client):
        updated = user_service.update_user(user_client.id, UserUpdate(last_name=None))
        assert updated.last_name is None

    def test_update_not_found(self, user_service):
        with pytest.raises(NotFoundError):
            user_service.update_user("user_unknown", UserUpdate(first_name="X"))


class TestDeleteAndRead:
    """Tests de suppression et de lecture."""

    def test_delete_returns_deleted_user(self, user_service, user_client):
        deleted = user_service.delete_user(user_client.id)
        assert deleted.id == user_client.id
        assert user_service.get_by_id(user_client.id) is None

    def test_delete_cascades_pro_profile(self, user_service, pro_profile_repository, pro_profile):
        user_service.delete_user(pro_profile.user_id)
        assert pro_profile_repository.find_by_id(pro_profile.id) is None

    def test_delete_not_found(self, user_service):
        with pytest.raises(NotFoundError):
            user_service.delete_user("user_unknown")

    def test_get_by_email_case_insensitive(self, user_service, user_client):
        found = user_service.get_by_email("CLAIRE.CLIENT@example.com")
        assert found is not None
        assert found.id == user_client.id

    def test_get_many_filters(self, user_service, user_client, user_pro):
        assert len(user_service.get_many()) == 2
        pros = user_service.get_many(UserFilters(role=UserRole.PRO))
        assert [u.id for u in pros] == [user_pro.id]

    def test_find_many_unsupported_filter(self, user_repository):
        with pytest.raises(ValueError):
            user_repository.find_many({"phone": "0601020304"})
