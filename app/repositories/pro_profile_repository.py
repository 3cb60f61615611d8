"""
Repository SQLAlchemy des profils professionnels.
"""

import uuid
from typing import Any, Mapping, Optional

from sqlalchemy import select

from app.domain.entities import ProProfile
from app.domain.entities.base import ensure_utc
from app.domain.errors import NotFoundError
from app.models.pro_profile.pro_profile import ProProfileModel
from app.repositories.base_repository import BaseRepository

# Colonnes recopiées telles quelles entre l'entité et la ligne
MAPPED_FIELDS = (
    "business_name",
    "bio",
    "profession",
    "experience",
    "siret",
    "corporate_name",
    "legal_form",
    "legal_status",
    "address",
    "postal_code",
    "city",
    "latitude",
    "longitude",
    "radius",
    "onboarding_step",
    "onboarding_progress",
    "onboarding_complete",
    "validation_status",
    "rejection_reason",
    "is_active",
    "is_premium",
    "rating",
    "review_count",
)


def to_domain(model: ProProfileModel) -> ProProfile:
    return ProProfile(
        id=model.id,
        user_id=model.user_id,
        certifications=list(model.certifications or []),
        photos=list(model.photos or []),
        subscription_end=ensure_utc(model.subscription_end),
        created_at=ensure_utc(model.created_at),
        updated_at=ensure_utc(model.updated_at),
        **{name: getattr(model, name) for name in MAPPED_FIELDS},
    )


def apply_to_model(profile: ProProfile, model: ProProfileModel) -> ProProfileModel:
    """Recopie l'état de l'entité sur la ligne (hors identifiants)."""
    for name in MAPPED_FIELDS:
        setattr(model, name, getattr(profile, name))
    # Nouvelles listes pour que SQLAlchemy détecte la modification des colonnes JSON
    model.certifications = list(profile.certifications)
    model.photos = list(profile.photos)
    model.subscription_end = profile.subscription_end
    model.updated_at = profile.updated_at
    return model


class SqlAlchemyProProfileRepository(BaseRepository[ProProfileModel]):
    model = ProProfileModel
    filterable_fields = (
        "user_id",
        "profession",
        "city",
        "is_premium",
        "validation_status",
        "is_active",
    )

    def create(self, profile: ProProfile) -> ProProfile:
        model = ProProfileModel(
            id=profile.id or str(uuid.uuid4()),
            user_id=profile.user_id,
            created_at=profile.created_at,
        )
        apply_to_model(profile, model)
        self.db.add(model)
        self._commit(model)
        return to_domain(model)

    def update(self, id: str, profile: ProProfile) -> ProProfile:
        model = self._get(id)
        if model is None:
            raise NotFoundError("Profil professionnel", id)
        apply_to_model(profile, model)
        self._commit(model)
        return to_domain(model)

    def delete(self, id: str) -> ProProfile:
        model = self._get(id)
        if model is None:
            raise NotFoundError("Profil professionnel", id)
        deleted = to_domain(model)
        self.db.delete(model)
        self._commit()
        return deleted

    def find_by_id(self, id: str) -> Optional[ProProfile]:
        model = self._get(id)
        return to_domain(model) if model else None

    def find_by_user_id(self, user_id: str) -> Optional[ProProfile]:
        model = self.db.scalars(
            select(ProProfileModel).where(ProProfileModel.user_id == user_id)
        ).first()
        return to_domain(model) if model else None

    def find_many(self, filter: Optional[Mapping[str, Any]] = None) -> list[ProProfile]:
        return [to_domain(model) for model in self._select_many(filter)]
