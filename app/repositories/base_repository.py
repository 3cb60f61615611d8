"""
Repository de base : opérations communes sur un modèle SQLAlchemy.
"""

import logging
from typing import Any, Generic, Iterable, Mapping, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database.base_class import Base
from app.domain.errors import ConflictError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)


class BaseRepository(Generic[M]):
    """
    Accès générique à une table.

    Chaque écriture est commitée immédiatement : un appel de service
    correspond à une seule écriture, sans transaction englobante.
    """

    model: Type[M]
    filterable_fields: Iterable[str] = ()

    def __init__(self, db: Session):
        self.db = db

    def _get(self, id: str) -> Optional[M]:
        return self.db.get(self.model, id)

    def _select_many(self, filter: Optional[Mapping[str, Any]] = None) -> list[M]:
        """Sélectionne les lignes correspondant aux prédicats d'égalité non nuls."""
        stmt = select(self.model)
        for name, value in (filter or {}).items():
            if value is None:
                continue
            if name not in self.filterable_fields:
                raise ValueError(f"Filtre non supporté : {name}")
            stmt = stmt.where(getattr(self.model, name) == value)
        stmt = stmt.order_by(self.model.created_at)
        return list(self.db.scalars(stmt))

    def _commit(self, instance: Optional[M] = None) -> None:
        """
        Commit la session.

        Raises:
            ConflictError: Violation d'unicité (la session est annulée)
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Conflit d'intégrité sur {self.model.__tablename__} : {e.orig}")
            raise ConflictError(f"Conflit d'unicité sur {self.model.__tablename__}") from e
        if instance is not None:
            self.db.refresh(instance)
