"""
Mixins réutilisables pour les modèles SQLAlchemy.

Les timestamps sont posés par l'application (le domaine les porte déjà) ;
les valeurs par défaut ne servent qu'aux insertions directes.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.entities.base import utcnow


class TimestampMixin:
    """
    Mixin ajoutant les colonnes created_at et updated_at.

    - created_at : auto-rempli à la création
    - updated_at : auto-mis à jour à chaque modification

    Usage:
        class MyModel(TimestampMixin, Base):
            __tablename__ = "my_table"
            id: Mapped[str] = mapped_column(primary_key=True)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        doc="Date et heure de création",
        info={"description": "Timestamp de création", "auto_generated": True}
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        doc="Date et heure de dernière modification",
        info={"description": "Timestamp de mise à jour", "auto_generated": True}
    )
