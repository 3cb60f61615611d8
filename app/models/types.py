"""
Types SQLAlchemy personnalisés pour la marketplace.

Ce module définit des types compatibles SQLite (tests) et PostgreSQL (production).
"""

from sqlalchemy import JSON, Text
from sqlalchemy.dialects.postgresql import JSONB


# ============================================================================
# JSONBCompatible - Type JSON compatible multi-dialecte
# ============================================================================
#
# - Sur PostgreSQL : JSONB (indexable, opérateurs @>, ?, etc.)
# - Sur SQLite/autres : JSON standard
#
# Usage dans les modèles:
#     from app.models.types import JSONList
#
#     class MyModel(Base):
#         tags: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
#
# with_variant() plutôt qu'un TypeDecorator : Alembic génère directement
# les bonnes migrations.
#
# ============================================================================

JSONBCompatible = JSON().with_variant(JSONB(astext_type=Text()), 'postgresql')


# Pour les colonnes qui stockent une liste de chaînes (certifications, URLs)
JSONList = JSONBCompatible
