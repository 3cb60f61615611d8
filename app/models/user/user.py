"""
Modèle User - Utilisateurs de la marketplace.

Ce module définit la table `users`. L'identifiant est celui de Clerk :
pas de séquence, la ligne est créée par le webhook `user.created`
ou par inscription explicite.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database.base_class import Base
from app.domain.enums import UserRole
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.pro_profile.pro_profile import ProProfileModel


class UserModel(TimestampMixin, Base):
    """
    Représente un utilisateur (client ou professionnel).

    Attributes:
        id: Identifiant Clerk (clé primaire)
        email: Email (unique, optionnel)
        role: CLIENT ou PRO
        first_name: Prénom
        last_name: Nom de famille
        phone: Téléphone
        avatar: URL de l'avatar
        pro_profile: Profil professionnel (0 ou 1)
    """

    __tablename__ = "users"
    __table_args__ = {
        "comment": "Utilisateurs synchronisés depuis Clerk (clients et professionnels)"
    }

    # === Colonnes ===

    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        doc="Identifiant Clerk de l'utilisateur",
        info={"description": "Clé primaire fournie par Clerk", "example": "user_2abc"}
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
        index=True,
        doc="Adresse email (normalisée en minuscules)",
        info={
            "description": "Email principal",
            "format": "email",
            "pii": True,
            "example": "marie.dupont@example.com"
        }
    )

    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.CLIENT,
        doc="Rôle de l'utilisateur",
        info={"description": "CLIENT ou PRO"}
    )

    first_name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        doc="Prénom",
        info={"pii": True, "example": "Marie"}
    )

    last_name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        doc="Nom de famille",
        info={"pii": True, "example": "DUPONT"}
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        doc="Téléphone",
        info={"pii": True, "example": "0612345678"}
    )

    avatar: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        doc="URL de l'avatar"
    )

    # === Relations ===

    pro_profile: Mapped[Optional["ProProfileModel"]] = relationship(
        "ProProfileModel",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id!r}, role={self.role})>"
