"""
Entité User - Identité d'un utilisateur de la marketplace.

L'identifiant est celui du fournisseur d'identité (Clerk) : l'utilisateur est
créé à la première connexion (webhook `user.created`) ou par inscription
explicite, puis supprimé physiquement (pas de soft-delete).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from app.domain.entities.base import check_fields, utcnow
from app.domain.enums import UserRole
from app.domain.errors import ValidationError
from app.domain.value_objects import Email

PROFILE_FIELDS = ("first_name", "last_name", "phone", "avatar")


@dataclass
class User:
    """
    Utilisateur (client ou professionnel).

    Attributes:
        id: Identifiant externe (Clerk user id)
        email: Email validé (optionnel)
        role: CLIENT ou PRO
        first_name: Prénom
        last_name: Nom de famille
        phone: Téléphone
        avatar: URL de l'avatar
    """

    id: str
    role: UserRole
    email: Optional[Email] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # === Fabriques ===

    @classmethod
    def create(
            cls,
            id: str,
            role: UserRole | str,
            email: Optional[str] = None,
            first_name: Optional[str] = None,
            last_name: Optional[str] = None,
    ) -> "User":
        """
        Crée un nouvel utilisateur en validant ses invariants.

        Raises:
            ValidationError: Identifiant manquant, email ou rôle invalide
        """
        if not id or not id.strip():
            raise ValidationError("L'identifiant utilisateur est requis")

        return cls(
            id=id,
            role=_coerce_role(role),
            email=Email(email) if email else None,
            first_name=first_name,
            last_name=last_name,
        )

    # === Méthodes métier ===

    def update_profile(self, **changes: Any) -> None:
        """
        Met à jour les champs de profil fournis (first_name, last_name, phone, avatar).

        Seuls les champs passés en argument sont modifiés ; None efface la valeur.
        """
        check_fields(changes, PROFILE_FIELDS, "update_profile")
        for name, value in changes.items():
            setattr(self, name, value)
        self.touch()

    def update_email(self, new_email: str) -> None:
        self.email = Email(new_email)
        self.touch()

    def change_role(self, new_role: UserRole | str) -> None:
        self.role = _coerce_role(new_role)
        self.touch()

    def get_full_name(self) -> Optional[str]:
        """Nom complet, ou None si ni prénom ni nom."""
        if not self.first_name and not self.last_name:
            return None
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def is_pro(self) -> bool:
        return self.role == UserRole.PRO

    def is_client(self) -> bool:
        return self.role == UserRole.CLIENT

    def touch(self) -> None:
        self.updated_at = utcnow()

    def __str__(self) -> str:
        return self.get_full_name() or self.id


def _coerce_role(role: UserRole | str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError:
        raise ValidationError("Le rôle doit être CLIENT ou PRO")
