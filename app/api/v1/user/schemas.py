"""
Schémas Pydantic pour le module User.

Contient les schémas pour :
- UserCreate / UserUpdate (entrées)
- UserFilters (filtres de liste)
- UserResponse (sortie)
"""
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl

from app.domain.entities import User
from app.domain.enums import UserRole


# =============================================================================
# USER SCHEMAS
# =============================================================================

class UserCreate(BaseModel):
    """Schéma pour créer un utilisateur (inscription explicite ou webhook)."""
    id: str = Field(..., min_length=1, max_length=255, description="Identifiant Clerk")
    email: Optional[EmailStr] = Field(None, description="Email principal")
    role: UserRole = Field(..., description="CLIENT ou PRO")
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)


class UserUpdate(BaseModel):
    """Schéma pour mettre à jour un utilisateur (champs partiels)."""
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    avatar: Optional[HttpUrl] = Field(None, description="URL de l'avatar")
    role: Optional[UserRole] = None


class UserFilters(BaseModel):
    """Filtres pour la recherche d'utilisateurs (égalité stricte)."""
    role: Optional[UserRole] = None
    email: Optional[EmailStr] = None


class UserResponse(BaseModel):
    """Schéma de réponse pour un utilisateur."""
    id: str
    email: Optional[str] = None
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=str(user.email) if user.email else None,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.get_full_name(),
            phone=user.phone,
            avatar=user.avatar,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserList(BaseModel):
    """Liste d'utilisateurs."""
    items: List[UserResponse]
    total: int
