"""
User models - Utilisateurs.
"""

from app.models.user.user import UserModel

__all__ = [
    "UserModel",
]
