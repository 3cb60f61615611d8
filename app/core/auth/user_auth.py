"""
Dépendances d'authentification des utilisateurs.

L'identité est portée par Clerk : le token de session (Bearer) est vérifié
avec le JWKS Clerk, et son claim `sub` est l'identifiant de l'utilisateur
(clé primaire de la table users). Les administrateurs sont les identifiants
listés dans ADMIN_USER_IDS.

Usage:
    @router.get("/users/me")
    def read_me(current_user: AuthenticatedUser = Depends(get_current_user)):
        ...

    @router.post("/pro-profiles/{profile_id}/approve")
    def approve(admin: AuthenticatedUser = Depends(require_admin)):
        ...
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.security.clerk import (
    ClerkAuthError,
    ClerkJWKSError,
    ClerkSessionVerifier,
    get_clerk_verifier,
)

logger = logging.getLogger(__name__)

# Security scheme pour le token Bearer
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Appelant authentifié (identifiant Clerk et droits)."""

    id: str
    is_admin: bool = False
    claims: Dict[str, Any] = field(default_factory=dict)

    def can_access(self, owner_id: str) -> bool:
        """Propriétaire de la ressource ou administrateur."""
        return self.is_admin or self.id == owner_id


# =============================================================================
# AUTHENTIFICATION
# =============================================================================

def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        verifier: ClerkSessionVerifier = Depends(get_clerk_verifier),
) -> AuthenticatedUser:
    """
    Dépendance pour obtenir l'appelant depuis le token de session Clerk.

    Raises:
        HTTPException 401: Token manquant ou invalide
        HTTPException 503: JWKS Clerk indisponible
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token d'authentification requis",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = verifier.verify_session_token(credentials.credentials)
    except ClerkJWKSError as e:
        logger.error(f"Vérification du token impossible : {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service d'authentification indisponible",
        )
    except ClerkAuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = claims["sub"]
    return AuthenticatedUser(
        id=user_id,
        is_admin=user_id in settings.ADMIN_USER_IDS,
        claims=claims,
    )


def require_admin(
        current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """
    Dépendance réservant un endpoint aux administrateurs (modération).

    Raises:
        HTTPException 403: Appelant non administrateur
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Accès réservé aux administrateurs",
        )
    return current_user


def ensure_can_access(current_user: AuthenticatedUser, owner_id: str) -> None:
    """
    Vérifie que l'appelant est propriétaire de la ressource ou administrateur.

    Raises:
        HTTPException 403: Accès refusé
    """
    if not current_user.can_access(owner_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Accès refusé",
        )
