"""
Vérification des tokens de session Clerk.

Clerk signe ses tokens de session (RS256) avec les clés publiées sur le
JWKS de l'instance. Les clés sont récupérées via httpx puis mises en cache
CLERK_JWKS_CACHE_SECONDS secondes ; un `kid` inconnu force un
rafraîchissement (rotation des clés), au plus une fois par
min_refresh_seconds. Le téléchargement se fait hors du verrou.

Usage:
    verifier = get_clerk_verifier()
    claims = verifier.verify_session_token(token)
    user_id = claims["sub"]
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

import httpx
from jose import JWTError, jwt

from app.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "ClerkAuthError",
    "ClerkJWKSError",
    "ClerkSessionVerifier",
    "get_clerk_verifier",
]


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ClerkAuthError(Exception):
    """Token de session Clerk invalide."""
    pass


class ClerkJWKSError(ClerkAuthError):
    """JWKS Clerk indisponible ou mal configuré."""
    pass


# =============================================================================
# VÉRIFICATEUR
# =============================================================================

class ClerkSessionVerifier:
    """
    Vérifie les tokens de session Clerk avec le JWKS de l'instance.

    Attributes:
        jwks_url: URL du JWKS (https://<instance>.clerk.accounts.dev/.well-known/jwks.json)
        issuer: Émetteur attendu (claim `iss`), non vérifié si None
        cache_seconds: Durée de vie du cache des clés
        min_refresh_seconds: Délai minimal entre deux téléchargements forcés
        transport: Transport httpx optionnel (tests)
    """

    ALGORITHMS = ["RS256"]

    def __init__(
            self,
            jwks_url: Optional[str],
            issuer: Optional[str] = None,
            cache_seconds: int = 3600,
            min_refresh_seconds: int = 60,
            transport: Optional[httpx.BaseTransport] = None,
    ):
        self.jwks_url = jwks_url
        self.issuer = issuer
        self.cache_seconds = cache_seconds
        self.min_refresh_seconds = min_refresh_seconds
        self.transport = transport
        self._keys: List[Dict[str, Any]] = []
        self._fetched_at: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def is_configured(self) -> bool:
        return bool(self.jwks_url)

    # =========================================================================
    # JWKS
    # =========================================================================

    def _fetch_keys(self) -> List[Dict[str, Any]]:
        """
        Télécharge le JWKS.

        Raises:
            ClerkJWKSError: Réponse invalide ou erreur réseau
        """
        try:
            with httpx.Client(timeout=10.0, transport=self.transport) as client:
                response = client.get(self.jwks_url, headers={"Accept": "application/json"})
        except httpx.RequestError as e:
            raise ClerkJWKSError(f"Erreur de connexion au JWKS Clerk : {e}") from e

        if response.status_code != 200:
            raise ClerkJWKSError(f"Erreur JWKS Clerk : {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise ClerkJWKSError("Réponse JWKS Clerk illisible") from e

        keys = body.get("keys") if isinstance(body, dict) else None
        if not isinstance(keys, list):
            raise ClerkJWKSError("Réponse JWKS Clerk sans clés")
        logger.debug(f"JWKS Clerk chargé ({len(keys)} clé(s))")
        return keys

    def _get_keys(self, force_refresh: bool = False) -> List[Dict[str, Any]]:
        with self._lock:
            if self._fetched_at is not None:
                age = time.monotonic() - self._fetched_at
                fresh = age <= self.cache_seconds
                if fresh and (not force_refresh or age < self.min_refresh_seconds):
                    return self._keys

        # Téléchargement hors verrou
        keys = self._fetch_keys()
        with self._lock:
            self._keys = keys
            self._fetched_at = time.monotonic()
        return keys

    def _find_key(self, kid: Optional[str]) -> Dict[str, Any]:
        for refresh in (False, True):
            for key in self._get_keys(force_refresh=refresh):
                if key.get("kid") == kid:
                    return key
        raise ClerkAuthError("Clé de signature inconnue")

    # =========================================================================
    # VÉRIFICATION
    # =========================================================================

    def verify_session_token(self, token: str) -> Dict[str, Any]:
        """
        Vérifie signature, expiration et émetteur d'un token de session.

        Returns:
            Claims du token (`sub` = identifiant Clerk de l'utilisateur)

        Raises:
            ClerkJWKSError: JWKS non configuré ou indisponible
            ClerkAuthError: Token invalide
        """
        if not self.is_configured:
            raise ClerkJWKSError("CLERK_JWKS_URL non configuré")

        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise ClerkAuthError(f"Token invalide : {e}") from e

        key = self._find_key(header.get("kid"))

        options = {"verify_aud": False, "verify_iss": self.issuer is not None}
        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=self.ALGORITHMS,
                issuer=self.issuer,
                options=options,
            )
        except JWTError as e:
            raise ClerkAuthError(f"Token invalide : {e}") from e

        if not claims.get("sub"):
            raise ClerkAuthError("Token invalide : sub manquant")
        return claims


# =============================================================================
# SINGLETON
# =============================================================================

_clerk_verifier: Optional[ClerkSessionVerifier] = None


def get_clerk_verifier() -> ClerkSessionVerifier:
    """
    Retourne l'instance singleton du vérificateur (cache JWKS partagé).
    """
    global _clerk_verifier
    if _clerk_verifier is None:
        _clerk_verifier = ClerkSessionVerifier(
            jwks_url=settings.CLERK_JWKS_URL,
            issuer=settings.CLERK_ISSUER,
            cache_seconds=settings.CLERK_JWKS_CACHE_SECONDS,
        )
    return _clerk_verifier
