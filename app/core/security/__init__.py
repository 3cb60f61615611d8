from app.core.security.clerk import (
    ClerkAuthError,
    ClerkJWKSError,
    ClerkSessionVerifier,
    get_clerk_verifier,
)

__all__ = [
    "ClerkAuthError",
    "ClerkJWKSError",
    "ClerkSessionVerifier",
    "get_clerk_verifier",
]
