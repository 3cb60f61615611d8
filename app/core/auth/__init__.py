from app.core.auth.user_auth import (
    AuthenticatedUser,
    ensure_can_access,
    get_current_user,
    require_admin,
)

__all__ = [
    "AuthenticatedUser",
    "ensure_can_access",
    "get_current_user",
    "require_admin",
]
