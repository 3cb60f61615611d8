"""
Router principal API v1.

Agrège tous les routers des différents modules métier.

Usage dans main.py:
    from app.api.v1.router import api_router

    app = FastAPI(title="Marketplace API")
    app.include_router(api_router)
"""
from fastapi import APIRouter

from app.core.config import settings

from .user.routes import router as user_router
from .pro_profile.routes import router as pro_profile_router
from .webhooks.routes import router as webhooks_router


# =============================================================================
# ROUTER PRINCIPAL
# =============================================================================

api_router = APIRouter(prefix="/api/v1")


api_router.include_router(user_router)
api_router.include_router(pro_profile_router)
api_router.include_router(webhooks_router)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@api_router.get(
    "/health",
    tags=["System"],
    summary="Health check",
    description="Vérifie que l'API est opérationnelle.",
)
async def health_check():
    """
    Endpoint de santé pour les load balancers et le monitoring.

    Returns:
        Statut de l'API
    """
    return {
        "status": "healthy",
        "service": "marketplace-api",
        "version": settings.APP_VERSION,
        "api_version": "v1",
    }
