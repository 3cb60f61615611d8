"""
Marketplace - Application principale FastAPI
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.core.config import settings
from app.database.session import check_database_connection

# Configuration du logging (une seule fois, au démarrage)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Créer l'application FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    description="Marketplace mettant en relation clients et professionnels",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Configuration CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Inclure les routes API v1
app.include_router(api_router)

if not settings.webhook_configured:
    logger.warning("CLERK_WEBHOOK_SECRET non défini : les webhooks Clerk seront refusés")


@app.get("/")
async def root():
    """Page d'accueil - Health check"""
    return {
        "app": settings.APP_NAME,
        "status": "running",
        "environment": settings.ENVIRONMENT,
    }


@app.get("/health")
def health_check():
    """Endpoint de vérification de santé (inclut la base de données)"""
    database_ok = check_database_connection()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
    }
