"""
Configuration de la session SQLAlchemy - Connexion PostgreSQL
Fournit l'engine, la factory de sessions, et la dependency FastAPI
"""
import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


# === 1. ENGINE ===

def _engine_options(database_url: str) -> dict:
    """Options de l'engine selon le dialecte (pool et paramètres PostgreSQL)."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}

    return {
        # === Pool de connexions ===
        "pool_size": 5,              # Nombre de connexions permanentes
        "max_overflow": 10,          # Connexions supplémentaires si besoin (temporaires)
        "pool_timeout": 30,          # Timeout pour obtenir une connexion (secondes)
        "pool_recycle": 1800,        # Recycler les connexions après 30 min
        "pool_pre_ping": True,       # Vérifier que la connexion est vivante avant utilisation
        # === Paramètres PostgreSQL ===
        "connect_args": {
            "application_name": "marketplace-api",
            "options": "-c timezone=UTC",
        },
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG and settings.is_development,  # Log SQL en dev uniquement
    **_engine_options(settings.DATABASE_URL),
)


# === 2. SESSION LOCAL (Factory de sessions) ===

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,         # Pas de commit automatique (on contrôle explicitement)
    autoflush=False,          # Pas de flush automatique (meilleur contrôle)
    expire_on_commit=False,   # Garder les objets accessibles après commit
)


# === 3. DEPENDENCY FASTAPI ===

def get_db() -> Generator[Session, None, None]:
    """
    Dépendance FastAPI : une session par requête, fermée en fin de requête.

    Les repositories committent eux-mêmes chaque écriture ; une exception
    non gérée annule ce qui n'a pas été commité.

    Usage:
        @router.get("/users")
        def list_users(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# === 4. VÉRIFICATION DE CONNEXION ===

def check_database_connection() -> bool:
    """
    Vérifie que la connexion à la base de données fonctionne.

    Utile pour les health checks et le démarrage de l'application.
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Erreur de connexion à la base de données : {e}")
        return False
