"""
Alembic Environment Configuration - Marketplace

Ce fichier configure Alembic pour :
1. Charger l'URL de la base depuis app/core/config (qui lit le .env)
2. Importer tous les modèles SQLAlchemy pour la détection automatique
3. Supporter les migrations online (base connectée) et offline (génération SQL)
"""

from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

from app.core.config import settings

# Cet import charge tous les modèles pour que Alembic détecte les tables
from app.models.base import Base

# Configuration Alembic depuis alembic.ini
config = context.config

# Configuration du logging depuis alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Métadonnées des modèles pour autogenerate
target_metadata = Base.metadata


def get_url() -> str:
    """URL de la base de données (settings, donc .env)."""
    return settings.DATABASE_URL


def run_migrations_offline() -> None:
    """
    Exécute les migrations en mode 'offline' (génération du SQL).

    Usage:
        alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Exécute les migrations en mode 'online' (base connectée).

    Usage:
        alembic upgrade head
    """
    connectable = create_engine(
        get_url(),
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
