"""
Outils communs aux entités du domaine.
"""

from datetime import datetime, timezone
from typing import Any, Iterable


def utcnow() -> datetime:
    """Horodatage UTC timezone-aware."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """
    Rend un datetime timezone-aware (UTC).

    SQLite ne conserve pas le fuseau horaire : les valeurs relues sont naïves
    et considérées comme UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def check_fields(changes: dict[str, Any], allowed: Iterable[str], operation: str) -> None:
    """Refuse les champs inconnus passés à une méthode de mise à jour."""
    unknown = set(changes) - set(allowed)
    if unknown:
        raise TypeError(f"{operation}() : champs inconnus {sorted(unknown)}")
