"""
Siret Value Object

Numéro SIRET d'un établissement : exactement 14 chiffres.
Les espaces de saisie ("123 456 789 00012") sont tolérés puis retirés.
"""

import re
from dataclasses import dataclass

from app.domain.errors import ValidationError

SIRET_PATTERN = re.compile(r"[0-9]{14}")


@dataclass(frozen=True)
class Siret:
    """Numéro SIRET validé (immuable)."""

    value: str

    def __post_init__(self):
        compact = (self.value or "").replace(" ", "")
        if not SIRET_PATTERN.fullmatch(compact):
            raise ValidationError("Le SIRET doit contenir exactement 14 chiffres")
        object.__setattr__(self, "value", compact)

    def __str__(self) -> str:
        return self.value

    @property
    def siren(self) -> str:
        """SIREN de l'entreprise (9 premiers chiffres)."""
        return self.value[:9]
