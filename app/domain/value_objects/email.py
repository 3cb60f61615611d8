"""
Email Value Object

Adresse email syntaxiquement valide, normalisée en minuscules.
La délivrabilité (DNS/MX) n'est pas vérifiée.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from app.domain.errors import ValidationError


@dataclass(frozen=True)
class Email:
    """Adresse email validée (immuable)."""

    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValidationError("L'email est requis")
        try:
            result = validate_email(self.value.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            raise ValidationError(f"Format d'email invalide : {self.value}") from e
        # frozen=True : passage par object.__setattr__ pour normaliser
        object.__setattr__(self, "value", result.normalized.lower())

    def __str__(self) -> str:
        return self.value

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]
