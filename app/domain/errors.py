"""
Erreurs du domaine.

Hiérarchie :
- DomainError : règle métier violée (base)
- ValidationError : invariant d'entité violé (valeur hors bornes, transition interdite...)
- NotFoundError : entité introuvable dans un service qui en a besoin
- ConflictError : unicité métier violée (profil déjà existant...)
- WebhookVerificationError : webhook non authentifiable

Les entités lèvent ces erreurs de façon synchrone ; les services ne les
interceptent pas. La traduction en codes HTTP est faite dans les routes.
"""
from typing import Optional


class DomainError(Exception):
    """Erreur métier générique."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Invariant d'entité violé."""

    def __init__(self, message: str, errors: Optional[dict[str, list[str]]] = None):
        super().__init__(message)
        self.errors = errors


class NotFoundError(DomainError):
    """Ressource introuvable."""

    def __init__(self, resource: str, identifier: Optional[str] = None):
        if identifier:
            message = f"{resource} {identifier} non trouvé"
        else:
            message = f"{resource} non trouvé"
        super().__init__(message)
        self.resource = resource
        self.identifier = identifier


class ConflictError(DomainError):
    """Conflit d'unicité métier."""
    pass


class WebhookVerificationError(ValidationError):
    """Signature, en-têtes ou horodatage de webhook invalides."""
    pass
