from app.domain.value_objects.email import Email
from app.domain.value_objects.siret import Siret

__all__ = [
    "Email",
    "Siret",
]
