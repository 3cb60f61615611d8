"""
Ports de persistance.

Les services ne dépendent que de ces interfaces ; les implémentations
SQLAlchemy sont dans ce même package et les tests peuvent les remplacer.

Les filtres sont des dictionnaires de prédicats d'égalité optionnels :
une valeur None est ignorée.
"""

from typing import Any, Mapping, Optional, Protocol

from app.domain.entities import ProProfile, User, WebhookEvent


class UserRepository(Protocol):
    def create(self, user: User) -> User: ...

    def update(self, id: str, user: User) -> User: ...

    def delete(self, id: str) -> User: ...

    def find_by_id(self, id: str) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_many(self, filter: Optional[Mapping[str, Any]] = None) -> list[User]: ...


class ProProfileRepository(Protocol):
    def create(self, profile: ProProfile) -> ProProfile: ...

    def update(self, id: str, profile: ProProfile) -> ProProfile: ...

    def delete(self, id: str) -> ProProfile: ...

    def find_by_id(self, id: str) -> Optional[ProProfile]: ...

    def find_by_user_id(self, user_id: str) -> Optional[ProProfile]: ...

    def find_many(self, filter: Optional[Mapping[str, Any]] = None) -> list[ProProfile]: ...


class WebhookDeliveryRepository(Protocol):
    def exists(self, id: str) -> bool: ...

    def record(self, event: WebhookEvent) -> None: ...
