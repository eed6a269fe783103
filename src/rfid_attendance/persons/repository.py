from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Person


class PersonRepository(Protocol):
    """Repository interface for enrolled persons.

    The service layer depends on this interface, not on a concrete database.
    """

    def get_by_uid(self, uid: str) -> Optional[Person]:
        raise NotImplementedError

    def get_by_uid_and_tenant(self, uid: str, api_key: str) -> Optional[Person]:
        raise NotImplementedError

    def list_for_tenant(self, api_key: str) -> Sequence[Person]:
        raise NotImplementedError
