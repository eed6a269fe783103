from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.constants import UNKNOWN_TENANT_NAME
from ..tenants.model import Tenant
from ..tenants.repository import TenantRepository
from .model import Person
from .repository import PersonRepository

logger = logging.getLogger(__name__)


class ResolutionKind(str, Enum):
    RESOLVED = "resolved"
    UNKNOWN_TAG = "unknown_tag"
    TENANT_MISMATCH = "tenant_mismatch"


@dataclass(frozen=True)
class Resolution:
    kind: ResolutionKind
    person: Optional[Person] = None
    owner: Optional[Tenant] = None
    owner_name: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.kind == ResolutionKind.RESOLVED


class IdentityResolver:
    """Map a scanned tag (and the caller's tenant key) to one enrolled person.

    Tag values are cheap hardware identifiers that different tenants reuse,
    so a tag found under another tenant is only accepted when the caller's
    own tenant has no person with the same tag.
    """

    def __init__(self, persons: PersonRepository, tenants: TenantRepository):
        self._persons = persons
        self._tenants = tenants

    def resolve(self, uid: str, api_key: Optional[str] = None) -> Resolution:
        person = self._persons.get_by_uid(uid)
        if person is None:
            return Resolution(kind=ResolutionKind.UNKNOWN_TAG)

        if not api_key or api_key == person.api_key:
            return Resolution(kind=ResolutionKind.RESOLVED, person=person)

        own = self._persons.get_by_uid_and_tenant(uid, api_key)
        if own is not None:
            return Resolution(kind=ResolutionKind.RESOLVED, person=own)

        owner = self._tenants.get_by_api_key(person.api_key)
        owner_name = owner.name if owner and owner.name else UNKNOWN_TENANT_NAME
        logger.warning("Tag %s belongs to tenant %r, scanned with a different key", uid, owner_name)
        return Resolution(
            kind=ResolutionKind.TENANT_MISMATCH,
            person=person,
            owner=owner,
            owner_name=owner_name,
        )
