from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Person:
    """Domain entity: an enrolled person carrying an RFID tag.

    ``uid`` is unique within a tenant only; two tenants may enroll the same
    tag value independently.
    """

    person_id: int
    uid: str
    name: str
    form: Optional[str]
    api_key: str
