from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Tenant:
    """Domain entity: a school/organization identified by its API key."""

    api_key: str
    name: str
    email: Optional[str] = None
