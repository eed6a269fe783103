from __future__ import annotations

from typing import Optional, Protocol

from .model import Tenant


class TenantRepository(Protocol):
    def get_by_api_key(self, api_key: str) -> Optional[Tenant]:
        raise NotImplementedError
