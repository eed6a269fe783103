from __future__ import annotations

from typing import Optional, Protocol

from .model import TimeSettings


class TimeSettingsRepository(Protocol):
    def get_for_tenant(self, api_key: str) -> Optional[TimeSettings]:
        raise NotImplementedError
