from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Punctuality
from ..time_settings.model import TimeSettings
from ..time_settings.window import classify_sign_in, classify_sign_out
from .strategies.base import PunctualityStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class PunctualityStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the tenant's windows."""

    def for_sign_in(self, *, now: datetime, settings: TimeSettings) -> PunctualityStrategy:
        if classify_sign_in(now, settings) == Punctuality.LATE:
            return LateStrategy()
        return NormalStrategy()

    def for_sign_out(self, *, now: datetime, settings: TimeSettings) -> PunctualityStrategy:
        if classify_sign_out(now, settings) == Punctuality.EARLY_LEAVE:
            return EarlyLeaveStrategy()
        return NormalStrategy()
