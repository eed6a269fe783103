from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import Punctuality
from ...time_settings.model import TimeSettings
from .base import PunctualityDecision, PunctualityStrategy


class EarlyLeaveStrategy(PunctualityStrategy):
    """Sign-out before the tenant's early-leave threshold; overrides sign-in punctuality."""

    def decide_sign_out(
        self, *, now: datetime, settings: TimeSettings, current: Optional[Punctuality]
    ) -> PunctualityDecision:
        return PunctualityDecision(punctuality=Punctuality.EARLY_LEAVE, message_key="scan.earlySignOut")
