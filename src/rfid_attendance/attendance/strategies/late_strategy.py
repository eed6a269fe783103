from __future__ import annotations

from datetime import datetime

from ...core.enums import Punctuality
from ...time_settings.model import TimeSettings
from .base import PunctualityDecision, PunctualityStrategy


class LateStrategy(PunctualityStrategy):
    """Sign-in accepted during the grace period after sign-in end."""

    def decide_sign_in(self, *, now: datetime, settings: TimeSettings) -> PunctualityDecision:
        return PunctualityDecision(punctuality=Punctuality.LATE, message_key="scan.lateSignIn")
