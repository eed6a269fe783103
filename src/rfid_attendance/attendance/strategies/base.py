from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import Punctuality
from ...time_settings.model import TimeSettings


@dataclass(frozen=True)
class PunctualityDecision:
    punctuality: Optional[Punctuality]
    message_key: str


class PunctualityStrategy(ABC):
    """Strategy Pattern: encapsulate how we classify a sign-in or sign-out.

    Defaults describe a normal day; subclasses override the side they change.
    """

    def decide_sign_in(self, *, now: datetime, settings: TimeSettings) -> PunctualityDecision:
        return PunctualityDecision(punctuality=Punctuality.ON_TIME, message_key="scan.signedIn")

    def decide_sign_out(
        self, *, now: datetime, settings: TimeSettings, current: Optional[Punctuality]
    ) -> PunctualityDecision:
        # None keeps the punctuality recorded at sign-in.
        return PunctualityDecision(punctuality=None, message_key="scan.signedOut")
