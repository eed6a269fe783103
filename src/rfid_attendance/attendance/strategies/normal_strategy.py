from __future__ import annotations

from .base import PunctualityStrategy


class NormalStrategy(PunctualityStrategy):
    """On-time sign-in, normal sign-out."""
