from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easily.
    """
    return datetime.now()


def isoformat_seconds(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds")
