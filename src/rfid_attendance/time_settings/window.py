"""Time-of-day window checks and punctuality classification.

Pure functions only. Windows are closed intervals ``[start, end]`` compared at
one-second resolution, and never wrap past midnight.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any

from ..core.enums import Punctuality
from ..core.exceptions import ValidationError
from ..database.mysql_base import normalize_mysql_time
from .model import TimeSettings

_ANCHOR = date(2000, 1, 1)
_END_OF_DAY = time(23, 59, 59)


def parse_time_of_day(value: Any) -> time:
    """Accept ``time``, MySQL ``timedelta`` or ``"HH:MM[:SS]"`` strings."""
    try:
        parsed = normalize_mysql_time(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid time of day: {value!r}") from exc
    if parsed is None:
        raise ValidationError("Time of day is required")
    return parsed


def time_of_day(now: datetime) -> time:
    return now.time().replace(microsecond=0)


def shift_time(value: time, minutes: int) -> time:
    """Move a time of day by ``minutes``, clamped to the same day."""
    moved = datetime.combine(_ANCHOR, value) + timedelta(minutes=minutes)
    if moved.date() > _ANCHOR:
        return _END_OF_DAY
    if moved.date() < _ANCHOR:
        return time.min
    return moved.time()


def is_within(now: datetime, start: Any, end: Any) -> bool:
    current = time_of_day(now)
    return parse_time_of_day(start) <= current <= parse_time_of_day(end)


def sign_in_open(now: datetime, settings: TimeSettings) -> bool:
    """Inside the sign-in window, including the tenant's grace period."""
    end = shift_time(settings.sign_in_end, max(int(settings.grace_minutes or 0), 0))
    return is_within(now, settings.sign_in_start, end)


def sign_out_open(now: datetime, settings: TimeSettings) -> bool:
    return is_within(now, settings.sign_out_start, settings.sign_out_end)


def classify_sign_in(now: datetime, settings: TimeSettings) -> Punctuality:
    if time_of_day(now) <= settings.sign_in_end:
        return Punctuality.ON_TIME
    return Punctuality.LATE


def classify_sign_out(now: datetime, settings: TimeSettings) -> Punctuality:
    current = time_of_day(now)
    if settings.early_leave_minutes is not None:
        threshold = shift_time(settings.sign_out_end, -int(settings.early_leave_minutes))
        if current < threshold:
            return Punctuality.EARLY_LEAVE
    if current >= settings.sign_out_start:
        return Punctuality.ON_TIME
    return Punctuality.EARLY_LEAVE
