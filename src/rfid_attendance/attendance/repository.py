from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Punctuality
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage for daily attendance rows.

    Both ``mark_*`` methods are conditional updates: they return ``False``
    when the row was not in the expected state, so concurrent scans for the
    same person and day apply a transition at most once.
    """

    def count_for_tenant_and_date(self, api_key: str, work_date: date) -> int:
        raise NotImplementedError

    def insert_absent_rows(self, *, api_key: str, work_date: date, person_ids: Sequence[int]) -> int:
        """Insert-or-ignore one absent row per person; returns rows inserted."""

        raise NotImplementedError

    def get_for_person_and_date(self, person_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def mark_signed_in(
        self,
        *,
        person_id: int,
        work_date: date,
        sign_in_time: datetime,
        punctuality: Punctuality,
    ) -> bool:
        raise NotImplementedError

    def mark_signed_out(
        self,
        *,
        person_id: int,
        work_date: date,
        sign_out_time: datetime,
        punctuality: Optional[Punctuality],
    ) -> bool:
        raise NotImplementedError
