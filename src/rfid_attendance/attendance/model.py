from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, Punctuality


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one person's attendance for one calendar day."""

    person_id: int
    api_key: str
    work_date: date
    signed_in: bool = False
    signed_out: bool = False
    sign_in_time: Optional[datetime] = None
    sign_out_time: Optional[datetime] = None
    punctuality: Optional[Punctuality] = None
    status: AttendanceStatus = AttendanceStatus.ABSENT
    attendance_id: Optional[int] = None
