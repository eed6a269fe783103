from __future__ import annotations

import logging
from datetime import date

from ..persons.model import Person
from ..persons.repository import PersonRepository
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class DailyLedger:
    """Lazily creates the day's attendance rows on the first scan of the day.

    Running on the first scan avoids depending on a scheduler firing at
    midnight; the first scan of each day pays for one bulk insert.
    """

    def __init__(self, attendance: AttendanceRepository, persons: PersonRepository):
        self._attendance = attendance
        self._persons = persons

    def ensure_day(self, api_key: str, work_date: date) -> int:
        """Create absent rows for every enrolled person; no-op once the day exists."""
        if self._attendance.count_for_tenant_and_date(api_key, work_date) > 0:
            return 0

        person_ids = [p.person_id for p in self._persons.list_for_tenant(api_key)]
        inserted = self._attendance.insert_absent_rows(api_key=api_key, work_date=work_date, person_ids=person_ids)
        logger.info("Attendance initialized for tenant %s on %s (%d rows)", api_key, work_date, inserted)
        return inserted

    def ensure_person(self, person: Person, work_date: date) -> bool:
        """Create a single missing row, e.g. for a person enrolled mid-day."""
        inserted = self._attendance.insert_absent_rows(
            api_key=person.api_key, work_date=work_date, person_ids=[person.person_id]
        )
        return inserted > 0
