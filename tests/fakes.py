from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Optional, Sequence

from rfid_attendance.attendance.model import AttendanceRecord
from rfid_attendance.container import Container, assemble
from rfid_attendance.core.enums import AttendanceStatus, Punctuality
from rfid_attendance.core.exceptions import PersistenceError
from rfid_attendance.mailbox.memory_mailbox import InMemoryDeviceMailbox
from rfid_attendance.notifications.sink import TenantMismatchAlert
from rfid_attendance.persons.model import Person
from rfid_attendance.tenants.model import Tenant
from rfid_attendance.time_settings.model import TimeSettings
from rfid_attendance.time_settings.window import parse_time_of_day

ALPHA = Tenant(api_key="alpha-key", name="Alpha Academy", email="office@alpha.test")
BETA = Tenant(api_key="beta-key", name="Beta College", email=None)


def school_day(api_key: str, **overrides) -> TimeSettings:
    values = dict(
        api_key=api_key,
        sign_in_start=time(7, 0),
        sign_in_end=time(8, 0),
        sign_out_start=time(14, 0),
        sign_out_end=time(16, 0),
        grace_minutes=0,
        early_leave_minutes=None,
    )
    values.update(overrides)
    return TimeSettings(**values)


class InMemoryPersons:
    def __init__(self, persons: Sequence[Person] = ()):
        self._persons = sorted(persons, key=lambda p: p.person_id)

    def add(self, person: Person) -> None:
        self._persons.append(person)
        self._persons.sort(key=lambda p: p.person_id)

    def get_by_uid(self, uid: str) -> Optional[Person]:
        return next((p for p in self._persons if p.uid == uid), None)

    def get_by_uid_and_tenant(self, uid: str, api_key: str) -> Optional[Person]:
        return next((p for p in self._persons if p.uid == uid and p.api_key == api_key), None)

    def list_for_tenant(self, api_key: str) -> Sequence[Person]:
        return [p for p in self._persons if p.api_key == api_key]


@dataclass
class InMemoryTenants:
    tenants: dict[str, Tenant]

    def get_by_api_key(self, api_key: str) -> Optional[Tenant]:
        return self.tenants.get(api_key)


@dataclass
class InMemoryTimeSettings:
    settings: dict[str, TimeSettings]

    def get_for_tenant(self, api_key: str) -> Optional[TimeSettings]:
        return self.settings.get(api_key)


class MalformedTimeSettings:
    """Stored row with an unparseable time, read the way the MySQL repository reads it."""

    def get_for_tenant(self, api_key: str) -> Optional[TimeSettings]:
        return school_day(api_key, sign_in_start=parse_time_of_day("7am"))


class InMemoryAttendance:
    """Mirrors the MySQL repository: unique (person, date) and conditional updates."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[tuple[int, date], AttendanceRecord] = {}
        self.bulk_inserts = 0

    def rows_for(self, api_key: str, work_date: date) -> list[AttendanceRecord]:
        return [r for r in self._rows.values() if r.api_key == api_key and r.work_date == work_date]

    def count_for_tenant_and_date(self, api_key: str, work_date: date) -> int:
        return len(self.rows_for(api_key, work_date))

    def insert_absent_rows(self, *, api_key: str, work_date: date, person_ids: Sequence[int]) -> int:
        inserted = 0
        with self._lock:
            if len(person_ids) > 1:
                self.bulk_inserts += 1
            for pid in person_ids:
                key = (int(pid), work_date)
                if key in self._rows:
                    continue
                self._rows[key] = AttendanceRecord(person_id=int(pid), api_key=api_key, work_date=work_date)
                inserted += 1
        return inserted

    def get_for_person_and_date(self, person_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._rows.get((person_id, work_date))

    def mark_signed_in(self, *, person_id: int, work_date: date, sign_in_time: datetime, punctuality: Punctuality) -> bool:
        with self._lock:
            row = self._rows.get((person_id, work_date))
            if row is None or row.signed_in:
                return False
            self._rows[(person_id, work_date)] = replace(
                row,
                signed_in=True,
                sign_in_time=sign_in_time,
                punctuality=punctuality,
                status=AttendanceStatus.derive(True, row.signed_out),
            )
            return True

    def mark_signed_out(
        self, *, person_id: int, work_date: date, sign_out_time: datetime, punctuality: Optional[Punctuality]
    ) -> bool:
        with self._lock:
            row = self._rows.get((person_id, work_date))
            if row is None or not row.signed_in or row.signed_out:
                return False
            self._rows[(person_id, work_date)] = replace(
                row,
                signed_out=True,
                sign_out_time=sign_out_time,
                punctuality=punctuality or row.punctuality,
                status=AttendanceStatus.derive(True, True),
            )
            return True


class BrokenAttendance(InMemoryAttendance):
    def count_for_tenant_and_date(self, api_key: str, work_date: date) -> int:
        raise PersistenceError("connection reset by peer")


@dataclass
class RecordingSink:
    alerts: list[TenantMismatchAlert] = field(default_factory=list)

    def send_tenant_mismatch(self, alert: TenantMismatchAlert) -> None:
        self.alerts.append(alert)


class ExplodingSink:
    def send_tenant_mismatch(self, alert: TenantMismatchAlert) -> None:
        raise RuntimeError("smtp unavailable")


def build_world(
    *,
    persons: Sequence[Person] = (),
    settings: Optional[dict[str, TimeSettings]] = None,
    time_settings_repo=None,
    attendance: Optional[InMemoryAttendance] = None,
    sink=None,
    clock=None,
) -> Container:
    return assemble(
        persons_repo=InMemoryPersons(persons),
        tenants_repo=InMemoryTenants({ALPHA.api_key: ALPHA, BETA.api_key: BETA}),
        time_settings_repo=time_settings_repo or InMemoryTimeSettings(
            settings if settings is not None else {ALPHA.api_key: school_day(ALPHA.api_key), BETA.api_key: school_day(BETA.api_key)}
        ),
        attendance_repo=attendance or InMemoryAttendance(),
        mailbox=InMemoryDeviceMailbox(),
        alert_sink=sink if sink is not None else RecordingSink(),
        async_alerts=False,
        clock=clock,
    )
