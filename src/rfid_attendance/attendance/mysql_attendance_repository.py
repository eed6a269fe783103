from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, Punctuality
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_for_tenant_and_date(self, api_key: str, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM attendance WHERE api_key=%s AND work_date=%s",
                (api_key, work_date),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def insert_absent_rows(self, *, api_key: str, work_date: date, person_ids: Sequence[int]) -> int:
        if not person_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            # uq_attendance_person_date turns duplicates from concurrent first scans into no-ops.
            cur.executemany(
                """
                INSERT IGNORE INTO attendance(person_id, api_key, work_date, signed_in, signed_out, status)
                VALUES(%s,%s,%s,0,0,%s)
                """,
                [(int(pid), api_key, work_date, AttendanceStatus.ABSENT.value) for pid in person_ids],
            )
            return max(int(cur.rowcount), 0)

    def get_for_person_and_date(self, person_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, person_id, api_key, work_date, signed_in, signed_out,
                       sign_in_time, sign_out_time, punctuality, status
                FROM attendance
                WHERE person_id=%s AND work_date=%s
                """,
                (person_id, work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(
                attendance_id=int(r["attendance_id"]),
                person_id=int(r["person_id"]),
                api_key=r["api_key"],
                work_date=r["work_date"],
                signed_in=bool(r["signed_in"]),
                signed_out=bool(r["signed_out"]),
                sign_in_time=r.get("sign_in_time"),
                sign_out_time=r.get("sign_out_time"),
                punctuality=Punctuality(r["punctuality"]) if r.get("punctuality") else None,
                status=AttendanceStatus(r["status"]),
            )

    def mark_signed_in(
        self,
        *,
        person_id: int,
        work_date: date,
        sign_in_time: datetime,
        punctuality: Punctuality,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET signed_in=1, sign_in_time=%s, punctuality=%s, status=%s
                WHERE person_id=%s AND work_date=%s AND signed_in=0
                """,
                (
                    sign_in_time,
                    punctuality.value,
                    AttendanceStatus.derive(True, False).value,
                    person_id,
                    work_date,
                ),
            )
            return cur.rowcount > 0

    def mark_signed_out(
        self,
        *,
        person_id: int,
        work_date: date,
        sign_out_time: datetime,
        punctuality: Optional[Punctuality],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET signed_out=1, sign_out_time=%s, punctuality=COALESCE(%s, punctuality), status=%s
                WHERE person_id=%s AND work_date=%s AND signed_in=1 AND signed_out=0
                """,
                (
                    sign_out_time,
                    punctuality.value if punctuality else None,
                    AttendanceStatus.derive(True, True).value,
                    person_id,
                    work_date,
                ),
            )
            return cur.rowcount > 0
