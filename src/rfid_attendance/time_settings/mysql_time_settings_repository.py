from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import TimeSettings
from .repository import TimeSettingsRepository
from .window import parse_time_of_day


class MySQLTimeSettingsRepository(TimeSettingsRepository):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        default_grace_minutes: int = 0,
        default_early_leave_minutes: Optional[int] = None,
    ):
        self._conn_factory = conn_factory
        self._default_grace_minutes = int(default_grace_minutes)
        self._default_early_leave_minutes = default_early_leave_minutes

    def get_for_tenant(self, api_key: str) -> Optional[TimeSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT api_key, sign_in_start, sign_in_end, sign_out_start, sign_out_end,
                       grace_minutes, early_leave_minutes
                FROM time_settings
                WHERE api_key=%s
                LIMIT 1
                """,
                (api_key,),
            )
            r = fetchone(cur)
            if not r:
                return None

            grace = r.get("grace_minutes")
            early = r.get("early_leave_minutes")
            return TimeSettings(
                api_key=r["api_key"],
                sign_in_start=parse_time_of_day(r["sign_in_start"]),
                sign_in_end=parse_time_of_day(r["sign_in_end"]),
                sign_out_start=parse_time_of_day(r["sign_out_start"]),
                sign_out_end=parse_time_of_day(r["sign_out_end"]),
                grace_minutes=int(grace) if grace is not None else self._default_grace_minutes,
                early_leave_minutes=int(early) if early is not None else self._default_early_leave_minutes,
            )
