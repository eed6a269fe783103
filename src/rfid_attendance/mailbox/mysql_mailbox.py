from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_MAILBOX_TTL_SECONDS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..scan.model import ScanResult
from .repository import DeviceMailbox


class MySQLDeviceMailbox(DeviceMailbox):
    """Mailbox shared by every service instance through the ``device_mailbox`` table.

    One row per device: ``put`` upserts it, ``take`` locks, reads and deletes
    it inside one transaction. Rows past ``expires_at`` are treated as absent.
    """

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        ttl_seconds: float = DEFAULT_MAILBOX_TTL_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._conn_factory = conn_factory
        self._ttl = timedelta(seconds=float(ttl_seconds))
        self._clock = clock

    def put(self, device_uid: str, result: ScanResult) -> None:
        payload = json.dumps(result.to_dict())
        expires_at = self._clock() + self._ttl
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO device_mailbox(device_uid, payload, expires_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload), expires_at=VALUES(expires_at)
                """,
                (device_uid, payload, expires_at),
            )

    def take(self, device_uid: str) -> Optional[ScanResult]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT payload, expires_at FROM device_mailbox WHERE device_uid=%s FOR UPDATE",
                (device_uid,),
            )
            row = fetchone(cur)
            if not row:
                return None
            cur.execute("DELETE FROM device_mailbox WHERE device_uid=%s", (device_uid,))

        if row["expires_at"] < self._clock():
            return None
        payload = row["payload"]
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8")
        return ScanResult.from_dict(json.loads(payload))

