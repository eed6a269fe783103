from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Tenant
from .repository import TenantRepository


class MySQLTenantRepository(TenantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_api_key(self, api_key: str) -> Optional[Tenant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT api_key, name, email FROM tenants WHERE api_key=%s LIMIT 1",
                (api_key,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Tenant(api_key=row["api_key"], name=row["name"], email=row.get("email"))
