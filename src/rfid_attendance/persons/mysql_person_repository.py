from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import PersonRepository

_COLUMNS = "person_id, uid, name, form, api_key"


def _to_person(row: dict) -> Person:
    return Person(
        person_id=int(row["person_id"]),
        uid=row["uid"],
        name=row["name"],
        form=row.get("form"),
        api_key=row["api_key"],
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_uid(self, uid: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM persons WHERE uid=%s ORDER BY person_id LIMIT 1",
                (uid,),
            )
            row = fetchone(cur)
            return _to_person(row) if row else None

    def get_by_uid_and_tenant(self, uid: str, api_key: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM persons WHERE uid=%s AND api_key=%s LIMIT 1",
                (uid, api_key),
            )
            row = fetchone(cur)
            return _to_person(row) if row else None

    def list_for_tenant(self, api_key: str) -> Sequence[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM persons WHERE api_key=%s ORDER BY person_id",
                (api_key,),
            )
            return [_to_person(r) for r in fetchall(cur)]
