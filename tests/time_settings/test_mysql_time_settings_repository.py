from datetime import time, timedelta

import pytest

from rfid_attendance.core.exceptions import ValidationError
from rfid_attendance.time_settings.mysql_time_settings_repository import MySQLTimeSettingsRepository


class FakeCursor:
    def __init__(self, row):
        self._row = row
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchone(self):
        return self._row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, row):
        self.cur = FakeCursor(row)
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self, row):
        self.conn = FakeConnection(row)

    def connect(self):
        return self.conn


def _row(**overrides):
    row = {
        "api_key": "alpha-key",
        "sign_in_start": timedelta(hours=7),
        "sign_in_end": "08:00:00",
        "sign_out_start": time(14, 0),
        "sign_out_end": "16:00",
        "grace_minutes": None,
        "early_leave_minutes": None,
    }
    row.update(overrides)
    return row


def test_mysql_time_values_are_normalized_and_defaults_applied():
    repo = MySQLTimeSettingsRepository(
        FakeConnectionFactory(_row()), default_grace_minutes=5, default_early_leave_minutes=30
    )

    settings = repo.get_for_tenant("alpha-key")

    assert settings.sign_in_start == time(7, 0)
    assert settings.sign_in_end == time(8, 0)
    assert settings.sign_out_end == time(16, 0)
    assert settings.grace_minutes == 5
    assert settings.early_leave_minutes == 30


def test_tenant_columns_override_defaults():
    repo = MySQLTimeSettingsRepository(
        FakeConnectionFactory(_row(grace_minutes=10, early_leave_minutes=0)), default_grace_minutes=5
    )

    settings = repo.get_for_tenant("alpha-key")

    assert settings.grace_minutes == 10
    assert settings.early_leave_minutes == 0


def test_missing_row():
    assert MySQLTimeSettingsRepository(FakeConnectionFactory(None)).get_for_tenant("alpha-key") is None


def test_unparseable_stored_time_raises_validation_error():
    factory = FakeConnectionFactory(_row(sign_in_start="7am"))

    with pytest.raises(ValidationError):
        MySQLTimeSettingsRepository(factory).get_for_tenant("alpha-key")
    assert factory.conn.rolled_back
