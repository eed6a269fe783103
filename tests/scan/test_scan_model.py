from datetime import datetime

from rfid_attendance.core.enums import ScanOutcome
from rfid_attendance.scan.model import ScanResult


def test_dict_form_survives_the_mailbox_table():
    result = ScanResult(
        sign=ScanOutcome.REJECTED,
        message="Error during scan processing",
        flag="Error",
        uid="A1B2C3D4",
        device_uid="gate-1",
        exists=True,
        name="Ama Mensah",
        timestamp=datetime(2026, 3, 2, 7, 30, 5),
        error="connection reset by peer",
    )

    assert ScanResult.from_dict(result.to_dict()) == result


def test_optional_fields_are_left_out_of_the_dict():
    result = ScanResult(sign=ScanOutcome.UNKNOWN_TAG, message="New UID - registration required", flag="Register now")

    data = result.to_dict()

    assert data["sign"] == 2
    assert "name" not in data and "timestamp" not in data and "error" not in data
    assert ScanResult.from_dict(data) == result
