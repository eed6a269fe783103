from __future__ import annotations

from enum import Enum, IntEnum


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in the database."""

    ABSENT = "absent"
    PARTIAL = "partial"
    PRESENT = "present"

    @classmethod
    def derive(cls, signed_in: bool, signed_out: bool) -> "AttendanceStatus":
        if signed_in and signed_out:
            return cls.PRESENT
        if signed_in:
            return cls.PARTIAL
        return cls.ABSENT


class Punctuality(str, Enum):
    ON_TIME = "on_time"
    LATE = "late"
    EARLY_LEAVE = "early_leave"


class ScanOutcome(IntEnum):
    """Outcome codes returned to devices as ``sign``.

    Device firmware switches on these numbers, so the values never change.
    """

    REJECTED = 0
    SUCCESS = 1
    UNKNOWN_TAG = 2
    SIGN_IN_REQUIRED = 3


class MailboxBackend(str, Enum):
    MEMORY = "memory"
    MYSQL = "mysql"
