from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Punctuality, ScanOutcome
from ..core.exceptions import PersistenceError
from ..persons.model import Person
from ..time_settings.model import TimeSettings
from ..time_settings.window import sign_in_open, sign_out_open
from .factory import PunctualityStrategyFactory
from .ledger import DailyLedger
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """Result of applying one scan to a person's daily record."""

    outcome: ScanOutcome
    message_key: str
    flag_key: str
    record: Optional[AttendanceRecord] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == ScanOutcome.SUCCESS


def _success(message_key: str, record: Optional[AttendanceRecord]) -> Transition:
    return Transition(outcome=ScanOutcome.SUCCESS, message_key=message_key, flag_key=message_key, record=record)


def _sign_in_message(punctuality: Optional[Punctuality]) -> str:
    return "scan.lateSignIn" if punctuality == Punctuality.LATE else "scan.signedIn"


def _sign_out_message(punctuality: Optional[Punctuality]) -> str:
    return "scan.earlySignOut" if punctuality == Punctuality.EARLY_LEAVE else "scan.signedOut"


class AttendanceService:
    """Attendance state machine: ``absent -> partial -> present``.

    A sign-in is applied inside the sign-in window (plus grace period). A
    sign-out is applied inside the sign-out window and only after a sign-in.
    When the windows overlap, the sign-in takes precedence until the person
    has signed in. Each scan applies at most one transition.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        ledger: DailyLedger,
        *,
        strategy_factory: PunctualityStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._ledger = ledger
        self._factory = strategy_factory or PunctualityStrategyFactory()

    def apply_scan(self, person: Person, settings: TimeSettings, *, now: datetime) -> Transition:
        in_sign_in = sign_in_open(now, settings)
        in_sign_out = sign_out_open(now, settings)

        if not in_sign_in and not in_sign_out:
            return Transition(
                outcome=ScanOutcome.REJECTED,
                message_key="scan.outsideTime",
                flag_key="scan.outsideFlag",
            )

        record = self._current_record(person, now)
        if in_sign_in and not (record.signed_in and in_sign_out):
            return self.sign_in(person, settings, record, now=now)
        return self.sign_out(person, settings, record, now=now)

    def sign_in(self, person: Person, settings: TimeSettings, record: AttendanceRecord, *, now: datetime) -> Transition:
        if record.signed_in:
            return _success(_sign_in_message(record.punctuality), record)

        strategy = self._factory.for_sign_in(now=now, settings=settings)
        decision = strategy.decide_sign_in(now=now, settings=settings)
        applied = self._attendance.mark_signed_in(
            person_id=person.person_id,
            work_date=record.work_date,
            sign_in_time=now,
            punctuality=decision.punctuality,
        )
        updated = self._reload(person, record)
        if not applied:
            # Another scan signed this person in first; report what it recorded.
            logger.info("Concurrent sign-in for person %s on %s", person.person_id, record.work_date)
            return _success(_sign_in_message(updated.punctuality), updated)

        logger.info("Person %s signed in (%s)", person.person_id, decision.punctuality.value)
        return _success(decision.message_key, updated)

    def sign_out(self, person: Person, settings: TimeSettings, record: AttendanceRecord, *, now: datetime) -> Transition:
        if not record.signed_in:
            return Transition(
                outcome=ScanOutcome.SIGN_IN_REQUIRED,
                message_key="scan.signInFirst",
                flag_key="scan.signInFlag",
                record=record,
            )
        if record.signed_out:
            return _success(_sign_out_message(record.punctuality), record)

        strategy = self._factory.for_sign_out(now=now, settings=settings)
        decision = strategy.decide_sign_out(now=now, settings=settings, current=record.punctuality)
        applied = self._attendance.mark_signed_out(
            person_id=person.person_id,
            work_date=record.work_date,
            sign_out_time=now,
            punctuality=decision.punctuality,
        )
        updated = self._reload(person, record)
        if not applied:
            logger.info("Concurrent sign-out for person %s on %s", person.person_id, record.work_date)
            return _success(_sign_out_message(updated.punctuality), updated)

        logger.info("Person %s signed out", person.person_id)
        return _success(decision.message_key, updated)

    def _current_record(self, person: Person, now: datetime) -> AttendanceRecord:
        work_date = now.date()
        record = self._attendance.get_for_person_and_date(person.person_id, work_date)
        if record is None:
            self._ledger.ensure_person(person, work_date)
            record = self._attendance.get_for_person_and_date(person.person_id, work_date)
        if record is None:
            raise PersistenceError(f"attendance row missing for person {person.person_id} on {work_date}")
        return record

    def _reload(self, person: Person, record: AttendanceRecord) -> AttendanceRecord:
        updated = self._attendance.get_for_person_and_date(person.person_id, record.work_date)
        if updated is None:
            raise PersistenceError(f"attendance row vanished for person {person.person_id} on {record.work_date}")
        return updated
