from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..attendance.ledger import DailyLedger
from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..common.messages import get_message
from ..common.validators import optional_str, require_non_empty
from ..core.constants import DEFAULT_LANGUAGE
from ..core.enums import ScanOutcome
from ..core.exceptions import ConfigurationError, PersistenceError, ValidationError
from ..mailbox.repository import DeviceMailbox
from ..notifications.dispatcher import AlertDispatcher
from ..notifications.sink import TenantMismatchAlert
from ..persons.model import Person
from ..persons.resolver import IdentityResolver, Resolution, ResolutionKind
from ..time_settings.repository import TimeSettingsRepository
from .model import ScanResult

logger = logging.getLogger(__name__)


class ScanService:
    """Use case: turn one tag scan into an attendance transition.

    Pipeline: resolve identity, initialize the day's ledger, load the
    tenant's windows, apply the state machine, then leave the result in the
    device's mailbox for polling. Every scan ends in exactly one outcome code.
    """

    def __init__(
        self,
        resolver: IdentityResolver,
        ledger: DailyLedger,
        attendance: AttendanceService,
        time_settings: TimeSettingsRepository,
        mailbox: DeviceMailbox,
        *,
        alerts: Optional[AlertDispatcher] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._resolver = resolver
        self._ledger = ledger
        self._attendance = attendance
        self._time_settings = time_settings
        self._mailbox = mailbox
        self._alerts = alerts
        self._clock = clock

    def handle_scan(
        self,
        *,
        uid: Optional[str],
        device_uid: Optional[str],
        api_key: Optional[str] = None,
        lang: str = DEFAULT_LANGUAGE,
        now: Optional[datetime] = None,
    ) -> ScanResult:
        """Process a scan and store its result in the device mailbox.

        Raises ``ValidationError`` for missing fields (nothing is recorded),
        ``ConfigurationError`` when the tenant has no usable time settings and
        ``PersistenceError`` on store failures; the last two still leave a
        result in the mailbox so a polling device is not left waiting.
        """
        uid = require_non_empty(uid, "uid")
        device_uid = require_non_empty(device_uid, "device_uid")
        api_key = optional_str(api_key)
        now = now or self._clock()

        try:
            result = self._process(uid=uid, device_uid=device_uid, api_key=api_key, lang=lang, now=now)
            self._mailbox.put(device_uid, result)
        except ConfigurationError as exc:
            logger.warning("Scan rejected for device %s: %s", device_uid, exc)
            self._record(
                device_uid,
                ScanResult(
                    sign=ScanOutcome.REJECTED,
                    message=str(exc),
                    flag=get_message(lang, "timeSettings.flag"),
                    uid=uid,
                    device_uid=device_uid,
                    exists=True,
                    timestamp=now,
                ),
            )
            raise
        except PersistenceError as exc:
            logger.exception("Error processing scan uid=%s device=%s", uid, device_uid)
            self._record(
                device_uid,
                ScanResult(
                    sign=ScanOutcome.REJECTED,
                    message=get_message(lang, "scan.error"),
                    flag=get_message(lang, "scan.errorFlag"),
                    uid=uid,
                    device_uid=device_uid,
                    exists=False,
                    timestamp=now,
                    error=str(exc),
                ),
            )
            raise

        logger.info("Scan uid=%s device=%s -> sign=%d", uid, device_uid, int(result.sign))
        return result

    def take_pending(self, device_uid: Optional[str]) -> list[ScanResult]:
        """Drain the device mailbox: zero or one pending result."""
        device_uid = require_non_empty(device_uid, "device_uid")
        result = self._mailbox.take(device_uid)
        return [result] if result is not None else []

    def _process(self, *, uid: str, device_uid: str, api_key: Optional[str], lang: str, now: datetime) -> ScanResult:
        resolution = self._resolver.resolve(uid, api_key)

        if resolution.kind == ResolutionKind.UNKNOWN_TAG:
            return ScanResult(
                sign=ScanOutcome.UNKNOWN_TAG,
                message=get_message(lang, "scan.uidNotRegistered"),
                flag=get_message(lang, "scan.registerNow"),
                uid=uid,
                device_uid=device_uid,
                exists=False,
                timestamp=now,
            )

        if resolution.kind == ResolutionKind.TENANT_MISMATCH:
            self._alert_mismatch(resolution, uid=uid, device_uid=device_uid, api_key=api_key or "")
            mismatch = get_message(lang, "scan.mismatch", resolution.owner_name)
            return ScanResult(
                sign=ScanOutcome.REJECTED,
                message=mismatch,
                flag=mismatch,
                uid=uid,
                device_uid=device_uid,
                exists=True,
                name=resolution.person.name,
                timestamp=now,
            )

        person: Person = resolution.person
        self._ledger.ensure_day(person.api_key, now.date())

        try:
            settings = self._time_settings.get_for_tenant(person.api_key)
        except ValidationError as exc:
            logger.error("Invalid time settings for tenant %s: %s", person.api_key, exc)
            raise ConfigurationError(get_message(lang, "timeSettings.invalid")) from exc
        if settings is None:
            raise ConfigurationError(get_message(lang, "timeSettings.notFound"))

        transition = self._attendance.apply_scan(person, settings, now=now)
        return ScanResult(
            sign=transition.outcome,
            message=get_message(lang, transition.message_key),
            flag=get_message(lang, transition.flag_key),
            uid=uid,
            device_uid=device_uid,
            exists=True,
            name=person.name,
            timestamp=now,
        )

    def _alert_mismatch(self, resolution: Resolution, *, uid: str, device_uid: str, api_key: str) -> None:
        if self._alerts is None:
            return
        owner = resolution.owner
        self._alerts.dispatch_tenant_mismatch(
            TenantMismatchAlert(
                owner_api_key=resolution.person.api_key,
                owner_name=resolution.owner_name or "",
                owner_email=owner.email if owner else None,
                person_name=resolution.person.name,
                uid=uid,
                device_uid=device_uid,
                scanning_api_key=api_key,
            )
        )

    def _record(self, device_uid: str, result: ScanResult) -> None:
        try:
            self._mailbox.put(device_uid, result)
        except PersistenceError:
            logger.exception("Could not record failed scan for device %s", device_uid)
