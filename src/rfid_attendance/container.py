from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .attendance.factory import PunctualityStrategyFactory
from .attendance.ledger import DailyLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.messages import get_message
from .core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_MAILBOX_TTL_SECONDS
from .core.enums import MailboxBackend
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import ping
from .mailbox.memory_mailbox import InMemoryDeviceMailbox
from .mailbox.mysql_mailbox import MySQLDeviceMailbox
from .mailbox.repository import DeviceMailbox
from .notifications.dispatcher import AlertDispatcher
from .notifications.sink import AlertSink, LogAlertSink, SmtpAlertSink, SmtpConfig, TenantMismatchAlert
from .persons.mysql_person_repository import MySQLPersonRepository
from .persons.repository import PersonRepository
from .persons.resolver import IdentityResolver
from .scan.service import ScanService
from .tenants.mysql_tenant_repository import MySQLTenantRepository
from .tenants.repository import TenantRepository
from .time_settings.mysql_time_settings_repository import MySQLTimeSettingsRepository
from .time_settings.repository import TimeSettingsRepository


@dataclass(frozen=True)
class Container:
    persons_repo: PersonRepository
    tenants_repo: TenantRepository
    time_settings_repo: TimeSettingsRepository
    attendance_repo: AttendanceRepository
    mailbox: DeviceMailbox

    resolver: IdentityResolver
    ledger: DailyLedger
    attendance_service: AttendanceService
    scan_service: ScanService

    health_probe: Callable[[], bool]
    conn: Optional[DatabaseConnection] = None


def _render_mismatch_body(alert: TenantMismatchAlert) -> str:
    return get_message("en", "alert.mismatchBody", alert.person_name, alert.uid, alert.device_uid)


def build_alert_sink(mail_config: Optional[dict]) -> AlertSink:
    mail_config = mail_config or {}
    if not mail_config.get("host"):
        return LogAlertSink()
    config = SmtpConfig(
        host=str(mail_config["host"]),
        port=int(mail_config.get("port", 587)),
        user=mail_config.get("user") or None,
        password=mail_config.get("password") or None,
        use_tls=bool(mail_config.get("use_tls", True)),
        **({"sender": str(mail_config["sender"])} if mail_config.get("sender") else {}),
    )
    return SmtpAlertSink(
        config,
        subject=get_message("en", "alert.mismatchSubject"),
        render_body=_render_mismatch_body,
    )


def assemble(
    *,
    persons_repo: PersonRepository,
    tenants_repo: TenantRepository,
    time_settings_repo: TimeSettingsRepository,
    attendance_repo: AttendanceRepository,
    mailbox: DeviceMailbox,
    alert_sink: Optional[AlertSink] = None,
    async_alerts: bool = True,
    health_probe: Callable[[], bool] = lambda: True,
    clock: Optional[Callable[[], Any]] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of already-built repositories."""

    resolver = IdentityResolver(persons_repo, tenants_repo)
    ledger = DailyLedger(attendance_repo, persons_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        ledger,
        strategy_factory=PunctualityStrategyFactory(),
    )
    alerts = AlertDispatcher(alert_sink, run_async=async_alerts) if alert_sink is not None else None

    scan_kwargs: dict[str, Any] = {"alerts": alerts}
    if clock is not None:
        scan_kwargs["clock"] = clock
    scan_service = ScanService(resolver, ledger, attendance_service, time_settings_repo, mailbox, **scan_kwargs)

    return Container(
        persons_repo=persons_repo,
        tenants_repo=tenants_repo,
        time_settings_repo=time_settings_repo,
        attendance_repo=attendance_repo,
        mailbox=mailbox,
        resolver=resolver,
        ledger=ledger,
        attendance_service=attendance_service,
        scan_service=scan_service,
        health_probe=health_probe,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    mailbox_backend: str = MailboxBackend.MEMORY.value,
    mailbox_ttl_seconds: float = DEFAULT_MAILBOX_TTL_SECONDS,
    default_grace_minutes: int = DEFAULT_GRACE_MINUTES,
    default_early_leave_minutes: Optional[int] = None,
    mail_config: Optional[dict] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    if MailboxBackend(mailbox_backend) == MailboxBackend.MYSQL:
        mailbox: DeviceMailbox = MySQLDeviceMailbox(conn, ttl_seconds=mailbox_ttl_seconds)
    else:
        mailbox = InMemoryDeviceMailbox(ttl_seconds=mailbox_ttl_seconds)

    return assemble(
        persons_repo=MySQLPersonRepository(conn),
        tenants_repo=MySQLTenantRepository(conn),
        time_settings_repo=MySQLTimeSettingsRepository(
            conn,
            default_grace_minutes=default_grace_minutes,
            default_early_leave_minutes=default_early_leave_minutes,
        ),
        attendance_repo=MySQLAttendanceRepository(conn),
        mailbox=mailbox,
        alert_sink=build_alert_sink(mail_config),
        health_probe=lambda: ping(conn),
        conn=conn,
    )
