from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantMismatchAlert:
    """A tag enrolled under ``owner_api_key`` was scanned with another tenant's key."""

    owner_api_key: str
    owner_name: str
    owner_email: Optional[str]
    person_name: str
    uid: str
    device_uid: str
    scanning_api_key: str


class AlertSink(Protocol):
    def send_tenant_mismatch(self, alert: TenantMismatchAlert) -> None:
        raise NotImplementedError


class LogAlertSink(AlertSink):
    """Used when no SMTP server is configured."""

    def send_tenant_mismatch(self, alert: TenantMismatchAlert) -> None:
        logger.warning(
            "Tenant mismatch: tag %s (%s) of %r scanned on device %s",
            alert.uid,
            alert.person_name,
            alert.owner_name,
            alert.device_uid,
        )


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    sender: str = "no-reply@rfid-attendance.local"
    use_tls: bool = True
    timeout: float = 10.0


class SmtpAlertSink(AlertSink):
    def __init__(self, config: SmtpConfig, *, subject: str, render_body):
        self._config = config
        self._subject = subject
        self._render_body = render_body

    def send_tenant_mismatch(self, alert: TenantMismatchAlert) -> None:
        if not alert.owner_email:
            logger.info("No contact email for tenant %r; mismatch alert not sent", alert.owner_name)
            return

        msg = EmailMessage()
        msg["From"] = self._config.sender
        msg["To"] = alert.owner_email
        msg["Subject"] = self._subject
        msg.set_content(self._render_body(alert))

        with smtplib.SMTP(self._config.host, self._config.port, timeout=self._config.timeout) as smtp:
            if self._config.use_tls:
                smtp.starttls()
            if self._config.user:
                smtp.login(self._config.user, self._config.password or "")
            smtp.send_message(msg)
        logger.info("Mismatch alert sent to %s", alert.owner_email)
