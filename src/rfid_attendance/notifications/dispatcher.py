from __future__ import annotations

import logging
import threading

from .sink import AlertSink, TenantMismatchAlert

logger = logging.getLogger(__name__)


class AlertDispatcher:
    """Fire-and-forget delivery: a failing or slow sink never affects the scan.

    ``run_async=False`` delivers inline (still swallowing errors), which keeps
    tests deterministic.
    """

    def __init__(self, sink: AlertSink, *, run_async: bool = True):
        self._sink = sink
        self._run_async = run_async

    def dispatch_tenant_mismatch(self, alert: TenantMismatchAlert) -> None:
        if not self._run_async:
            self._deliver(alert)
            return
        worker = threading.Thread(
            target=self._deliver,
            args=(alert,),
            name=f"mismatch-alert-{alert.device_uid}",
            daemon=True,
        )
        worker.start()

    def _deliver(self, alert: TenantMismatchAlert) -> None:
        try:
            self._sink.send_tenant_mismatch(alert)
        except Exception:
            logger.exception("Failed to deliver mismatch alert for tag %s to %r", alert.uid, alert.owner_name)
