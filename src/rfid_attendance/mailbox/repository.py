from __future__ import annotations

from typing import Optional, Protocol

from ..scan.model import ScanResult


class DeviceMailbox(Protocol):
    """Single-slot, pop-once holding area for a device's latest scan result.

    ``put`` overwrites whatever is pending for the device; ``take`` returns the
    pending result and removes it in one atomic step.
    """

    def put(self, device_uid: str, result: ScanResult) -> None:
        raise NotImplementedError

    def take(self, device_uid: str) -> Optional[ScanResult]:
        raise NotImplementedError
