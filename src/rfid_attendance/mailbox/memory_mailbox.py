from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from ..core.constants import DEFAULT_MAILBOX_TTL_SECONDS, MAILBOX_LOCK_STRIPES
from ..scan.model import ScanResult
from .repository import DeviceMailbox


class InMemoryDeviceMailbox(DeviceMailbox):
    """Process-local mailbox.

    Locks are striped by device id so devices hashing to different stripes
    never wait on each other. Only suitable for a single service instance;
    use :class:`MySQLDeviceMailbox` when running several.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_MAILBOX_TTL_SECONDS,
        stripes: int = MAILBOX_LOCK_STRIPES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._locks = [threading.Lock() for _ in range(max(int(stripes), 1))]
        self._slots: dict[str, tuple[ScanResult, float]] = {}
        self._next_sweep = self._clock() + self._ttl

    def _lock_for(self, device_uid: str) -> threading.Lock:
        return self._locks[hash(device_uid) % len(self._locks)]

    def put(self, device_uid: str, result: ScanResult) -> None:
        with self._lock_for(device_uid):
            self._slots[device_uid] = (result, self._clock() + self._ttl)
        if self._clock() >= self._next_sweep:
            self.purge_expired()

    def take(self, device_uid: str) -> Optional[ScanResult]:
        with self._lock_for(device_uid):
            entry = self._slots.pop(device_uid, None)
        if entry is None:
            return None
        result, expires_at = entry
        if self._clock() > expires_at:
            return None
        return result

    def purge_expired(self) -> int:
        """Drop results of devices that never polled. Runs at most once per TTL from ``put``."""
        now = self._clock()
        self._next_sweep = now + self._ttl
        purged = 0
        for device_uid, (_, expires_at) in list(self._slots.items()):
            if now <= expires_at:
                continue
            with self._lock_for(device_uid):
                entry = self._slots.get(device_uid)
                # Re-check under the lock: the device may have scanned again meanwhile.
                if entry is not None and now > entry[1]:
                    del self._slots[device_uid]
                    purged += 1
        return purged

    def __len__(self) -> int:
        return len(self._slots)
