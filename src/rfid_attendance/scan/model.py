from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import ScanOutcome


@dataclass(frozen=True)
class ScanResult:
    """What a device gets back for one scan, directly or through the mailbox."""

    sign: ScanOutcome
    message: str
    flag: str
    uid: Optional[str] = None
    device_uid: Optional[str] = None
    exists: bool = False
    name: Optional[str] = None
    timestamp: Optional[datetime] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "uid": self.uid,
            "device_uid": self.device_uid,
            "exists": self.exists,
            "sign": int(self.sign),
            "message": self.message,
            "flag": self.flag,
        }
        if self.name is not None:
            out["name"] = self.name
        if self.timestamp is not None:
            out["timestamp"] = self.timestamp.isoformat()
        if self.error is not None:
            out["error"] = self.error
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanResult":
        ts = data.get("timestamp")
        return cls(
            sign=ScanOutcome(int(data["sign"])),
            message=str(data.get("message", "")),
            flag=str(data.get("flag", "")),
            uid=data.get("uid"),
            device_uid=data.get("device_uid"),
            exists=bool(data.get("exists", False)),
            name=data.get("name"),
            timestamp=datetime.fromisoformat(ts) if ts else None,
            error=data.get("error"),
        )
