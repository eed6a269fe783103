from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class TimeSettings:
    """Domain entity: a tenant's daily sign-in and sign-out windows.

    ``grace_minutes`` extends the sign-in window past ``sign_in_end`` (scans in
    the extension are recorded as late). ``early_leave_minutes`` enables the
    early-leave classification for sign-outs before
    ``sign_out_end - early_leave_minutes``; ``None`` disables it.
    """

    api_key: str
    sign_in_start: time
    sign_in_end: time
    sign_out_start: time
    sign_out_end: time
    grace_minutes: int = 0
    early_leave_minutes: Optional[int] = None
