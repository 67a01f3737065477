"""Time source used by the domain.

Services take a ``Clock`` so tests can pin "now" (cut-off planning and
reservation expiry depend on it).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
