# ssocred/auth/expiry.py
"""만료 시각 표시 유틸리티"""

from __future__ import annotations

from datetime import datetime

from ..config import settings
from .types import parse_timestamp, utc_now


def format_time_remaining(expires_at: datetime | str, now: datetime | None = None) -> str:
    """남은 시간 문자열

    Returns:
        "2h 15m", "14m 3s", "42s", 만료 시 "EXPIRED"
    """
    expires_at = parse_timestamp(expires_at)
    now = now or utc_now()
    if expires_at <= now:
        return "EXPIRED"

    total = int((expires_at - now).total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def is_expiring_soon(
    expires_at: datetime | str,
    threshold_minutes: int | None = None,
    now: datetime | None = None,
) -> bool:
    """만료 전이면서 남은 시간이 threshold_minutes 미만인지"""
    if threshold_minutes is None:
        threshold_minutes = settings.EXPIRING_THRESHOLD_MINUTES
    remaining = (parse_timestamp(expires_at) - (now or utc_now())).total_seconds() / 60
    return 0 < remaining < threshold_minutes
