"""Progress and time-remaining estimation for deep scans."""
from __future__ import annotations

from typing import Optional

__all__ = ["estimate_remaining", "format_eta"]


def estimate_remaining(
    started_at: float, completed: int, discovered: int, now: float
) -> Optional[float]:
    """Seconds left, extrapolated from the average time per completed page.

    Returns None when nothing has completed or nothing is discovered yet, and
    when the estimate would be negative.
    """
    if completed <= 0 or discovered <= 0:
        return None
    average = (now - started_at) / completed
    remaining = average * (discovered - completed)
    if remaining < 0:
        return None
    return remaining


def format_eta(seconds: Optional[float]) -> str:
    if seconds is None:
        return "--"
    total = int(round(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}m"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"
