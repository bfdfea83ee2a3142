"""Formatting and parsing helpers for the date-picker fields."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

DATE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"
ALT_INPUT_FORMATS = ("%Y/%m/%d %H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")


def format_millis(time_millis: int, fmt: Optional[str] = None) -> str:
    """Render epoch milliseconds in local time."""
    dt = datetime.fromtimestamp(time_millis / 1000.0)
    return dt.strftime(fmt or DATE_TIME_FORMAT)


def parse_picker_value(text: Optional[str], formats: Optional[Iterable[str]] = None) -> Optional[int]:
    """Epoch milliseconds for a local date-picker entry, or None when it does not parse."""
    if not text or not text.strip():
        return None
    value = text.strip()
    candidates = list(formats) if formats is not None else [DATE_TIME_FORMAT, *ALT_INPUT_FORMATS]
    for pattern in candidates:
        try:
            parsed = datetime.strptime(value, pattern)
        except ValueError:
            continue
        return int(parsed.timestamp() * 1000)
    return None


def format_delta(delta_millis: int) -> str:
    """Render a duration as ``[-][Nd ]HH:MM:SS``."""
    sign = "-" if delta_millis < 0 else ""
    total_seconds = abs(int(delta_millis)) // 1000
    days, remainder = divmod(total_seconds, 86_400)
    hours, remainder = divmod(remainder, 3_600)
    minutes, seconds = divmod(remainder, 60)
    clock = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        return f"{sign}{days}d {clock}"
    return f"{sign}{clock}"


__all__ = [
    "ALT_INPUT_FORMATS",
    "DATE_TIME_FORMAT",
    "format_delta",
    "format_millis",
    "parse_picker_value",
]
