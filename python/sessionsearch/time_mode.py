"""Time mode selection and the seconds/milliseconds conversions around it."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum, unique
from typing import Optional

HOUR_MS = 3_600_000
MS_PER_SECOND = 1000

ALL_TIME_PARAM = "-1"
CUSTOM_PARAM = "0"


class SearchParamError(ValueError):
    """Raised when a time mode or timestamp parameter cannot be interpreted."""


@unique
class TimeModeKind(Enum):
    RELATIVE = "relative"
    ALL_TIME = "all_time"
    CUSTOM = "custom"


@dataclass(frozen=True)
class TimeMode:
    """How the search window is derived.

    ``hours`` is only meaningful for :attr:`TimeModeKind.RELATIVE`.
    """

    kind: TimeModeKind
    hours: int = 0

    @classmethod
    def relative(cls, hours: int) -> "TimeMode":
        hours = int(hours)
        if hours <= 0:
            raise SearchParamError(f"Relative time mode needs a positive hour count, got {hours}")
        return cls(TimeModeKind.RELATIVE, hours)

    @classmethod
    def all_time(cls) -> "TimeMode":
        return cls(TimeModeKind.ALL_TIME)

    @classmethod
    def custom(cls) -> "TimeMode":
        return cls(TimeModeKind.CUSTOM)

    @classmethod
    def parse(cls, value: str) -> "TimeMode":
        """Decode the ``date`` query parameter."""
        text = str(value).strip()
        if text == ALL_TIME_PARAM:
            return cls.all_time()
        if text == CUSTOM_PARAM:
            return cls.custom()
        try:
            hours = int(text)
        except ValueError as exc:
            raise SearchParamError(f"Unrecognised time mode {value!r}") from exc
        return cls.relative(hours)

    @property
    def is_relative(self) -> bool:
        return self.kind is TimeModeKind.RELATIVE

    @property
    def is_all_time(self) -> bool:
        return self.kind is TimeModeKind.ALL_TIME

    @property
    def is_custom(self) -> bool:
        return self.kind is TimeModeKind.CUSTOM

    def to_param(self) -> str:
        if self.is_all_time:
            return ALL_TIME_PARAM
        if self.is_custom:
            return CUSTOM_PARAM
        return str(self.hours)


def seconds_to_millis(value) -> int:
    """Scale a seconds value (number or numeric string) to integer milliseconds.

    Fractional milliseconds are truncated. Zero, NaN, infinities and
    non-numeric input raise :class:`SearchParamError`.
    """
    if value is None or isinstance(value, bool):
        raise SearchParamError(f"Invalid timestamp {value!r}")
    try:
        scaled = float(value) * MS_PER_SECOND
    except (TypeError, ValueError) as exc:
        raise SearchParamError(f"Invalid timestamp {value!r}") from exc
    if not math.isfinite(scaled):
        raise SearchParamError(f"Invalid timestamp {value!r}")
    millis = int(scaled)
    if millis == 0:
        raise SearchParamError(f"Invalid timestamp {value!r}")
    return millis


def millis_to_seconds_param(millis: int) -> str:
    """Whole seconds, rounded half-up, as written to the query string."""
    seconds = (Decimal(int(millis)) / MS_PER_SECOND).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return str(int(seconds))


def is_valid_millis(value: Optional[float]) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number != 0


__all__ = [
    "ALL_TIME_PARAM",
    "CUSTOM_PARAM",
    "HOUR_MS",
    "MS_PER_SECOND",
    "SearchParamError",
    "TimeMode",
    "TimeModeKind",
    "is_valid_millis",
    "millis_to_seconds_param",
    "seconds_to_millis",
]
