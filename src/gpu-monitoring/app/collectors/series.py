"""Helpers shared by the series correlators."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime

from shared.config import get_settings
from shared.models import SeriesPoint


@dataclass
class CorrelationStats:
    """Counts of series points seen and skipped during one correlation."""

    points: int = 0
    missing_identity: int = 0
    invalid_value: int = 0
    ignored_metric: int = 0

    @property
    def skipped(self) -> int:
        return self.missing_identity + self.invalid_value + self.ignored_metric

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def sample_value(point: SeriesPoint) -> float | None:
    """Parse the sample value of a point.

    Returns None when the value pair is short, the value is not a string,
    or it is not a finite decimal number. Surrounding whitespace and digit
    separators are rejected, which float() alone would accept.
    """
    if len(point.value) < 2:
        return None

    raw = point.value[1]
    if not isinstance(raw, str):
        return None
    if raw != raw.strip() or "_" in raw:
        return None

    try:
        value = float(raw)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    return value


def parse_index(label: str) -> int | None:
    """Parse a GPU index or pid label.

    Only canonical ASCII digit strings are accepted: "01" is rejected so
    that it cannot merge with "1".
    """
    if not label or not (label.isascii() and label.isdigit()):
        return None
    if len(label) > 1 and label.startswith("0"):
        return None
    return int(label)


def capture_time() -> datetime:
    """Current time in the configured display timezone."""
    return datetime.now(get_settings().display_timezone)
