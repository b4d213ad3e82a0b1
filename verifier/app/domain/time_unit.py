"""Time units for receive timeouts."""
from __future__ import annotations

import math
from enum import Enum
from fractions import Fraction

_NANOS_PER_MILLI = 1_000_000


class TimeUnit(Enum):
    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 3_600 * 1_000_000_000
    DAYS = 86_400 * 1_000_000_000

    def to_millis(self, duration: float) -> int:
        """Convert to whole milliseconds, truncating toward zero."""
        return math.trunc(Fraction(duration) * self.value / _NANOS_PER_MILLI)
