"""
Calendar value types shared by the resolver and the renderer.
"""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TextIO

from fycal.fyc_core.errors import OutOfRangeMonth, OutOfRangeYear

MIN_YEAR = datetime.MINYEAR
MAX_YEAR = datetime.MAXYEAR


# ─────────────────────────────────────────────────────────────────────────────
# Months and spans
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class CalendarMonth:
    """A single month of a single year."""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise OutOfRangeMonth(f"Month must be between 1 and 12, got {self.month}")
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise OutOfRangeYear(f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {self.year}")

    @classmethod
    def from_date(cls, value: datetime.date) -> "CalendarMonth":
        return cls(value.year, value.month)

    @classmethod
    def today(cls) -> "CalendarMonth":
        return cls.from_date(datetime.date.today())

    @property
    def index(self) -> int:
        """Months elapsed since January of year 0."""
        return self.year * 12 + self.month - 1

    def shift(self, months: int) -> "CalendarMonth":
        """Return the month `months` later (or earlier, when negative)."""
        year, month0 = divmod(self.index + months, 12)
        return CalendarMonth(year, month0 + 1)

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class DateSpan:
    """An anchor month plus the number of months shown before and after it."""
    anchor: CalendarMonth
    months_before: int = 0
    months_after: int = 0

    def __post_init__(self):
        if self.months_before < 0 or self.months_after < 0:
            raise ValueError("months_before and months_after must be non-negative")
        # Both edges must be representable months.
        self.anchor.shift(-self.months_before)
        self.anchor.shift(self.months_after)

    @property
    def first(self) -> CalendarMonth:
        return self.anchor.shift(-self.months_before)

    @property
    def last(self) -> CalendarMonth:
        return self.anchor.shift(self.months_after)

    def __len__(self):
        return self.months_before + 1 + self.months_after

    def months(self) -> List[CalendarMonth]:
        first = self.first
        return [first.shift(offset) for offset in range(len(self))]


# ─────────────────────────────────────────────────────────────────────────────
# Display settings
# ─────────────────────────────────────────────────────────────────────────────

class WeekStart(Enum):
    """Weekday shown in the leftmost column; values match `calendar` (Monday = 0)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def default(cls) -> "WeekStart":
        return cls.MONDAY

    @classmethod
    def from_number(cls, number: int) -> "WeekStart":
        """Convert a 1 (Sunday) to 7 (Saturday) day number."""
        if not 1 <= number <= 7:
            raise ValueError(f"Day number must be between 1 and 7, got {number}")
        return cls((number + 5) % 7)

    @classmethod
    def parse(cls, text: str) -> "WeekStart":
        """
        Parse a full day name, its two-letter abbreviation, or a number
        from 1 (Sunday) to 7 (Saturday). Case-insensitive.
        """
        value = text.strip().lower()
        if value.isdigit():
            try:
                return cls.from_number(int(value))
            except ValueError:
                pass
        else:
            for day in cls:
                name = day.name.lower()
                if value in (name, name[:2]):
                    return day
        raise ValueError(
            f"Invalid day: {text}. Please provide a day of the week, "
            "its abbreviation, or a number from 1 to 7."
        )

    @property
    def abbreviation(self) -> str:
        return self.name[:2].title()

    def __str__(self):
        return self.name.title()


class ColorMode(Enum):
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"

    @classmethod
    def parse(cls, text: str) -> "ColorMode":
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Invalid color mode: {text}. Choose one of: {choices}") from None

    def enabled(self, stream: Optional[TextIO] = None, no_color: bool = False) -> bool:
        """Decide whether to emit styles when writing to `stream`."""
        if self is ColorMode.ALWAYS:
            return True
        if self is ColorMode.NEVER or no_color or stream is None:
            return False
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())
