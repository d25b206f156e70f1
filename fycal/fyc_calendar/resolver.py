"""
Date expression resolver.

Turns the positional date expression (or the explicit --year/--month options)
into the span of months to display. Supported expressions, case-insensitive:

    2024, 24        whole calendar year (two-digit years use the current century)
    Q2              calendar quarter of the current year
    FY, FY2024      fiscal year, labeled by the calendar year it ends in
    FYQ3, FY24Q3    fiscal quarter (current fiscal year when the year is omitted)

Without an expression the span is a single month, today's or the one given
with --year/--month, widened by --months-before/--months-after.
"""

import datetime
import logging
import re
from typing import Optional, Union

from fycal.fyc_calendar.models import MAX_YEAR, MIN_YEAR, CalendarMonth, DateSpan
from fycal.fyc_core.errors import (
    ConflictingInput,
    InvalidExpression,
    OutOfRangeMonth,
    OutOfRangeYear,
)

logger = logging.getLogger(__name__)

DEFAULT_FISCAL_YEAR_START_MONTH = 7

YEAR_PATTERN = re.compile(r"^(\d{2}|\d{4})$")
QUARTER_PATTERN = re.compile(r"^q([1-4])$")
FISCAL_PATTERN = re.compile(r"^fy(\d{2}|\d{4})?(?:q([1-4]))?$")

MONTHS_PER_YEAR = 12
MONTHS_PER_QUARTER = 3


# ─────────────────────────────────────────────────────────────────────────────
# Year and fiscal arithmetic
# ─────────────────────────────────────────────────────────────────────────────

def expand_year(text: str, today: CalendarMonth) -> int:
    """Expand a two-digit year into the current century; four digits pass through."""
    value = int(text)
    if len(text) == 2:
        return today.year // 100 * 100 + value
    return value


def current_fiscal_year(today: CalendarMonth, start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH) -> int:
    """Label of the fiscal year containing `today`."""
    if start_month > 1 and today.month >= start_month:
        return today.year + 1
    return today.year


def fiscal_year_start(fiscal_year: int, start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH) -> CalendarMonth:
    """First month of `fiscal_year`, which ends in the calendar year of the same number."""
    year = fiscal_year - 1 if start_month > 1 else fiscal_year
    return CalendarMonth(year, start_month)


def fiscal_quarter_start(fiscal_year: int, quarter: int,
                         start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH) -> CalendarMonth:
    return fiscal_year_start(fiscal_year, start_month).shift(MONTHS_PER_QUARTER * (quarter - 1))


def _checked_year(year: int) -> int:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise OutOfRangeYear(f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return year


# ─────────────────────────────────────────────────────────────────────────────
# Expression parsing
# ─────────────────────────────────────────────────────────────────────────────

def parse_expression(expression: str, today: CalendarMonth,
                     fiscal_year_start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH) -> DateSpan:
    """Resolve a free-form date expression to a fixed-length span."""
    text = expression.strip().lower()

    match = YEAR_PATTERN.match(text)
    if match:
        year = _checked_year(expand_year(match.group(1), today))
        logger.debug("Expression %r is calendar year %d", expression, year)
        return DateSpan(CalendarMonth(year, 1), months_after=MONTHS_PER_YEAR - 1)

    match = QUARTER_PATTERN.match(text)
    if match:
        quarter = int(match.group(1))
        anchor = CalendarMonth(today.year, MONTHS_PER_QUARTER * (quarter - 1) + 1)
        logger.debug("Expression %r is calendar quarter %d of %d", expression, quarter, today.year)
        return DateSpan(anchor, months_after=MONTHS_PER_QUARTER - 1)

    match = FISCAL_PATTERN.match(text)
    if match:
        year_text, quarter_text = match.groups()
        if year_text is None:
            fiscal_year = current_fiscal_year(today, fiscal_year_start_month)
        else:
            fiscal_year = _checked_year(expand_year(year_text, today))

        if quarter_text is None:
            anchor = fiscal_year_start(fiscal_year, fiscal_year_start_month)
            logger.debug("Expression %r is fiscal year %d starting %s", expression, fiscal_year, anchor)
            return DateSpan(anchor, months_after=MONTHS_PER_YEAR - 1)

        quarter = int(quarter_text)
        anchor = fiscal_quarter_start(fiscal_year, quarter, fiscal_year_start_month)
        logger.debug("Expression %r is fiscal quarter %d of FY%d starting %s",
                     expression, quarter, fiscal_year, anchor)
        return DateSpan(anchor, months_after=MONTHS_PER_QUARTER - 1)

    raise InvalidExpression(
        f"Invalid date expression: '{expression}'. "
        "Expected a year (2024, 24), a quarter (Q1-Q4), a fiscal year (FY, FY2024) "
        "or a fiscal quarter (FYQ2, FY2024Q2)."
    )


def resolve(
    expression: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    months_before: int = 0,
    months_after: int = 0,
    today: Union[CalendarMonth, datetime.date, None] = None,
    fiscal_year_start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH,
) -> DateSpan:
    """
    Work out which months to display.

    Raises:
        ConflictingInput: an expression was combined with year/month, or
            months_before/months_after were combined with a fixed-length span.
        InvalidExpression: the expression is not recognised.
        OutOfRangeMonth: `month` is outside 1-12.
        OutOfRangeYear: a year, or the edge of the span, is outside 1-9999.
    """
    if today is None:
        today = CalendarMonth.today()
    elif isinstance(today, datetime.date):
        today = CalendarMonth.from_date(today)

    if months_before < 0 or months_after < 0:
        raise ValueError("months_before and months_after must be non-negative")
    if month is not None and not 1 <= month <= 12:
        raise OutOfRangeMonth(f"Month must be between 1 and 12, got {month}")
    if year is not None:
        _checked_year(year)

    expands = months_before > 0 or months_after > 0

    if expression is not None:
        if year is not None or month is not None:
            raise ConflictingInput(
                f"Date expression '{expression}' cannot be combined with --year or --month"
            )
        span = parse_expression(expression, today, fiscal_year_start_month)
        if expands:
            raise ConflictingInput(
                f"Date expression '{expression}' already fixes the months shown; "
                "--months-before and --months-after cannot be used with it"
            )
    elif year is not None and month is None:
        if expands:
            raise ConflictingInput(
                "--year without --month shows the whole year; "
                "--months-before and --months-after cannot be used with it"
            )
        logger.debug("Showing calendar year %d", year)
        span = DateSpan(CalendarMonth(year, 1), months_after=MONTHS_PER_YEAR - 1)
    else:
        anchor = CalendarMonth(
            year if year is not None else today.year,
            month if month is not None else today.month,
        )
        logger.debug("Showing %s with %d month(s) before and %d after", anchor, months_before, months_after)
        span = DateSpan(anchor, months_before=months_before, months_after=months_after)

    return span
