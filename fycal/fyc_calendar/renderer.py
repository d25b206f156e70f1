"""
Calendar renderer.

Layout happens on plain strings: every month becomes a `MonthGrid` of
20-character lines, grids are placed side by side in groups, and only then is
today's cell styled. Turning color off therefore never changes the layout.
"""

import calendar
import datetime
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from rich.style import Style
from rich.text import Text

from fycal.fyc_calendar.models import CalendarMonth, DateSpan, WeekStart

CELL_WIDTH = 2
GRID_WIDTH = 7 * CELL_WIDTH + 6  # 7 cells, 6 single-space gaps
GRID_SEPARATOR = "  "
BLANK_CELL = " " * CELL_WIDTH
MONTHS_PER_ROW = 3
TODAY_STYLE = "reverse"

# (line, first column, last column + 1) of a styled range
Mark = Tuple[int, int, int]


def group_width(count: int) -> int:
    """Width of a row holding `count` grids."""
    return GRID_WIDTH * count + len(GRID_SEPARATOR) * (count - 1)


# ─────────────────────────────────────────────────────────────────────────────
# Single month layout
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MonthGrid:
    """Laid-out text of one month: header, weekday row, then the week rows."""
    month: CalendarMonth
    lines: Tuple[str, ...]
    marks: Tuple[Mark, ...] = field(default=())

    def padded(self, height: int) -> "MonthGrid":
        """Return a copy with blank rows appended up to `height` lines."""
        missing = height - len(self.lines)
        if missing <= 0:
            return self
        return MonthGrid(self.month, self.lines + (" " * GRID_WIDTH,) * missing, self.marks)


def weekday_header(week_start: WeekStart) -> str:
    days = [WeekStart((week_start.value + offset) % 7) for offset in range(7)]
    return " ".join(day.abbreviation for day in days)


def layout_month(month: CalendarMonth, week_start: WeekStart,
                 today: Optional[datetime.date] = None) -> MonthGrid:
    """Lay out a single month; today's cell is recorded in `marks` when present."""
    header = f"{calendar.month_name[month.month]} {month.year}".center(GRID_WIDTH)
    lines = [header, weekday_header(week_start)]
    marks = []

    today_day = None
    if today is not None and (today.year, today.month) == (month.year, month.month):
        today_day = today.day

    weeks = calendar.Calendar(firstweekday=week_start.value).monthdayscalendar(month.year, month.month)
    for week in weeks:
        cells = []
        for column, day in enumerate(week):
            if day == 0:
                cells.append(BLANK_CELL)
                continue
            if day == today_day:
                start = column * (CELL_WIDTH + 1)
                marks.append((len(lines), start, start + CELL_WIDTH))
            cells.append(f"{day:{CELL_WIDTH}d}")
        lines.append(" ".join(cells))

    return MonthGrid(month, tuple(lines), tuple(marks))


# ─────────────────────────────────────────────────────────────────────────────
# Multi-month composition
# ─────────────────────────────────────────────────────────────────────────────

def chunk(grids: Sequence[MonthGrid], size: int) -> List[List[MonthGrid]]:
    return [list(grids[i:i + size]) for i in range(0, len(grids), size)]


def compose(grids: Sequence[MonthGrid], months_per_row: int = MONTHS_PER_ROW) -> Tuple[List[str], List[Mark]]:
    """
    Place grids side by side, `months_per_row` at a time.

    Grids in the same row are padded to the tallest one; rows are separated by
    a blank line as wide as the row above it. Marks are translated into the
    coordinates of the combined output.
    """
    lines: List[str] = []
    marks: List[Mark] = []

    previous_count = 0
    for row in chunk(grids, months_per_row):
        if previous_count:
            lines.append(" " * group_width(previous_count))
        previous_count = len(row)

        height = max(len(grid.lines) for grid in row)
        row = [grid.padded(height) for grid in row]
        top = len(lines)

        for position, grid in enumerate(row):
            offset = position * (GRID_WIDTH + len(GRID_SEPARATOR))
            for line, start, end in grid.marks:
                marks.append((top + line, offset + start, offset + end))

        for line_index in range(height):
            lines.append(GRID_SEPARATOR.join(grid.lines[line_index] for grid in row))

    return lines, marks


def decorate(lines: Sequence[str], marks: Sequence[Mark], color: bool,
             today_style: str = TODAY_STYLE) -> List[Text]:
    """Turn laid-out lines into rich Text, styling the marked ranges when color is on."""
    texts = [Text(line) for line in lines]
    if color:
        style = Style.parse(today_style)
        for line, start, end in marks:
            texts[line].stylize(style, start, end)
    return texts


def render(
    span: DateSpan,
    week_start: WeekStart,
    color: bool,
    today: Optional[datetime.date] = None,
    months_per_row: int = MONTHS_PER_ROW,
    today_style: str = TODAY_STYLE,
) -> List[Text]:
    """Render every month of `span` as aligned lines of text."""
    grids = [layout_month(month, week_start, today) for month in span.months()]
    lines, marks = compose(grids, months_per_row)
    return decorate(lines, marks, color, today_style)
