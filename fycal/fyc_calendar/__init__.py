from fycal.fyc_calendar.models import CalendarMonth, ColorMode, DateSpan, WeekStart
from fycal.fyc_calendar.renderer import render
from fycal.fyc_calendar.resolver import resolve

__all__ = ["CalendarMonth", "ColorMode", "DateSpan", "WeekStart", "render", "resolve"]
