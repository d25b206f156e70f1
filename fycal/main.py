#!/usr/bin/env python3
"""
📅 fycal
Terminal calendar that understands years, quarters and fiscal periods.
"""

# core import
from fycal import fyc_core

# standard libraries
import argparse
import datetime
import logging
import sys
import traceback
from typing import List, Optional, TextIO

# rich libraries
import rich_argparse
from rich.console import Console
from rich.markup import escape

from fycal.fyc_calendar.models import ColorMode, WeekStart
from fycal.fyc_calendar.renderer import render
from fycal.fyc_calendar.resolver import resolve
from fycal.fyc_core.config import Config
from fycal.fyc_core.errors import CalendarError
from fycal.fyc_core.log import setup_logging
from fycal.fyc_src.weekstart import SystemWeekStartProvider, WeekStartPreferenceProvider

logger = logging.getLogger(__name__)

err_console = Console(stderr=True, highlight=False, soft_wrap=True)

EPILOG = """Date expressions:
  2024, 24        the whole calendar year
  Q1 .. Q4        a quarter of the current year
  FY, FY2024      a fiscal year (July to June, named after the year it ends in)
  FYQ2, FY24Q2    a quarter of a fiscal year

Examples:
  fycal                     # this month
  fycal -B 1 -A 1           # last month, this month and next month
  fycal -y 2024 -m 3        # March 2024
  fycal FY2025              # July 2024 to June 2025
  fycal Q3 -f sunday        # July to September, weeks starting on Sunday
"""


# ─────────────────────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

def non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{text}'") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {value}")
    return value


def week_start_type(text: str) -> WeekStart:
    try:
        return WeekStart.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def color_mode_type(text: str) -> ColorMode:
    try:
        return ColorMode.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def setup_argument_parser() -> argparse.ArgumentParser:
    """Set up command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="fycal",
        description="📅 Show a calendar for a month, a quarter, a year or a fiscal period.",
        epilog=EPILOG,
        formatter_class=rich_argparse.RawDescriptionRichHelpFormatter,
    )

    parser.add_argument("date_input", nargs="?", metavar="DATE_INPUT",
                        help="Year, quarter, fiscal year or fiscal quarter to show")

    # Date selection
    parser.add_argument("-y", "--year", type=int,
                        help="Year to show (the whole year unless --month is given)")
    parser.add_argument("-m", "--month", type=int,
                        help="Month to show (1-12)")
    parser.add_argument("-B", "--months-before", type=non_negative_int, default=0, metavar="N",
                        help="Also show N months before the selected month")
    parser.add_argument("-A", "--months-after", type=non_negative_int, default=0, metavar="N",
                        help="Also show N months after the selected month")

    # Display options
    parser.add_argument("-f", "--first-day-of-week", type=week_start_type, metavar="DAY",
                        help="First day of the week: a name ('Sunday'), its abbreviation ('Su') "
                             "or a number from 1 (Sunday) to 7 (Saturday). "
                             "Defaults to the system preference")
    parser.add_argument("--color", nargs="?", type=color_mode_type, const=ColorMode.ALWAYS,
                        metavar="WHEN",
                        help="Highlight today: always, auto or never (default: auto)")

    # Utility options
    parser.add_argument("--debug", action="store_true",
                        help="Show debug logging and full tracebacks")
    parser.add_argument("-V", "--version", action="version",
                        version=f"fycal {fyc_core.get_version()}")

    return parser


# ─────────────────────────────────────────────────────────────────────────────
# Main Application
# ─────────────────────────────────────────────────────────────────────────────

def pick_week_start(flag: Optional[WeekStart], config: Config,
                    provider: Optional[WeekStartPreferenceProvider] = None) -> WeekStart:
    """Command line flag first, then FYCAL_FIRST_DAY_OF_WEEK, then the operating system."""
    if flag is not None:
        return flag
    if config.FIRST_DAY_OF_WEEK is not None:
        logger.debug("First day of week %s taken from the environment", config.FIRST_DAY_OF_WEEK)
        return config.FIRST_DAY_OF_WEEK
    if provider is None:
        provider = SystemWeekStartProvider(timeout=config.QUERY_TIMEOUT_SECONDS)
    return provider.week_start()


def output_console(stream: TextIO, color: bool, width: int) -> Console:
    """Console for the calendar itself; wide enough that rows are never wrapped."""
    options = dict(file=stream, force_terminal=color, highlight=False, soft_wrap=True, width=width)
    if not color:
        return Console(color_system=None, **options)

    console = Console(color_system="auto", **options)
    if console.color_system is None:
        # dumb terminal or output redirected with --color=always
        console = Console(color_system="standard", **options)
    return console


def run(
    args: argparse.Namespace,
    config: Optional[Config] = None,
    provider: Optional[WeekStartPreferenceProvider] = None,
    today: Optional[datetime.date] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Resolve the requested months and print them."""
    if config is None:
        config = Config.from_env()
    if today is None:
        today = datetime.date.today()
    if stream is None:
        stream = sys.stdout

    span = resolve(
        args.date_input,
        args.year,
        args.month,
        args.months_before,
        args.months_after,
        today=today,
        fiscal_year_start_month=config.FISCAL_YEAR_START_MONTH,
    )
    week_start = pick_week_start(args.first_day_of_week, config, provider)

    color_mode = args.color or config.COLOR
    color = color_mode.enabled(stream, no_color=config.NO_COLOR)
    logger.debug("Rendering %d month(s) from %s, week starts %s, color %s",
                 len(span), span.first, week_start, "on" if color else "off")

    lines = render(
        span,
        week_start,
        color,
        today=today,
        months_per_row=config.MONTHS_PER_ROW,
        today_style=config.TODAY_STYLE,
    )

    console = output_console(stream, color, width=max([len(line) for line in lines] + [80]))
    for line in lines:
        console.print(line)


def main(argv: Optional[List[str]] = None):
    """Main entry point with error handling."""
    if argv is None:
        argv = sys.argv[1:]

    parser = setup_argument_parser()
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    try:
        run(args)
    except CalendarError as e:
        err_console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]⚠️ Operation cancelled by user.[/yellow]")
        sys.exit(130)
    except Exception as e:
        err_console.print(f"[red]❌ Unexpected error: {escape(str(e))}[/red]")
        if args.debug:
            err_console.print("[dim]Debug traceback:[/dim]")
            err_console.print(escape(traceback.format_exc()))
        sys.exit(1)


if __name__ == "__main__":
    main()
