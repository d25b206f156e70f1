"""
First-day-of-week preference of the operating system.

Each platform keeps this setting somewhere different:

- Linux and other glibc systems: `locale -k LC_TIME` reports `week-1stday`
  (a reference date) and `first_weekday` (1-based offset from it).
- macOS: `defaults read -g AppleFirstWeekday` holds `gregorian = N`, 1 = Sunday.
- Windows: `HKCU\\Control Panel\\International\\iFirstDayOfWeek`, 0 = Monday.

Any failure falls back to a fixed default instead of stopping the program.
"""

import datetime
import logging
import os
import re
import subprocess
import sys
from typing import Callable, Dict, Mapping, Optional, Protocol, runtime_checkable

from fycal.fyc_calendar.models import WeekStart

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]

POSIX_LOCALES = ("C", "POSIX")
MACOS_WEEKDAY_PATTERN = re.compile(r"gregorian\s*=\s*(\d)")


@runtime_checkable
class WeekStartPreferenceProvider(Protocol):
    """Anything that can tell which weekday a week starts on."""

    def week_start(self) -> WeekStart:
        ...


class FixedWeekStartProvider:
    """Always answers the same day; used when no system lookup is wanted."""

    def __init__(self, week_start: WeekStart = WeekStart.MONDAY):
        self._week_start = week_start

    def week_start(self) -> WeekStart:
        return self._week_start


# ─────────────────────────────────────────────────────────────────────────────
# Output parsers
# ─────────────────────────────────────────────────────────────────────────────

def parse_locale_keywords(output: str) -> Dict[str, str]:
    """Parse `locale -k` output (`key=value` lines, values possibly quoted)."""
    values = {}
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"')
    return values


def week_start_from_locale(output: str) -> Optional[WeekStart]:
    values = parse_locale_keywords(output)
    if "first_weekday" not in values:
        return None

    reference = values.get("week-1stday", "19971130")  # glibc default: a Sunday
    reference_day = datetime.datetime.strptime(reference, "%Y%m%d").weekday()
    offset = int(values["first_weekday"]) - 1
    return WeekStart((reference_day + offset) % 7)


def week_start_from_macos_defaults(output: str) -> Optional[WeekStart]:
    match = MACOS_WEEKDAY_PATTERN.search(output)
    if match is None:
        return None
    return WeekStart.from_number(int(match.group(1)))


def effective_time_locale(environ: Mapping[str, str]) -> str:
    for name in ("LC_ALL", "LC_TIME", "LANG"):
        value = environ.get(name)
        if value:
            return value
    return "C"


# ─────────────────────────────────────────────────────────────────────────────
# System provider
# ─────────────────────────────────────────────────────────────────────────────

class SystemWeekStartProvider:
    """Ask the operating system, falling back to `fallback` when it has no answer."""

    def __init__(
        self,
        platform: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        runner: Runner = subprocess.run,
        timeout: float = 2.0,
        fallback: WeekStart = WeekStart.MONDAY,
    ):
        self.platform = platform or sys.platform
        self.environ = os.environ if environ is None else environ
        self.runner = runner
        self.timeout = timeout
        self.fallback = fallback

    def week_start(self) -> WeekStart:
        try:
            found = self.query()
        except (ImportError, OSError, subprocess.SubprocessError, ValueError) as e:
            logger.debug("Could not read the system first day of week: %s", e)
            found = None

        if found is None:
            logger.debug("No system first day of week, using %s", self.fallback)
            return self.fallback
        logger.debug("System first day of week is %s", found)
        return found

    def query(self) -> Optional[WeekStart]:
        if self.platform.startswith("win"):
            return self._query_windows()
        if self.platform == "darwin":
            return week_start_from_macos_defaults(self._run(["defaults", "read", "-g", "AppleFirstWeekday"]))

        locale_name = effective_time_locale(self.environ).split(".")[0]
        if locale_name in POSIX_LOCALES:
            logger.debug("Locale is %s, which has no first day of week preference", locale_name)
            return None
        return week_start_from_locale(self._run(["locale", "-k", "LC_TIME"]))

    def _run(self, command) -> str:
        result = self.runner(
            command,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=True,
            env=dict(self.environ),
        )
        return result.stdout

    def _query_windows(self) -> Optional[WeekStart]:
        import winreg  # Windows only

        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Control Panel\International") as key:
            value, _ = winreg.QueryValueEx(key, "iFirstDayOfWeek")
        return WeekStart(int(value))
