"""
Error types raised while turning command line input into a calendar span.
"""


class CalendarError(ValueError):
    """Base class for errors reported to the user with a non-zero exit code."""


class InvalidExpression(CalendarError):
    """The date expression matches none of the supported forms."""


class ConflictingInput(CalendarError):
    """Options were given that cannot be used together."""


class OutOfRangeMonth(CalendarError):
    pass


class OutOfRangeYear(CalendarError):
    pass


class ConfigError(CalendarError):
    """An environment setting holds an invalid value."""
