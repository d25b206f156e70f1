import datetime
import os

import pytest

from fycal.fyc_calendar.models import CalendarMonth


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's FYCAL_* and NO_COLOR settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("FYCAL_") or name == "NO_COLOR":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def april_2024():
    return CalendarMonth(2024, 4)


@pytest.fixture
def tax_day():
    return datetime.date(2024, 4, 17)
