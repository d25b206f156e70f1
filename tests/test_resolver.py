"""Tests for the date expression resolver."""

import datetime

import pytest

from fycal.fyc_calendar.models import CalendarMonth
from fycal.fyc_calendar.resolver import (
    current_fiscal_year,
    expand_year,
    fiscal_quarter_start,
    fiscal_year_start,
    resolve,
)
from fycal.fyc_core.errors import (
    ConflictingInput,
    InvalidExpression,
    OutOfRangeMonth,
    OutOfRangeYear,
)


class TestDefaultSpan:
    def test_today(self, april_2024) -> None:
        span = resolve(None, None, None, 0, 0, today=april_2024)
        assert span.months() == [CalendarMonth(2024, 4)]

    def test_today_as_date(self) -> None:
        span = resolve(today=datetime.date(2024, 4, 17))
        assert span.anchor == CalendarMonth(2024, 4)

    def test_before_and_after(self, april_2024) -> None:
        span = resolve(months_before=1, months_after=2, today=april_2024)
        assert span.first == CalendarMonth(2024, 3)
        assert span.last == CalendarMonth(2024, 6)
        assert len(span) == 4

    def test_explicit_year_and_month(self, april_2024) -> None:
        span = resolve(year=2021, month=2, today=april_2024)
        assert span.months() == [CalendarMonth(2021, 2)]

    def test_month_only_uses_current_year(self, april_2024) -> None:
        span = resolve(month=12, months_after=1, today=april_2024)
        assert span.months() == [CalendarMonth(2024, 12), CalendarMonth(2025, 1)]

    def test_year_only_is_whole_year(self, april_2024) -> None:
        span = resolve(year=2021, today=april_2024)
        assert span.anchor == CalendarMonth(2021, 1)
        assert len(span) == 12

    def test_negative_counts(self, april_2024) -> None:
        with pytest.raises(ValueError):
            resolve(months_before=-1, today=april_2024)


class TestYearExpressions:
    def test_four_digit_year(self, april_2024) -> None:
        span = resolve("2024", today=april_2024)
        assert span.anchor == CalendarMonth(2024, 1)
        assert span.last == CalendarMonth(2024, 12)
        assert len(span) == 12

    def test_two_digit_year(self, april_2024) -> None:
        assert resolve("24", today=april_2024).anchor == CalendarMonth(2024, 1)

    def test_two_digit_year_stays_in_current_century(self) -> None:
        assert resolve("99", today=CalendarMonth(2024, 4)).anchor == CalendarMonth(2099, 1)
        assert resolve("05", today=CalendarMonth(1999, 4)).anchor == CalendarMonth(1905, 1)

    def test_expand_year(self) -> None:
        today = CalendarMonth(2024, 4)
        assert expand_year("00", today) == 2000
        assert expand_year("1999", today) == 1999

    def test_year_zero(self, april_2024) -> None:
        with pytest.raises(OutOfRangeYear):
            resolve("0000", today=april_2024)


class TestQuarterExpressions:
    @pytest.mark.parametrize("quarter", [1, 2, 3, 4])
    def test_quarter_start(self, quarter, april_2024) -> None:
        span = resolve(f"Q{quarter}", today=april_2024)
        assert span.anchor == CalendarMonth(2024, 3 * (quarter - 1) + 1)
        assert len(span) == 3

    def test_q2(self) -> None:
        span = resolve("Q2", today=CalendarMonth(2024, 11))
        assert span.months() == [CalendarMonth(2024, 4), CalendarMonth(2024, 5), CalendarMonth(2024, 6)]

    def test_case_and_whitespace(self, april_2024) -> None:
        assert resolve(" q1 ", today=april_2024).anchor == CalendarMonth(2024, 1)


class TestFiscalExpressions:
    @pytest.mark.parametrize("year", [1999, 2000, 2024, 2025, 9999])
    def test_fiscal_year(self, year, april_2024) -> None:
        span = resolve(f"FY{year}", today=april_2024)
        assert span.anchor == CalendarMonth(year - 1, 7)
        assert len(span) == 12
        assert span.last == CalendarMonth(year, 6)

    def test_two_digit_fiscal_year(self, april_2024) -> None:
        assert resolve("FY24", today=april_2024).anchor == CalendarMonth(2023, 7)

    def test_current_fiscal_year(self) -> None:
        assert resolve("FY", today=CalendarMonth(2024, 4)).anchor == CalendarMonth(2023, 7)
        assert resolve("FY", today=CalendarMonth(2024, 6)).anchor == CalendarMonth(2023, 7)
        assert resolve("FY", today=CalendarMonth(2024, 7)).anchor == CalendarMonth(2024, 7)

    @pytest.mark.parametrize("quarter, expected", [
        (1, CalendarMonth(2023, 7)),
        (2, CalendarMonth(2023, 10)),
        (3, CalendarMonth(2024, 1)),
        (4, CalendarMonth(2024, 4)),
    ])
    def test_fiscal_quarter(self, quarter, expected, april_2024) -> None:
        for expression in (f"FY2024Q{quarter}", f"FY24Q{quarter}", f"fy24q{quarter}"):
            span = resolve(expression, today=april_2024)
            assert span.anchor == expected
            assert len(span) == 3

    def test_fiscal_quarter_of_current_year(self) -> None:
        assert resolve("FYQ3", today=CalendarMonth(2024, 4)).anchor == CalendarMonth(2024, 1)
        assert resolve("FYQ1", today=CalendarMonth(2024, 8)).anchor == CalendarMonth(2024, 7)

    def test_fiscal_year_one(self, april_2024) -> None:
        with pytest.raises(OutOfRangeYear):
            resolve("FY0001", today=april_2024)

    def test_configured_start_month(self, april_2024) -> None:
        assert resolve("FY2024", today=april_2024, fiscal_year_start_month=1).anchor == CalendarMonth(2024, 1)
        assert resolve("FY2024Q1", today=april_2024, fiscal_year_start_month=10).anchor == CalendarMonth(2023, 10)

    def test_fiscal_helpers(self) -> None:
        assert current_fiscal_year(CalendarMonth(2024, 10), start_month=10) == 2025
        assert current_fiscal_year(CalendarMonth(2024, 12), start_month=1) == 2024
        assert fiscal_year_start(2024) == CalendarMonth(2023, 7)
        assert fiscal_quarter_start(2024, 4) == CalendarMonth(2024, 4)


class TestInvalidInput:
    @pytest.mark.parametrize("expression", ["Q5", "Q0", "FY2024Q5", "2024Q1", "abc", "", "123", "FY123", "FY 2024"])
    def test_invalid_expression(self, expression, april_2024) -> None:
        with pytest.raises(InvalidExpression):
            resolve(expression, today=april_2024)

    def test_expression_with_year_and_month(self, april_2024) -> None:
        with pytest.raises(ConflictingInput):
            resolve("Q1", year=2024, month=3, today=april_2024)

    def test_expression_with_year(self, april_2024) -> None:
        with pytest.raises(ConflictingInput):
            resolve("FY2024", year=2024, today=april_2024)

    @pytest.mark.parametrize("expression", ["Q2", "FY", "FY24Q1", "2024"])
    def test_fixed_span_with_before_after(self, expression, april_2024) -> None:
        with pytest.raises(ConflictingInput):
            resolve(expression, months_after=1, today=april_2024)
        with pytest.raises(ConflictingInput):
            resolve(expression, months_before=1, today=april_2024)

    def test_year_view_with_before_after(self, april_2024) -> None:
        with pytest.raises(ConflictingInput):
            resolve(year=2024, months_before=2, today=april_2024)

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_month_out_of_range(self, month, april_2024) -> None:
        with pytest.raises(OutOfRangeMonth):
            resolve(month=month, today=april_2024)

    @pytest.mark.parametrize("year", [0, 10000])
    def test_year_out_of_range(self, year, april_2024) -> None:
        with pytest.raises(OutOfRangeYear):
            resolve(year=year, month=1, today=april_2024)

    def test_span_past_last_year(self, april_2024) -> None:
        with pytest.raises(OutOfRangeYear):
            resolve(year=9999, month=12, months_after=1, today=april_2024)
