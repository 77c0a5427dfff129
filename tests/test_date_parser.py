"""
tests/test_date_parser.py

Pure unit tests for parse_date. No I/O.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from app.consolidation.dates import parse_date


class TestNativeValues:
    def test_date_passes_through(self) -> None:
        assert parse_date(date(2024, 3, 5)) == date(2024, 3, 5)

    def test_datetime_becomes_calendar_date(self) -> None:
        assert parse_date(datetime(2024, 3, 5, 23, 59)) == date(2024, 3, 5)

    @pytest.mark.parametrize("value", [None, True, False, 20240305, 3.5, float("nan"), "", "   ", ["2024-01-01"]])
    def test_non_dates_return_none(self, value: object) -> None:
        assert parse_date(value) is None


class TestGenericParsing:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2023-01-15", date(2023, 1, 15)),
            ("2023-01-15T10:30:00", date(2023, 1, 15)),
            ("2023-01-15T10:30:00Z", date(2023, 1, 15)),
            ("2023/01/15", date(2023, 1, 15)),
            ("15 Jan 2023", date(2023, 1, 15)),
            ("Jan 15, 2023", date(2023, 1, 15)),
            ("2023-1-5", date(2023, 1, 5)),
            ("01/15/2023 10:30", date(2023, 1, 15)),
            ("15-Jan-2023", date(2023, 1, 15)),
            ("Jan 15, 2023 10:30 AM", date(2023, 1, 15)),
            ("January 15 2023", date(2023, 1, 15)),
        ],
    )
    def test_common_formats(self, text: str, expected: date) -> None:
        assert parse_date(text) == expected

    def test_ambiguous_slash_date_reads_month_first(self) -> None:
        assert parse_date("01/02/2024") == date(2024, 1, 2)

    @pytest.mark.parametrize("text", ["5", "2023", "20240305", "-3.5"])
    def test_numeric_text_is_not_a_date(self, text: str) -> None:
        assert parse_date(text) is None


class TestDayFirstFallback:
    def test_day_first_when_month_first_is_impossible(self) -> None:
        assert parse_date("13/02/2024") == date(2024, 2, 13)

    def test_dash_separated_day_first(self) -> None:
        assert parse_date("25-12-2023") == date(2023, 12, 25)

    def test_two_digit_year_is_in_this_century(self) -> None:
        assert parse_date("25/12/23") == date(2023, 12, 25)

    @pytest.mark.parametrize("text", ["32/13/2024", "not a date", "2024-13-45", "99/99/2023"])
    def test_unparseable_returns_none(self, text: str) -> None:
        assert parse_date(text) is None
