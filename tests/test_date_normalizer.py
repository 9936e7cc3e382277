"""Tests for the date normalizer."""

from datetime import UTC, datetime

import pytest

from rail_ticketing.domain.codecs import DateNormalizer, DateOrder


class TestNormalize:
    """Tests for DateNormalizer.normalize."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2024-06-05", "2024-06-05"),
            (" 2024-06-05 ", "2024-06-05"),
            ("06/05/2024", "2024-06-05"),
            ("6/5/2024", "2024-06-05"),
            ("06-05-2024", "2024-06-05"),
            ("2024/6/5", "2024-06-05"),
            ("2024.06.05", "2024-06-05"),
            ("2024-6-5", "2024-06-05"),
            ("2024-06-05T10:30:00Z", "2024-06-05"),
            ("2024-06-05T23:30:00+02:00", "2024-06-05"),
        ],
    )
    def test_when_known_encoding_then_returns_iso_date(self, raw: str, expected: str) -> None:
        """Given a supported date encoding, when normalising, then YYYY-MM-DD is returned."""
        assert DateNormalizer().normalize(raw) == expected

    def test_when_slash_date_and_day_first_then_day_is_read_first(self) -> None:
        """Given day-first configuration, when normalising 06/05/2024, then May 6th is returned."""
        normalizer = DateNormalizer(DateOrder.DAY_FIRST)

        assert normalizer.normalize("06/05/2024") == "2024-05-06"

    def test_when_slash_date_and_month_first_then_month_is_read_first(self) -> None:
        """Given month-first configuration, when normalising 06/05/2024, then June 5th is returned."""
        normalizer = DateNormalizer(DateOrder.MONTH_FIRST)

        assert normalizer.normalize("06/05/2024") == "2024-06-05"

    @pytest.mark.parametrize("raw", ["not a date", "13/25/2024", "2024-13-45", "31.12"])
    def test_when_unrecognised_then_returns_input_unchanged(self, raw: str) -> None:
        """Given an unrecognised value, when normalising, then it is returned as-is."""
        assert DateNormalizer().normalize(raw) == raw

    def test_when_empty_then_returns_empty(self) -> None:
        """Given an empty string, when normalising, then an empty string is returned."""
        assert DateNormalizer().normalize("") == ""

    @pytest.mark.parametrize(
        "raw",
        ["2024-06-05", "06/05/2024", "2024.6.5", "2024-06-05T08:00:00", "garbage", "13/25/2024"],
    )
    @pytest.mark.parametrize("order", list(DateOrder))
    def test_normalize_is_idempotent(self, raw: str, order: DateOrder) -> None:
        """Given any input, when normalising twice, then the second pass changes nothing."""
        normalizer = DateNormalizer(order)
        once = normalizer.normalize(raw)

        assert normalizer.normalize(once) == once


class TestParseDatetime:
    """Tests for DateNormalizer.parse_datetime."""

    def test_when_iso_datetime_then_parses(self) -> None:
        """Given an ISO date-time with Z suffix, when parsing, then an aware datetime is returned."""
        parsed = DateNormalizer.parse_datetime("2024-06-05T08:15:00Z")

        assert parsed == datetime(2024, 6, 5, 8, 15, tzinfo=UTC)

    def test_when_time_only_with_date_then_combines(self) -> None:
        """Given HH:MM and a connection date, when parsing, then both are combined."""
        parsed = DateNormalizer.parse_datetime("08:15", "2024-06-05")

        assert parsed == datetime(2024, 6, 5, 8, 15)

    def test_when_time_only_without_date_then_returns_none(self) -> None:
        """Given HH:MM and no date, when parsing, then None is returned."""
        assert DateNormalizer.parse_datetime("08:15") is None

    @pytest.mark.parametrize("raw", [None, "", "soon", "25:99"])
    def test_when_unparsable_then_returns_none(self, raw: str | None) -> None:
        """Given an unreadable value, when parsing, then None is returned."""
        assert DateNormalizer.parse_datetime(raw, "2024-06-05") is None


class TestDisplayFormatting:
    """Tests for display helpers."""

    def test_format_display_date_for_datetime(self) -> None:
        """Given an ISO date-time, when formatting, then date and minutes are shown."""
        assert DateNormalizer.format_display_date("2024-06-05T08:15:30") == "2024-06-05 08:15"

    def test_format_display_date_for_date(self) -> None:
        """Given an ISO date, when formatting, then only the date is shown."""
        assert DateNormalizer.format_display_date("2024-06-05") == "2024-06-05"

    def test_format_display_date_for_missing_value(self) -> None:
        """Given no value, when formatting, then N/A is shown."""
        assert DateNormalizer.format_display_date(None) == "N/A"

    def test_format_display_date_passes_through_unknown_text(self) -> None:
        """Given free text, when formatting, then it is shown unchanged."""
        assert DateNormalizer.format_display_date("tomorrow") == "tomorrow"

    def test_format_display_time_drops_seconds(self) -> None:
        """Given a time with seconds, when formatting, then HH:MM is shown."""
        assert DateNormalizer.format_display_time("08:15:30") == "08:15"
        assert DateNormalizer.format_display_time("2024-06-05T08:15:30") == "08:15"
