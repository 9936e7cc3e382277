"""Normalisation of the date encodings the ticketing API and its users produce.

Everything sent to the API must be ``YYYY-MM-DD``. Inputs arrive as ISO dates,
slash-separated numeric dates, US dash dates, year-first dates with assorted
separators or full ISO date-times. Slash-separated dates are ambiguous
(``03/04/2025``), so the caller configures which component comes first.
"""

import logging
import re
from datetime import datetime, time
from enum import Enum

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_US_DASH_DATE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")
_YEAR_FIRST_DATE = re.compile(r"^(\d{4})[/.-](\d{1,2})[/.-](\d{1,2})$")
_TIME_ONLY = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")

NOT_AVAILABLE = "N/A"


class DateOrder(str, Enum):
    """Component order of slash-separated numeric dates."""

    MONTH_FIRST = "month_first"  # MM/DD/YYYY
    DAY_FIRST = "day_first"  # DD/MM/YYYY


def _format_iso(year: int, month: int, day: int) -> str | None:
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def _parse_iso_datetime(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class DateNormalizer:
    """Coerces heterogeneous date strings to ``YYYY-MM-DD``.

    ``normalize`` never raises: values it cannot interpret are returned
    unchanged, which keeps it idempotent.
    """

    def __init__(self, slash_order: DateOrder = DateOrder.MONTH_FIRST) -> None:
        self.slash_order = slash_order

    def normalize(self, value: str) -> str:
        """Return ``value`` as ``YYYY-MM-DD`` when it is a recognised date encoding."""
        if not value:
            return value

        candidate = value.strip()
        if _ISO_DATE.match(candidate):
            return candidate

        normalized = (
            self._from_slash_date(candidate)
            or self._from_us_dash_date(candidate)
            or self._from_year_first_date(candidate)
            or self._from_datetime(candidate)
        )
        if normalized is None:
            logger.debug(f"Leaving unrecognised date unchanged: {value!r}")
            return value
        return normalized

    def _from_slash_date(self, value: str) -> str | None:
        match = _SLASH_DATE.match(value)
        if not match:
            return None
        first, second, year = (int(part) for part in match.groups())
        if self.slash_order is DateOrder.DAY_FIRST:
            return _format_iso(year, second, first)
        return _format_iso(year, first, second)

    @staticmethod
    def _from_us_dash_date(value: str) -> str | None:
        match = _US_DASH_DATE.match(value)
        if not match:
            return None
        month, day, year = (int(part) for part in match.groups())
        return _format_iso(year, month, day)

    @staticmethod
    def _from_year_first_date(value: str) -> str | None:
        match = _YEAR_FIRST_DATE.match(value)
        if not match:
            return None
        year, month, day = (int(part) for part in match.groups())
        return _format_iso(year, month, day)

    @staticmethod
    def _from_datetime(value: str) -> str | None:
        parsed = _parse_iso_datetime(value)
        return parsed.date().isoformat() if parsed else None

    @staticmethod
    def parse_datetime(value: str | None, on_date: str | None = None) -> datetime | None:
        """Parse a departure/arrival time, or return None if it cannot be read.

        Time-only values (``HH:MM[:SS]``) are combined with ``on_date`` when given.
        """
        if not value:
            return None
        candidate = value.strip()
        if _TIME_ONLY.match(candidate):
            if not on_date:
                return None
            day = _parse_iso_datetime(on_date.strip())
            if day is None:
                return None
            try:
                clock_time = time.fromisoformat(candidate)
            except ValueError:
                return None
            return datetime.combine(day.date(), clock_time, day.tzinfo)
        return _parse_iso_datetime(candidate)

    @staticmethod
    def format_display_date(value: str | None) -> str:
        """Human-readable date or date-time; unparsable values pass through."""
        if not value:
            return NOT_AVAILABLE
        candidate = value.strip()
        if _TIME_ONLY.match(candidate):
            return candidate[:5]
        parsed = _parse_iso_datetime(candidate)
        if parsed is None:
            return value
        if "T" in candidate or " " in candidate:
            return parsed.strftime("%Y-%m-%d %H:%M")
        return parsed.strftime("%Y-%m-%d")

    @staticmethod
    def format_display_time(value: str | None) -> str:
        """``HH:MM`` for time-only or date-time values; seconds are dropped."""
        if not value:
            return NOT_AVAILABLE
        candidate = value.strip()
        if _TIME_ONLY.match(candidate):
            return candidate[:5]
        parsed = _parse_iso_datetime(candidate)
        if parsed is None:
            return value
        return parsed.strftime("%H:%M")
