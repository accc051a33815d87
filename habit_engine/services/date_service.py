"""
Date calculation and formatting service.
Handles boundary date parsing, weekday naming, day iteration, week alignment and period presets.
"""
import re
from datetime import datetime, date, timedelta
from typing import Iterator, Optional, Tuple

from habit_engine.constants import (
    DATE_FORMAT,
    WEEKDAY_NAMES,
    MONTH_ABBREVIATIONS,
    PERIOD_PRESETS,
)
from habit_engine.exceptions import InvalidDateException, InvalidPeriodException

# YYYY-MM-DD, optionally followed by a "T" or space separated time part
BOUNDARY_DATE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def today() -> date:
        """Current local calendar date"""
        return datetime.now().date()

    @staticmethod
    def parse_date(value) -> date:
        """
        Read a calendar date from a boundary value.

        Accepts a date, a datetime (time is dropped) or a "YYYY-MM-DD" string.
        Timestamps ("2026-01-30T08:00:00" or "2026-01-30 08:00") keep only their date part.
        Non-canonical forms such as "2026-1-5" are rejected.

        Args:
            value: Value to parse

        Returns:
            Calendar date

        Raises:
            InvalidDateException: If the value is not a recognisable date
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise InvalidDateException(value)

        match = BOUNDARY_DATE_PATTERN.match(value.strip())
        if match is None:
            raise InvalidDateException(value)
        try:
            return datetime.strptime(match.group(1), DATE_FORMAT).date()
        except ValueError:
            raise InvalidDateException(value)

    @staticmethod
    def coerce_date(value) -> Optional[date]:
        """Like parse_date, but returns None for unreadable values"""
        try:
            return DateService.parse_date(value)
        except InvalidDateException:
            return None

    @staticmethod
    def format_date(day: date) -> str:
        """Format a date as YYYY-MM-DD"""
        return day.strftime(DATE_FORMAT)

    @staticmethod
    def weekday_name(day: date) -> str:
        """Lowercase English weekday name, independent of locale"""
        return WEEKDAY_NAMES[day.weekday()]

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """Signed number of whole days from start to end"""
        return (end - start).days

    @staticmethod
    def iter_days(start: date, end: date) -> Iterator[date]:
        """
        Yield every calendar date from start to end inclusive.

        Yields nothing when start is after end.
        """
        current = start
        while current <= end:
            yield current
            current += timedelta(days=1)

    @staticmethod
    def start_of_week(day: date) -> date:
        """Monday of the week containing day"""
        return day - timedelta(days=day.weekday())

    @staticmethod
    def end_of_week(day: date) -> date:
        """Sunday of the week containing day"""
        return day + timedelta(days=6 - day.weekday())

    @staticmethod
    def period_range(period: str, today: date) -> Tuple[date, date]:
        """
        Get the inclusive window for a period preset.

        "7" covers today and the six days before it, and so on.

        Args:
            period: Preset key ("7", "30" or "90")
            today: Last day of the window

        Returns:
            Tuple of (start_date, end_date)

        Raises:
            InvalidPeriodException: If the preset is not known
        """
        days = PERIOD_PRESETS.get(str(period))
        if days is None:
            raise InvalidPeriodException(period)
        return DateService.last_n_days(days, today)

    @staticmethod
    def last_n_days(days: int, today: date) -> Tuple[date, date]:
        """Inclusive window of the last N days ending on today"""
        return today - timedelta(days=days - 1), today

    @staticmethod
    def format_day_label(day: date) -> str:
        """Short chart label, e.g. "Oct 05" """
        return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.day:02d}"

    @staticmethod
    def format_week_label(start: date, end: date) -> str:
        """Chart label for a week bucket, e.g. "Oct 05 - Oct 11" """
        return f"{DateService.format_day_label(start)} - {DateService.format_day_label(end)}"
