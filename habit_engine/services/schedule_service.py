"""
Schedule evaluation service.
Decides whether a habit is due on a calendar date. Every other service goes through here.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from habit_engine.constants import (
    FREQUENCY_DAILY,
    FREQUENCY_ALTERNATE,
    FREQUENCY_CUSTOM,
    WEEKDAY_NAMES,
    FREQUENCY_LABEL_DAILY,
    FREQUENCY_LABEL_ALTERNATE,
    FREQUENCY_LABEL_CUSTOM,
    FREQUENCY_LABEL_UNKNOWN,
)
from habit_engine.schemas import Habit
from habit_engine.services.date_service import DateService

logger = logging.getLogger("habit_engine.schedule")


class ScheduleService:
    """Service for habit recurrence rules"""

    @staticmethod
    def is_due(habit: Habit, day: date) -> bool:
        """
        Check whether a habit is scheduled on a calendar date.

        - daily: always due
        - alternate: due on even day offsets from the creation date, never before it
        - custom: due when the weekday name is in custom_days
        - anything else: never due

        Args:
            habit: Habit to evaluate
            day: Calendar date

        Returns:
            True if the habit should be performed that day
        """
        frequency = ScheduleService._frequency(habit)

        if frequency == FREQUENCY_DAILY:
            return True

        day = DateService.coerce_date(day)
        if day is None:
            return False

        if frequency == FREQUENCY_ALTERNATE:
            created = ScheduleService._created_date(habit)
            if created is None:
                return False
            offset = DateService.days_between(created, day)
            return offset >= 0 and offset % 2 == 0

        if frequency == FREQUENCY_CUSTOM:
            return DateService.weekday_name(day) in (habit.custom_days or ())

        logger.debug(f"Habit {habit.id} has unknown frequency {frequency!r}, treating as not due")
        return False

    @staticmethod
    def due_habits(habits: Iterable[Habit], day) -> List[Habit]:
        """Get the habits due on a date, in input order (none for an unreadable date)"""
        target = DateService.coerce_date(day)
        if target is None:
            logger.warning(f"Unreadable day {day!r}, no habits due")
            return []
        return [habit for habit in habits if ScheduleService.is_due(habit, target)]

    @staticmethod
    def describe_frequency(habit: Habit) -> str:
        """
        Human-readable recurrence, e.g. "Every day" or "Mon, Wed, Fri".

        Custom days are listed Monday first.
        """
        frequency = ScheduleService._frequency(habit)

        if frequency == FREQUENCY_DAILY:
            return FREQUENCY_LABEL_DAILY
        if frequency == FREQUENCY_ALTERNATE:
            return FREQUENCY_LABEL_ALTERNATE
        if frequency == FREQUENCY_CUSTOM:
            days = sorted(habit.custom_days or (), key=ScheduleService._weekday_order)
            if not days:
                return FREQUENCY_LABEL_CUSTOM
            return ", ".join(day[:1].upper() + day[1:3] for day in days)
        return FREQUENCY_LABEL_UNKNOWN

    @staticmethod
    def _frequency(habit: Habit) -> str:
        frequency = getattr(habit, "frequency_type", None)
        return frequency.strip().lower() if isinstance(frequency, str) else ""

    @staticmethod
    def _weekday_order(name: str) -> tuple:
        if name in WEEKDAY_NAMES:
            return (WEEKDAY_NAMES.index(name), name)
        return (len(WEEKDAY_NAMES), name)

    @staticmethod
    def _created_date(habit: Habit) -> Optional[date]:
        # Parity anchor; a habit without a readable creation date is never due
        return DateService.coerce_date(getattr(habit, "created_at", None))
