"""
Calendar view service.
Builds Monday-start week and month grids and classifies each habit/day cell.
"""
import logging
from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, List, Optional

from habit_engine.constants import CELL_COMPLETED, CELL_MISSED, CELL_PENDING, CELL_NOT_DUE
from habit_engine.repositories.completion_repository import CompletionRepository
from habit_engine.schemas import Habit, CalendarCell, DayStats, HabitWeekRow
from habit_engine.services.aggregation_service import AggregationService
from habit_engine.services.date_service import DateService
from habit_engine.services.schedule_service import ScheduleService

logger = logging.getLogger("habit_engine.calendar")


class CalendarService:
    """Service for calendar grids"""

    @staticmethod
    def week_days(anchor: date) -> List[date]:
        """The seven dates (Monday to Sunday) of the week containing anchor"""
        monday = DateService.start_of_week(anchor)
        return [monday + timedelta(days=offset) for offset in range(7)]

    @staticmethod
    def month_grid(year: int, month: int) -> List[date]:
        """
        Dates shown on a month view.

        Runs from the Monday on or before the 1st to the Sunday on or after
        the last day, so the length is always a multiple of seven.
        """
        first = date(year, month, 1)
        last = date(year, month, monthrange(year, month)[1])
        return list(DateService.iter_days(
            DateService.start_of_week(first),
            DateService.end_of_week(last)
        ))

    @staticmethod
    def cell_status(habit: Habit, completions, day, today=None) -> str:
        """
        Classify one habit on one day.

        Returns:
            "completed" if done (whether or not it was due), "not_due" if not
            scheduled or either date is unreadable, "missed" for a past due day
            without completion, "pending" for today or a future due day
        """
        target = DateService.coerce_date(day)
        reference = CalendarService._resolve_today(today)
        if target is None or reference is None:
            logger.warning(f"Unreadable calendar date {day!r} (today {today!r}), marking not due")
            return CELL_NOT_DUE

        repo = CompletionRepository.wrap(completions)

        if repo.has_completion(habit.id, target):
            return CELL_COMPLETED
        if not ScheduleService.is_due(habit, target):
            return CELL_NOT_DUE
        if target < reference:
            return CELL_MISSED
        return CELL_PENDING

    @staticmethod
    def week_board(
        habits: Iterable[Habit],
        completions,
        anchor,
        today=None
    ) -> List[HabitWeekRow]:
        """One row of seven cells per active habit for the week containing anchor"""
        target = DateService.coerce_date(anchor)
        reference = CalendarService._resolve_today(today)
        if target is None or reference is None:
            logger.warning(f"Unreadable week anchor {anchor!r} (today {today!r}), returning empty board")
            return []

        repo = CompletionRepository.wrap(completions)
        days = CalendarService.week_days(target)

        rows = []
        for habit in habits:
            if not habit.is_active:
                continue
            cells = [
                CalendarCell(
                    date=DateService.format_date(day),
                    habit_id=habit.id,
                    status=CalendarService.cell_status(habit, repo, day, reference)
                )
                for day in days
            ]
            rows.append(HabitWeekRow(
                habit=habit,
                frequency_label=ScheduleService.describe_frequency(habit),
                cells=cells
            ))
        return rows

    @staticmethod
    def month_summary(habits: Iterable[Habit], completions, year, month) -> List[DayStats]:
        """Day stats for every date on the month grid (empty for an invalid year or month)"""
        try:
            grid = CalendarService.month_grid(int(year), int(month))
        except (TypeError, ValueError):
            logger.warning(f"Invalid month {year!r}-{month!r}, returning empty summary")
            return []

        habits = list(habits)
        repo = CompletionRepository.wrap(completions)
        logger.debug(f"Month summary {year}-{int(month):02d}: {len(grid)} cells, {len(habits)} habits")
        return [AggregationService.day_stats(habits, repo, day) for day in grid]

    @staticmethod
    def _resolve_today(today) -> Optional[date]:
        if today is None:
            return DateService.today()
        return DateService.coerce_date(today)
