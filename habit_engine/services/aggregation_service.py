"""
Window aggregation service.
Counts planned and completed habit occurrences over inclusive date windows.
"""
import logging
from datetime import date
from typing import Iterable, Optional, Tuple

from habit_engine.repositories.completion_repository import CompletionRepository
from habit_engine.schemas import Habit, WindowStats, DayStats
from habit_engine.services.date_service import DateService
from habit_engine.services.schedule_service import ScheduleService

logger = logging.getLogger("habit_engine.aggregation")


class AggregationService:
    """Service for planned vs completed counts"""

    @staticmethod
    def completion_rate(planned: int, completed: int) -> float:
        """completed / planned * 100, or 0 when nothing was planned"""
        if planned <= 0:
            return 0.0
        return completed / planned * 100

    @staticmethod
    def resolve_window(start_date, end_date) -> Optional[Tuple[date, date]]:
        """
        Read window bounds from boundary values.

        Returns:
            Tuple of (start, end), or None if either bound is unreadable
        """
        start = DateService.coerce_date(start_date)
        end = DateService.coerce_date(end_date)
        if start is None or end is None:
            logger.warning(f"Unreadable window bounds {start_date!r}..{end_date!r}, returning empty result")
            return None
        return start, end

    @staticmethod
    def aggregate(
        habits: Iterable[Habit],
        completions,
        start_date,
        end_date
    ) -> WindowStats:
        """
        Count planned and completed occurrences across active habits.

        Every date from start_date to end_date (inclusive) is visited; each
        active habit due that day adds one planned occurrence, and one completed
        occurrence when a matching completion exists. An inverted window visits
        no dates.

        Args:
            habits: Habits to include (inactive ones are skipped)
            completions: Completion records or a CompletionRepository
            start_date: First day of the window
            end_date: Last day of the window

        Returns:
            WindowStats with planned and completed totals
        """
        window = AggregationService.resolve_window(start_date, end_date)
        if window is None:
            return WindowStats()

        active = [habit for habit in habits if habit.is_active]
        repo = CompletionRepository.wrap(completions)
        planned = 0
        completed = 0

        for day in DateService.iter_days(*window):
            for habit in active:
                if ScheduleService.is_due(habit, day):
                    planned += 1
                    if repo.has_completion(habit.id, day):
                        completed += 1

        return WindowStats(planned=planned, completed=completed)

    @staticmethod
    def aggregate_habit(habit: Habit, completions, start_date, end_date) -> WindowStats:
        """Planned and completed counts for a single habit over a window"""
        window = AggregationService.resolve_window(start_date, end_date)
        if window is None:
            return WindowStats()

        repo = CompletionRepository.wrap(completions)
        planned = 0
        completed = 0

        for day in DateService.iter_days(*window):
            if ScheduleService.is_due(habit, day):
                planned += 1
                if repo.has_completion(habit.id, day):
                    completed += 1

        return WindowStats(planned=planned, completed=completed)

    @staticmethod
    def day_stats(habits: Iterable[Habit], completions, day) -> DayStats:
        """
        Summary for one calendar day: habits due, habits done, percentage.

        Returns empty stats for an unreadable day.
        """
        target = DateService.coerce_date(day)
        if target is None:
            logger.warning(f"Unreadable day {day!r}, returning empty day stats")
            return DayStats(date=str(day))

        stats = AggregationService.aggregate(habits, completions, target, target)
        return DayStats(
            date=DateService.format_date(target),
            total=stats.planned,
            completed=stats.completed,
            percentage=stats.completion_rate
        )
