"""
Streak calculation service.
Handles current streaks, longest historical streaks and the active-streak leaderboard.
"""
import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from habit_engine.config import EngineSettings
from habit_engine.repositories.completion_repository import CompletionRepository
from habit_engine.schemas import Habit, HabitStreak
from habit_engine.services.date_service import DateService
from habit_engine.services.schedule_service import ScheduleService

logger = logging.getLogger("habit_engine.streaks")


class StreakService:
    """Service for streak calculation"""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self.max_lookback_days = self.settings.streak_max_lookback_days

    def current_streak(self, habit: Habit, completions, as_of: Optional[date] = None) -> int:
        """
        Count completed due-dates walking backwards from as_of.

        Days when the habit is not due are skipped. The first due day without a
        completion ends the walk. The walk covers at most max_lookback_days
        calendar days, so very long streaks are truncated at that bound.

        Args:
            habit: Habit to evaluate
            completions: Completion records or a CompletionRepository
            as_of: Reference date (defaults to today)

        Returns:
            Streak length (0 when the latest due date was missed)
        """
        as_of = self._resolve_as_of(as_of)
        if as_of is None:
            return 0

        repo = CompletionRepository.wrap(completions)
        streak = 0
        day = as_of

        for _ in range(self.max_lookback_days):
            if ScheduleService.is_due(habit, day):
                if not repo.has_completion(habit.id, day):
                    return streak
                streak += 1
            day -= timedelta(days=1)

        logger.debug(
            f"Streak walk for habit {habit.id} hit the {self.max_lookback_days}-day bound at {streak}"
        )
        return streak

    def longest_streak(self, habit: Habit, completions, as_of: Optional[date] = None) -> int:
        """
        Longest run of consecutive completed due-dates up to as_of.

        The walk starts at the earlier of the creation date and the first completion.
        """
        as_of = self._resolve_as_of(as_of)
        if as_of is None:
            return 0

        repo = CompletionRepository.wrap(completions)
        starts = [
            day for day in (
                DateService.coerce_date(habit.created_at),
                repo.earliest_for(habit.id),
            )
            if day is not None
        ]
        if not starts:
            return 0

        longest = 0
        run = 0
        for day in DateService.iter_days(min(starts), as_of):
            if not ScheduleService.is_due(habit, day):
                continue
            if repo.has_completion(habit.id, day):
                run += 1
                longest = max(longest, run)
            else:
                run = 0

        return longest

    def top_streaks(
        self,
        habits: Iterable[Habit],
        completions,
        as_of: Optional[date] = None,
        limit: Optional[int] = None
    ) -> List[HabitStreak]:
        """
        Active habits with a running streak, longest first.

        Args:
            habits: Habits to consider (inactive ones are skipped)
            completions: Completion records or a CompletionRepository
            as_of: Reference date (defaults to today)
            limit: Maximum entries (defaults to settings.top_streaks_limit)

        Returns:
            List of HabitStreak sorted by streak descending, input order on ties
        """
        limit = self.settings.top_streaks_limit if limit is None else limit
        repo = CompletionRepository.wrap(completions)

        streaks = []
        for habit in habits:
            if not habit.is_active:
                continue
            streak = self.current_streak(habit, repo, as_of)
            if streak > 0:
                streaks.append(HabitStreak(habit=habit, streak=streak))

        streaks.sort(key=lambda item: item.streak, reverse=True)
        return streaks[:limit]

    def _resolve_as_of(self, as_of) -> Optional[date]:
        if as_of is None:
            return DateService.today()
        day = DateService.coerce_date(as_of)
        if day is None:
            logger.warning(f"Unreadable reference date {as_of!r}, returning empty streak")
        return day
