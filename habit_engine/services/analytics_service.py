"""
Habit analytics service.
Binds one habit/completion snapshot to the schedule, streak, aggregation, ranking,
trend and calendar services, and builds the dashboard summary.
"""
import logging
from datetime import date
from typing import List, Optional

from habit_engine.config import EngineSettings
from habit_engine.constants import (
    DEFAULT_PERIOD,
    DASHBOARD_WEEK_DAYS,
    DASHBOARD_MONTH_DAYS,
    GRANULARITY_DAY,
)
from habit_engine.repositories.completion_repository import CompletionRepository
from habit_engine.repositories.habit_repository import HabitRepository
from habit_engine.repositories.snapshot_repository import SnapshotRepository
from habit_engine.schemas import (
    Habit, HabitSnapshot, WindowStats, AbandonedHabit, DashboardStats,
    DayStats, HabitWeekRow,
)
from habit_engine.services.aggregation_service import AggregationService
from habit_engine.services.calendar_service import CalendarService
from habit_engine.services.date_service import DateService
from habit_engine.services.ranking_service import RankingService
from habit_engine.services.schedule_service import ScheduleService
from habit_engine.services.streak_service import StreakService
from habit_engine.services.trend_service import TrendService, TrendSeries

logger = logging.getLogger("habit_engine.analytics")


class AnalyticsService:
    """Service for all derived habit statistics over one snapshot"""

    def __init__(self, snapshot: HabitSnapshot, settings: Optional[EngineSettings] = None):
        self.snapshot = snapshot
        self.settings = settings or EngineSettings()
        self.habit_repo = HabitRepository(snapshot.habits)
        self.completion_repo = CompletionRepository(snapshot.completions)
        self.streak_service = StreakService(self.settings)

    @classmethod
    def from_records(
        cls,
        habit_rows,
        completion_rows,
        settings: Optional[EngineSettings] = None
    ) -> "AnalyticsService":
        """Build the service from raw store rows fetched together"""
        return cls(SnapshotRepository.from_records(habit_rows, completion_rows), settings)

    # Scheduling

    def is_due(self, habit: Habit, day) -> bool:
        return ScheduleService.is_due(habit, day)

    def due_habits(self, day=None) -> List[Habit]:
        """Active habits due on a day (defaults to today)"""
        if day is None:
            day = DateService.today()
        return ScheduleService.due_habits(self.habit_repo.get_active(), day)

    # Streaks

    def current_streak(self, habit: Habit, as_of: Optional[date] = None) -> int:
        return self.streak_service.current_streak(habit, self.completion_repo, as_of)

    def longest_streak(self, habit: Habit, as_of: Optional[date] = None) -> int:
        return self.streak_service.longest_streak(habit, self.completion_repo, as_of)

    # Windows

    def aggregate(self, start_date, end_date) -> WindowStats:
        return AggregationService.aggregate(
            self.habit_repo.get_active(), self.completion_repo, start_date, end_date
        )

    def aggregate_habit(self, habit: Habit, start_date, end_date) -> WindowStats:
        return AggregationService.aggregate_habit(habit, self.completion_repo, start_date, end_date)

    def rank_by_failure(self, start_date, end_date, limit: Optional[int] = None) -> List[AbandonedHabit]:
        return RankingService.rank_by_failure(
            self.habit_repo.get_active(), self.completion_repo, start_date, end_date, limit
        )

    def abandoned_habits(
        self,
        period: str = DEFAULT_PERIOD,
        as_of: Optional[date] = None,
        limit: Optional[int] = None
    ) -> List[AbandonedHabit]:
        """
        Most abandoned habits over a preset window ("7", "30" or "90" days).

        An unreadable as_of gives an empty list.

        Raises:
            InvalidPeriodException: If the preset is not known
        """
        if as_of is None:
            as_of = DateService.today()
        reference = DateService.coerce_date(as_of)
        if reference is None:
            logger.warning(f"Unreadable reference date {as_of!r}, returning no abandoned habits")
            return []

        limit = self.settings.abandoned_display_limit if limit is None else limit
        start, end = DateService.period_range(period, reference)
        return self.rank_by_failure(start, end, limit)

    def trend(
        self,
        start_date,
        end_date,
        granularity: str = GRANULARITY_DAY,
        per_habit: bool = False,
        habit_ids: Optional[List[str]] = None
    ) -> TrendSeries:
        return TrendService.bucketize(
            self.habit_repo.get_active(),
            self.completion_repo,
            start_date,
            end_date,
            granularity,
            per_habit=per_habit,
            habit_ids=habit_ids
        )

    # Calendar

    def week_board(self, anchor, today=None) -> List[HabitWeekRow]:
        return CalendarService.week_board(self.habit_repo.get_active(), self.completion_repo, anchor, today)

    def month_summary(self, year: int, month: int) -> List[DayStats]:
        return CalendarService.month_summary(self.habit_repo.get_active(), self.completion_repo, year, month)

    # Dashboard

    def dashboard(self, as_of: Optional[date] = None) -> DashboardStats:
        """
        Summary numbers for the analytics dashboard.

        Week and month windows are the last 7 and 30 days ending on as_of.
        The average divides every completion record by the days elapsed since
        the oldest habit was created (at least one day).

        Args:
            as_of: Reference date (defaults to today)

        Returns:
            DashboardStats
        """
        if as_of is None:
            as_of = DateService.today()
        reference = DateService.coerce_date(as_of)
        if reference is None:
            logger.warning(f"Unreadable dashboard date {as_of!r}, returning empty summary")
            return DashboardStats(as_of=str(as_of))

        active = self.habit_repo.get_active()
        today = AggregationService.day_stats(active, self.completion_repo, reference)
        week = AggregationService.aggregate(
            active, self.completion_repo, *DateService.last_n_days(DASHBOARD_WEEK_DAYS, reference)
        )
        month = AggregationService.aggregate(
            active, self.completion_repo, *DateService.last_n_days(DASHBOARD_MONTH_DAYS, reference)
        )

        streaks = self.streak_service.top_streaks(
            active, self.completion_repo, reference, limit=len(active)
        )
        longest = streaks[0].streak if streaks else 0

        total_completions = len(self.snapshot.completions)
        earliest = self.habit_repo.earliest_created_date()
        elapsed = DateService.days_between(earliest, reference) if earliest else 1

        return DashboardStats(
            as_of=DateService.format_date(reference),
            total_habits=self.habit_repo.count(),
            active_habits=len(active),
            today_planned=today.total,
            today_completed=today.completed,
            today_completion_rate=today.percentage,
            week=week,
            month=month,
            longest_streak=longest,
            current_streaks=streaks[:self.settings.top_streaks_limit],
            total_completions=total_completions,
            average_daily_completions=total_completions / max(1, elapsed)
        )
