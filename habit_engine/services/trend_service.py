"""
Trend bucketing service.
Splits a date range into day or Monday-aligned week buckets and computes completion rates per bucket.
"""
import logging
from datetime import date, timedelta
from typing import Iterable, Iterator, List, Optional, Tuple

from habit_engine.constants import GRANULARITY_DAY, GRANULARITY_WEEK
from habit_engine.exceptions import InvalidGranularityException
from habit_engine.repositories.completion_repository import CompletionRepository
from habit_engine.schemas import Habit, TrendPoint
from habit_engine.services.aggregation_service import AggregationService
from habit_engine.services.date_service import DateService
from habit_engine.services.schedule_service import ScheduleService

logger = logging.getLogger("habit_engine.trends")


class TrendSeries:
    """
    Chronological sequence of TrendPoint buckets.

    Points are computed on iteration. Each iteration starts from the first
    bucket again, so the same series can be consumed any number of times.
    """

    def __init__(
        self,
        habits: Iterable[Habit],
        completions: CompletionRepository,
        buckets: List[Tuple[date, date]],
        granularity: str,
        per_habit: bool = False,
        habit_ids: Optional[Iterable[str]] = None
    ):
        self.habits = tuple(habit for habit in habits if habit.is_active)
        self.completions = completions
        self.buckets = tuple(buckets)
        self.granularity = granularity
        self.per_habit = per_habit
        self.habit_ids = frozenset(habit_ids) if habit_ids is not None else None

    def __iter__(self) -> Iterator[TrendPoint]:
        for start, end in self.buckets:
            yield self._build_point(start, end)

    def __len__(self) -> int:
        return len(self.buckets)

    def to_list(self) -> List[TrendPoint]:
        return list(self)

    def _selected_habits(self) -> Tuple[Habit, ...]:
        if self.habit_ids is None:
            return self.habits
        return tuple(habit for habit in self.habits if habit.id in self.habit_ids)

    def _build_point(self, start: date, end: date) -> TrendPoint:
        stats = AggregationService.aggregate(self.habits, self.completions, start, end)

        if self.granularity == GRANULARITY_DAY:
            label = DateService.format_day_label(start)
        else:
            label = DateService.format_week_label(start, end)

        habit_rates = {}
        if self.per_habit:
            for habit in self._selected_habits():
                rate = self._habit_rate(habit, start, end)
                # No entry when the habit was not due: no data, not 0%
                if rate is not None:
                    habit_rates[habit.id] = rate

        return TrendPoint(
            date=DateService.format_date(start),
            end_date=DateService.format_date(end),
            label=label,
            planned=stats.planned,
            completed=stats.completed,
            rate=stats.completion_rate,
            habit_rates=habit_rates
        )

    def _habit_rate(self, habit: Habit, start: date, end: date) -> Optional[float]:
        if self.granularity == GRANULARITY_DAY:
            if not ScheduleService.is_due(habit, start):
                return None
            return 100.0 if self.completions.has_completion(habit.id, start) else 0.0

        stats = AggregationService.aggregate_habit(habit, self.completions, start, end)
        if stats.planned == 0:
            return None
        return stats.completion_rate


class TrendService:
    """Service for chart time series"""

    @staticmethod
    def day_buckets(start: date, end: date) -> List[Tuple[date, date]]:
        """One bucket per calendar date"""
        return [(day, day) for day in DateService.iter_days(start, end)]

    @staticmethod
    def week_buckets(start: date, end: date) -> List[Tuple[date, date]]:
        """
        Monday-to-Sunday buckets covering start..end.

        The first and last buckets are clipped to the range.
        """
        buckets = []
        cursor = start
        while cursor <= end:
            bucket_end = min(DateService.end_of_week(cursor), end)
            buckets.append((cursor, bucket_end))
            cursor = bucket_end + timedelta(days=1)
        return buckets

    @staticmethod
    def bucketize(
        habits: Iterable[Habit],
        completions,
        start_date,
        end_date,
        granularity: str = GRANULARITY_DAY,
        per_habit: bool = False,
        habit_ids: Optional[Iterable[str]] = None
    ) -> TrendSeries:
        """
        Build a completion-rate time series.

        Args:
            habits: Habits to include (inactive ones are skipped)
            completions: Completion records or a CompletionRepository
            start_date: First day of the range
            end_date: Last day of the range
            granularity: "day" or "week"
            per_habit: Also compute a rate per habit in every bucket. A habit
                not due anywhere in a bucket gets no entry (no data, not 0%),
                for day and week buckets alike
            habit_ids: Restrict per-habit rates to these habits

        Returns:
            TrendSeries in chronological order (empty for an inverted or unreadable range)

        Raises:
            InvalidGranularityException: If granularity is not "day" or "week"
        """
        if granularity == GRANULARITY_DAY:
            make_buckets = TrendService.day_buckets
        elif granularity == GRANULARITY_WEEK:
            make_buckets = TrendService.week_buckets
        else:
            raise InvalidGranularityException(granularity)

        window = AggregationService.resolve_window(start_date, end_date)
        buckets = make_buckets(*window) if window else []
        logger.debug(f"Built {len(buckets)} {granularity} buckets")

        return TrendSeries(
            habits,
            CompletionRepository.wrap(completions),
            buckets,
            granularity,
            per_habit=per_habit,
            habit_ids=habit_ids
        )
