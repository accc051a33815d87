"""
Adherence ranking service.
Ranks active habits by failure rate over a window ("most abandoned habits").
"""
import logging
from typing import Iterable, List, Optional

from habit_engine.repositories.completion_repository import CompletionRepository
from habit_engine.schemas import Habit, AbandonedHabit
from habit_engine.services.aggregation_service import AggregationService

logger = logging.getLogger("habit_engine.ranking")


class RankingService:
    """Service for failure-rate ranking"""

    @staticmethod
    def rank_by_failure(
        habits: Iterable[Habit],
        completions,
        start_date,
        end_date,
        limit: Optional[int] = None
    ) -> List[AbandonedHabit]:
        """
        Rank active habits by how often they were missed.

        Habits never due in the window and habits with no misses are left out.
        Order: failure rate descending, then missed count descending, then
        input order.

        Args:
            habits: Habits to rank (inactive ones are skipped)
            completions: Completion records or a CompletionRepository
            start_date: First day of the window
            end_date: Last day of the window
            limit: Maximum entries to return (all when None)

        Returns:
            List of AbandonedHabit
        """
        repo = CompletionRepository.wrap(completions)
        ranked = []

        for habit in habits:
            if not habit.is_active:
                continue

            stats = AggregationService.aggregate_habit(habit, repo, start_date, end_date)
            if stats.planned == 0 or stats.missed == 0:
                continue

            ranked.append(AbandonedHabit(
                habit=habit,
                missed=stats.missed,
                planned=stats.planned,
                failure_rate=stats.missed / stats.planned * 100
            ))

        # sort() is stable, so remaining ties keep input order
        ranked.sort(key=lambda item: (-item.failure_rate, -item.missed))

        logger.debug(f"Ranked {len(ranked)} habits with failures")
        if limit is not None:
            return ranked[:limit]
        return ranked
