"""
Completion repository - Read-only lookups over a snapshot's completion records.
Indexes completions by (habit_id, completion_date) so due-date checks are constant time.
"""
import logging
from datetime import date
from typing import Dict, FrozenSet, Iterable, Optional, Set

from habit_engine.exceptions import InvalidDateException
from habit_engine.services.date_service import DateService

logger = logging.getLogger("habit_engine.completions")


class CompletionRepository:
    """Repository for HabitCompletion lookups"""

    def __init__(self, completions: Iterable = ()):
        self._dates: Dict[str, Set[date]] = {}
        self._records = 0
        for completion in completions:
            self._records += 1
            try:
                day = DateService.parse_date(completion.completion_date)
            except InvalidDateException:
                logger.warning(
                    f"Skipping completion with unreadable date {completion.completion_date!r} "
                    f"for habit {completion.habit_id}"
                )
                continue
            self._dates.setdefault(str(completion.habit_id), set()).add(day)

    @classmethod
    def wrap(cls, completions) -> "CompletionRepository":
        """Return completions as a repository, indexing them if needed"""
        if isinstance(completions, cls):
            return completions
        return cls(completions or ())

    def has_completion(self, habit_id: str, day) -> bool:
        """Check whether a habit was completed on a calendar date (False for an unreadable date)"""
        target = DateService.coerce_date(day)
        if target is None:
            return False
        return target in self._dates.get(str(habit_id), ())

    def dates_for(self, habit_id: str) -> FrozenSet[date]:
        """All completion dates recorded for a habit"""
        return frozenset(self._dates.get(str(habit_id), ()))

    def earliest_for(self, habit_id: str) -> Optional[date]:
        """First completion date for a habit, None if it has none"""
        dates = self._dates.get(str(habit_id))
        return min(dates) if dates else None

    def count(self) -> int:
        """Number of completion records supplied, including duplicates"""
        return self._records
