"""
Habit repository - Read-only queries over a snapshot's habit list.
"""
from datetime import date
from typing import Iterable, List, Optional

from habit_engine.schemas import Habit


class HabitRepository:
    """Repository for Habit lookups"""

    def __init__(self, habits: Iterable[Habit] = ()):
        self._habits: List[Habit] = list(habits or ())

    def get_all(self) -> List[Habit]:
        """Get all habits in snapshot order"""
        return list(self._habits)

    def get_active(self) -> List[Habit]:
        """Get habits that are not soft-deleted"""
        return [habit for habit in self._habits if habit.is_active]

    def get_by_id(self, habit_id: str) -> Optional[Habit]:
        """Get habit by ID"""
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        return None

    def get_by_ids(self, habit_ids: Iterable[str]) -> List[Habit]:
        """Get the habits whose IDs are listed, in snapshot order"""
        wanted = set(habit_ids)
        return [habit for habit in self._habits if habit.id in wanted]

    def count(self) -> int:
        return len(self._habits)

    def count_active(self) -> int:
        return len(self.get_active())

    def earliest_created_date(self) -> Optional[date]:
        """Creation date of the oldest habit, None for an empty snapshot"""
        if not self._habits:
            return None
        return min(habit.created_date for habit in self._habits)
