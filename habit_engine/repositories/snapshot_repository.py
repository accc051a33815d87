"""
Snapshot repository - Builds a validated HabitSnapshot from raw store rows.
Rows that fail validation are logged and skipped so one bad record never hides the rest.
"""
import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from habit_engine.schemas import Habit, HabitCompletion, HabitSnapshot

logger = logging.getLogger("habit_engine.snapshot")


def _row_key(row, key: str):
    if isinstance(row, dict):
        return row.get(key)
    return getattr(row, key, None)


class SnapshotRepository:
    """Repository for snapshot intake"""

    @staticmethod
    def parse_habits(rows: Iterable[dict]) -> List[Habit]:
        """Validate habit rows, skipping malformed ones"""
        habits = []
        for row in rows or ():
            try:
                habits.append(Habit.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed habit row {_row_key(row, 'id')!r}: {e.error_count()} error(s)"
                )
        return habits

    @staticmethod
    def parse_completions(rows: Iterable[dict]) -> List[HabitCompletion]:
        """Validate completion rows, skipping malformed ones"""
        completions = []
        for row in rows or ():
            try:
                completions.append(HabitCompletion.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed completion row for habit {_row_key(row, 'habit_id')!r}: "
                    f"{e.error_count()} error(s)"
                )
        return completions

    @staticmethod
    def from_records(
        habit_rows: Optional[Iterable[dict]],
        completion_rows: Optional[Iterable[dict]]
    ) -> HabitSnapshot:
        """
        Build a snapshot from rows fetched together from the store.

        Args:
            habit_rows: Raw habit dictionaries
            completion_rows: Raw completion dictionaries

        Returns:
            HabitSnapshot with every valid row
        """
        habits = SnapshotRepository.parse_habits(habit_rows)
        completions = SnapshotRepository.parse_completions(completion_rows)
        logger.debug(f"Snapshot loaded: {len(habits)} habits, {len(completions)} completions")
        return HabitSnapshot(habits=habits, completions=completions)
