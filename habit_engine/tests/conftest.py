"""
Shared fixtures for habit engine tests.

Reference week: Monday 2026-01-26 .. Sunday 2026-02-01, "today" is Friday 2026-01-30.
"""
import pytest
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from habit_engine.config import EngineSettings
from habit_engine.schemas import Habit, HabitCompletion, HabitSnapshot


def make_habit(
    habit_id: str = "h1",
    frequency_type: str = "daily",
    custom_days: Optional[Iterable[str]] = None,
    created_at=datetime(2026, 1, 1, 9, 0, 0),
    is_active: bool = True,
    name: Optional[str] = None
) -> Habit:
    """Build a habit with sensible defaults"""
    return Habit(
        id=habit_id,
        name=name or f"Habit {habit_id}",
        frequency_type=frequency_type,
        custom_days=custom_days,
        created_at=created_at,
        is_active=is_active
    )


def complete_on(habit_id: str, days: Iterable[date]) -> List[HabitCompletion]:
    """Build one completion per listed date"""
    return [
        HabitCompletion(id=f"{habit_id}-{day.isoformat()}", habit_id=habit_id, completion_date=day)
        for day in days
    ]


def day_range(start: date, end: date) -> List[date]:
    """Inclusive list of dates"""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


@pytest.fixture
def today():
    return date(2026, 1, 30)


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def monday():
    return date(2026, 1, 26)


@pytest.fixture
def default_settings():
    return EngineSettings()


@pytest.fixture
def daily_habit():
    return make_habit("daily", "daily")


@pytest.fixture
def weekday_habit():
    """Due Monday, Wednesday and Friday"""
    return make_habit("mwf", "custom", ["monday", "wednesday", "friday"])


@pytest.fixture
def sample_snapshot(today, monday):
    """
    Two active habits and one inactive one.

    - daily: completed Mon..Fri of the reference week (streak 5)
    - mwf: completed Mon, Wed, Fri of the reference week (streak 3)
    - retired: inactive daily habit, no completions
    """
    habits = [
        make_habit("daily", "daily"),
        make_habit("mwf", "custom", ["monday", "wednesday", "friday"]),
        make_habit("retired", "daily", is_active=False),
    ]
    completions = (
        complete_on("daily", day_range(monday, today))
        + complete_on("mwf", [monday, monday + timedelta(days=2), today])
    )
    return HabitSnapshot(habits=habits, completions=completions)
