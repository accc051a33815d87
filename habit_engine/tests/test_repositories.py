"""
Tests for snapshot repositories.

Tests cover:
1. Completion index lookups
2. Habit queries
3. Row validation on snapshot intake
"""
from datetime import date
from types import SimpleNamespace

from habit_engine.repositories.completion_repository import CompletionRepository
from habit_engine.repositories.habit_repository import HabitRepository
from habit_engine.repositories.snapshot_repository import SnapshotRepository
from habit_engine.tests.conftest import make_habit, complete_on


class TestCompletionRepository:
    """Tests for CompletionRepository"""

    def test_lookup_by_habit_and_date(self, today, yesterday):
        repo = CompletionRepository(complete_on("h1", [today]))

        assert repo.has_completion("h1", today)
        assert not repo.has_completion("h1", yesterday)
        assert not repo.has_completion("h2", today)

    def test_ids_compared_as_strings(self, today):
        repo = CompletionRepository(complete_on("7", [today]))

        assert repo.has_completion(7, today)

    def test_dates_and_earliest(self, today, yesterday):
        repo = CompletionRepository(complete_on("h1", [today, yesterday, today]))

        assert repo.dates_for("h1") == frozenset({today, yesterday})
        assert repo.earliest_for("h1") == yesterday
        assert repo.earliest_for("missing") is None
        assert repo.count() == 3

    def test_unreadable_dates_skipped(self, today):
        rows = [
            SimpleNamespace(habit_id="h1", completion_date="2026-01-30"),
            SimpleNamespace(habit_id="h1", completion_date="someday"),
        ]

        repo = CompletionRepository(rows)

        assert repo.dates_for("h1") == frozenset({today})

    def test_wrap_reuses_repository(self):
        repo = CompletionRepository([])

        assert CompletionRepository.wrap(repo) is repo
        assert CompletionRepository.wrap(None).count() == 0


class TestHabitRepository:
    """Tests for HabitRepository"""

    def test_queries(self):
        active = make_habit("a", "daily", created_at=date(2026, 1, 5))
        retired = make_habit("r", "daily", created_at=date(2025, 12, 1), is_active=False)
        repo = HabitRepository([active, retired])

        assert repo.count() == 2
        assert repo.count_active() == 1
        assert repo.get_active() == [active]
        assert repo.get_by_id("r") == retired
        assert repo.get_by_id("x") is None
        assert repo.get_by_ids(["r", "a"]) == [active, retired]
        assert repo.earliest_created_date() == date(2025, 12, 1)

    def test_empty(self):
        assert HabitRepository([]).earliest_created_date() is None


class TestSnapshotRepository:
    """Tests for SnapshotRepository"""

    def test_parse_habit_rows(self):
        rows = [
            {
                "id": "abc",
                "user_id": 42,
                "name": "Stretch",
                "frequency_type": "CUSTOM",
                "custom_days": ["Tuesday", "thursday"],
                "created_at": "2026-01-02",
                "is_active": True,
            },
            {"id": "missing-created-at", "frequency_type": "daily"},
        ]

        habits = SnapshotRepository.parse_habits(rows)

        assert len(habits) == 1
        assert habits[0].user_id == "42"
        assert habits[0].frequency_type == "custom"
        assert habits[0].custom_days == frozenset({"tuesday", "thursday"})
        assert habits[0].created_date == date(2026, 1, 2)

    def test_parse_completion_rows(self):
        rows = [
            {"habit_id": "abc", "completion_date": "2026-01-30T06:30:00"},
            {"habit_id": "abc", "completion_date": None},
            {"completion_date": "2026-01-30"},
        ]

        completions = SnapshotRepository.parse_completions(rows)

        assert len(completions) == 1
        assert completions[0].completion_date == date(2026, 1, 30)

    def test_object_rows(self):
        row = SimpleNamespace(
            id=1, user_id=None, name="Walk", description=None, motivation=None,
            frequency_type="daily", custom_days=None, created_at="2026-01-01", is_active=True
        )

        habits = SnapshotRepository.parse_habits([row])

        assert habits[0].id == "1"

    def test_from_records_handles_none(self):
        snapshot = SnapshotRepository.from_records(None, None)

        assert snapshot.habits == []
        assert snapshot.completions == []


class TestCompletionLookupDates:
    """Tests for date arguments to has_completion"""

    def test_string_day(self, today):
        repo = CompletionRepository(complete_on("h1", [today]))

        assert repo.has_completion("h1", "2026-01-30")
        assert repo.has_completion("h1", "2026-01-30T21:00:00")

    def test_unreadable_day(self, today):
        repo = CompletionRepository(complete_on("h1", [today]))

        assert not repo.has_completion("h1", "30 Jan")
