"""
Tests for AnalyticsService.

Tests cover:
1. Dashboard summary figures
2. Abandoned-habit presets
3. Snapshot intake from raw rows
4. Repeated queries over one snapshot
"""
import pytest
from datetime import date
from unittest.mock import patch

from habit_engine.config import EngineSettings
from habit_engine.exceptions import InvalidPeriodException, InvalidGranularityException
from habit_engine.schemas import HabitSnapshot
from habit_engine.services.analytics_service import AnalyticsService
from habit_engine.services.date_service import DateService


@pytest.fixture
def analytics(sample_snapshot):
    return AnalyticsService(sample_snapshot)


class TestDashboard:
    """Tests for dashboard"""

    def test_counts(self, analytics, today):
        stats = analytics.dashboard(today)

        assert stats.as_of == "2026-01-30"
        assert stats.total_habits == 3
        assert stats.active_habits == 2

    def test_today(self, analytics, today):
        stats = analytics.dashboard(today)

        assert stats.today_planned == 2
        assert stats.today_completed == 2
        assert stats.today_completion_rate == pytest.approx(100.0)

    def test_week_and_month_windows(self, analytics, today):
        """Last 7 and 30 days ending today"""
        stats = analytics.dashboard(today)

        assert stats.week.planned == 10
        assert stats.week.completed == 8
        assert stats.month.planned == 43
        assert stats.month.completed == 8

    def test_streaks(self, analytics, today):
        stats = analytics.dashboard(today)

        assert stats.longest_streak == 5
        assert [(item.habit.id, item.streak) for item in stats.current_streaks] == [
            ("daily", 5), ("mwf", 3)
        ]

    def test_average_daily_completions(self, analytics, today):
        """Eight completions over the 29 days since the oldest habit was created"""
        stats = analytics.dashboard(today)

        assert stats.total_completions == 8
        assert stats.average_daily_completions == pytest.approx(8 / 29)

    def test_streak_list_respects_settings(self, sample_snapshot, today):
        service = AnalyticsService(sample_snapshot, EngineSettings(top_streaks_limit=1))

        stats = service.dashboard(today)

        assert [item.habit.id for item in stats.current_streaks] == ["daily"]
        assert stats.longest_streak == 5

    def test_empty_snapshot(self, today):
        stats = AnalyticsService(HabitSnapshot()).dashboard(today)

        assert stats.total_habits == 0
        assert stats.today_completion_rate == 0.0
        assert stats.longest_streak == 0
        assert stats.average_daily_completions == 0.0

    def test_unreadable_date(self, analytics):
        stats = analytics.dashboard("not-a-date")

        assert stats.total_habits == 0
        assert stats.current_streaks == []

    def test_defaults_to_today(self, analytics):
        with patch.object(DateService, "today", return_value=date(2026, 1, 30)):
            stats = analytics.dashboard()

        assert stats.as_of == "2026-01-30"

    def test_idempotent(self, analytics, today):
        assert analytics.dashboard(today) == analytics.dashboard(today)


class TestAbandonedHabits:
    """Tests for abandoned_habits"""

    def test_week_preset(self, analytics, today):
        result = analytics.abandoned_habits("7", today)

        assert [item.habit.id for item in result] == ["daily"]
        assert result[0].missed == 2
        assert result[0].planned == 7

    def test_month_preset(self, analytics, today):
        result = analytics.abandoned_habits("30", today)

        # daily: 25 of 30 missed, mwf: 10 of 13 missed
        assert [item.habit.id for item in result] == ["daily", "mwf"]

    def test_unknown_preset(self, analytics, today):
        with pytest.raises(InvalidPeriodException):
            analytics.abandoned_habits("14", today)


class TestDelegation:
    """Tests for the per-snapshot query helpers"""

    def test_due_habits_skips_inactive(self, analytics, today):
        assert [habit.id for habit in analytics.due_habits(today)] == ["daily", "mwf"]
        assert [habit.id for habit in analytics.due_habits(date(2026, 1, 27))] == ["daily"]

    def test_streaks(self, analytics, today):
        daily = analytics.habit_repo.get_by_id("daily")

        assert analytics.current_streak(daily, today) == 5
        assert analytics.longest_streak(daily, today) == 5

    def test_trend(self, analytics, monday, today):
        points = analytics.trend(monday, today, "week").to_list()

        assert len(points) == 1
        assert points[0].planned == 8
        assert points[0].completed == 8

    def test_trend_invalid_granularity(self, analytics, monday, today):
        with pytest.raises(InvalidGranularityException):
            analytics.trend(monday, today, "year")

    def test_week_board(self, analytics, today):
        rows = analytics.week_board(today, today)

        assert [row.habit.id for row in rows] == ["daily", "mwf"]


class TestFromRecords:
    """Tests for building the service from raw rows"""

    def test_malformed_rows_are_skipped(self, today):
        habit_rows = [
            {"id": 1, "name": "Read", "frequency_type": "daily", "created_at": "2026-01-01T08:00:00"},
            {"id": 2, "name": "Broken", "frequency_type": "daily", "created_at": "garbage"},
        ]
        completion_rows = [
            {"id": 10, "habit_id": 1, "completion_date": "2026-01-30"},
            {"id": 11, "habit_id": 1, "completion_date": "30.01.2026"},
            {"id": 12, "habit_id": 1, "completion_date": "2026-01-29"},
        ]

        service = AnalyticsService.from_records(habit_rows, completion_rows)

        assert service.habit_repo.count() == 1
        assert service.completion_repo.count() == 2
        habit = service.habit_repo.get_by_id("1")
        assert service.current_streak(habit, today) == 2


class TestBoundaryDates:
    """Tests for string and unreadable dates on analytics entry points"""

    def test_abandoned_habits_string_as_of(self, analytics, today):
        assert analytics.abandoned_habits("7", "2026-01-30") == analytics.abandoned_habits("7", today)

    def test_abandoned_habits_unreadable_as_of(self, analytics):
        assert analytics.abandoned_habits("7", "yesterday-ish") == []

    def test_due_habits_string_day(self, analytics):
        assert [habit.id for habit in analytics.due_habits("2026-01-27")] == ["daily"]

    def test_due_habits_unreadable_day(self, analytics):
        assert analytics.due_habits("someday") == []

    def test_week_board_string_dates(self, analytics):
        rows = analytics.week_board("2026-01-30", "2026-01-30")

        assert [row.habit.id for row in rows] == ["daily", "mwf"]
        assert rows[0].cells[4].status == "completed"

    def test_month_summary_invalid_month(self, analytics):
        assert analytics.month_summary(2026, 0) == []
