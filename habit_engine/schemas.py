from pydantic import BaseModel, Field, computed_field, field_validator
from datetime import datetime, date, time
from typing import Dict, FrozenSet, List, Optional

from habit_engine.constants import FREQUENCY_DAILY
from habit_engine.exceptions import InvalidDateException
from habit_engine.services.date_service import DateService


# Input records (read-only snapshot)
class Habit(BaseModel):
    id: str
    user_id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    motivation: Optional[str] = None

    # Recurrence: daily, alternate or custom. Unknown values are never due.
    frequency_type: str = Field(default=FREQUENCY_DAILY)
    custom_days: FrozenSet[str] = Field(default_factory=frozenset)  # lowercase weekday names

    created_at: datetime  # Anchor for alternate-day parity
    is_active: bool = True

    class Config:
        frozen = True
        from_attributes = True

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        # Store ids may be integers or UUIDs; compare them as strings
        if value is None:
            return value
        return str(value)

    @field_validator("frequency_type", mode="before")
    @classmethod
    def normalize_frequency_type(cls, value):
        if value is None:
            return ""
        return str(value).strip().lower()

    @field_validator("custom_days", mode="before")
    @classmethod
    def normalize_custom_days(cls, value):
        # Absent and empty mean the same thing: never due
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(str(day).strip().lower() for day in value)

    @field_validator("created_at", mode="before")
    @classmethod
    def accept_plain_dates(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        if isinstance(value, str) and len(value.strip()) == 10:
            try:
                return datetime.combine(DateService.parse_date(value), time.min)
            except InvalidDateException as e:
                raise ValueError(str(e)) from e
        return value

    @property
    def created_date(self) -> date:
        """Creation timestamp truncated to a calendar date"""
        return self.created_at.date()


class HabitCompletion(BaseModel):
    id: Optional[str] = None
    habit_id: str
    user_id: Optional[str] = None
    completion_date: date  # One completion per (habit_id, completion_date)
    notes: Optional[str] = None

    class Config:
        frozen = True
        from_attributes = True

    @field_validator("id", "habit_id", "user_id", mode="before")
    @classmethod
    def stringify_ids(cls, value):
        if value is None:
            return value
        return str(value)

    @field_validator("completion_date", mode="before")
    @classmethod
    def parse_completion_date(cls, value):
        try:
            return DateService.parse_date(value)
        except InvalidDateException as e:
            raise ValueError(str(e)) from e


class HabitSnapshot(BaseModel):
    """Habits and completions captured together from the store"""
    habits: List[Habit] = Field(default_factory=list)
    completions: List[HabitCompletion] = Field(default_factory=list)

    class Config:
        frozen = True


# Computed results
class WindowStats(BaseModel):
    planned: int = 0
    completed: int = 0

    class Config:
        frozen = True

    @computed_field
    @property
    def missed(self) -> int:
        return self.planned - self.completed

    @computed_field
    @property
    def completion_rate(self) -> float:
        # Defined as 0 for an empty window so percentages always render
        if self.planned <= 0:
            return 0.0
        return self.completed / self.planned * 100


class HabitStreak(BaseModel):
    habit: Habit
    streak: int = 0

    class Config:
        frozen = True


class AbandonedHabit(BaseModel):
    habit: Habit
    missed: int
    planned: int
    failure_rate: float  # missed / planned * 100

    class Config:
        frozen = True


class TrendPoint(BaseModel):
    date: str  # Bucket start, YYYY-MM-DD
    end_date: str  # Bucket end (inclusive), YYYY-MM-DD
    label: str
    planned: int = 0
    completed: int = 0
    rate: float = 0.0  # Overall rate across included habits, 0.0 when nothing was planned
    habit_rates: Dict[str, float] = Field(default_factory=dict)  # Absent key means no data

    class Config:
        frozen = True


class DayStats(BaseModel):
    date: str
    total: int = 0
    completed: int = 0
    percentage: float = 0.0

    class Config:
        frozen = True


class CalendarCell(BaseModel):
    date: str
    habit_id: str
    status: str  # completed, missed, pending, not_due

    class Config:
        frozen = True


class HabitWeekRow(BaseModel):
    habit: Habit
    frequency_label: str
    cells: List[CalendarCell] = Field(default_factory=list)

    class Config:
        frozen = True


class DashboardStats(BaseModel):
    as_of: str
    total_habits: int = 0
    active_habits: int = 0

    today_planned: int = 0
    today_completed: int = 0
    today_completion_rate: float = 0.0

    week: WindowStats = Field(default_factory=WindowStats)
    month: WindowStats = Field(default_factory=WindowStats)

    longest_streak: int = 0
    current_streaks: List[HabitStreak] = Field(default_factory=list)

    total_completions: int = 0
    average_daily_completions: float = 0.0

    class Config:
        frozen = True
