"""
Shared constants for the habit engine.
Frequency types, weekday naming, aggregation options and default limits.
"""

# Frequency types (values persisted in habits.frequency_type)
FREQUENCY_DAILY = "daily"
FREQUENCY_ALTERNATE = "alternate"
FREQUENCY_CUSTOM = "custom"

FREQUENCY_TYPES = (FREQUENCY_DAILY, FREQUENCY_ALTERNATE, FREQUENCY_CUSTOM)

# Canonical weekday names, index matches date.weekday()
WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Boundary date format for completion dates and range bounds
DATE_FORMAT = "%Y-%m-%d"

# Trend granularity
GRANULARITY_DAY = "day"
GRANULARITY_WEEK = "week"

# Period presets (last N days, inclusive of today)
PERIOD_PRESETS = {
    "7": 7,
    "30": 30,
    "90": 90,
}
DEFAULT_PERIOD = "30"

# Windows used by the dashboard summary
DASHBOARD_WEEK_DAYS = 7
DASHBOARD_MONTH_DAYS = 30

# Streak walk bound (calendar days, not due-days)
STREAK_MAX_LOOKBACK_DAYS = 365

# Display limits
TOP_STREAKS_LIMIT = 3
ABANDONED_DISPLAY_LIMIT = 5

# Calendar cell statuses
CELL_COMPLETED = "completed"
CELL_MISSED = "missed"
CELL_PENDING = "pending"
CELL_NOT_DUE = "not_due"

# Frequency display text
FREQUENCY_LABEL_DAILY = "Every day"
FREQUENCY_LABEL_ALTERNATE = "Alternate days"
FREQUENCY_LABEL_CUSTOM = "Custom"
FREQUENCY_LABEL_UNKNOWN = "Unknown"

# Logging
DEFAULT_LOG_DIRECTORY = "/var/log/habit-engine"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"
DEFAULT_LOG_FILE = "habit_engine.log"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Environment variables
ENV_STREAK_LOOKBACK = "HABIT_ENGINE_STREAK_LOOKBACK"
ENV_TOP_STREAKS = "HABIT_ENGINE_TOP_STREAKS"
ENV_ABANDONED_LIMIT = "HABIT_ENGINE_ABANDONED_LIMIT"
ENV_LOG_DIR = "HABIT_ENGINE_LOG_DIR"
ENV_LOG_FILE = "HABIT_ENGINE_LOG_FILE"
ENV_LOG_LEVEL = "HABIT_ENGINE_LOG_LEVEL"
