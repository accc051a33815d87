"""
Custom exceptions for the habit engine.
Raised by boundary parsing helpers and for unsupported caller options.
Computation services catch date errors and degrade to empty results.
"""


class HabitEngineException(Exception):
    """Base exception for the habit engine"""
    pass


class InvalidDateException(HabitEngineException):
    """Raised when a value cannot be read as a calendar date"""
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid date: {value!r}. Expected YYYY-MM-DD")


class InvalidGranularityException(HabitEngineException):
    """Raised when a trend granularity is not supported"""
    def __init__(self, granularity: str):
        self.granularity = granularity
        super().__init__(
            f"Unsupported granularity: {granularity!r}. Expected 'day' or 'week'"
        )


class InvalidPeriodException(HabitEngineException):
    """Raised when a period preset is not known"""
    def __init__(self, period: str):
        self.period = period
        super().__init__(f"Unknown period preset: {period!r}")
