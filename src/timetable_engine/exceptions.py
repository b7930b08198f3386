"""Custom exceptions for the timetable engine."""


class TimetableError(Exception):
    """Base exception for timetable engine errors."""

    pass


class ConfigError(TimetableError):
    """Slot configuration has an invalid shape."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        location = f" in '{field}'" if field else ""
        super().__init__(f"Invalid configuration{location}: {message}")


class ConstraintTokenError(ConfigError):
    """An unavailability token could not be parsed."""

    def __init__(self, teacher: str, token: str, reason: str):
        self.teacher = teacher
        self.token = token
        super().__init__(
            f"Malformed token '{token}' for teacher '{teacher}': {reason}. "
            "Expected 'day|period' or 'day|WT'.",
            field="unavailable",
        )


class ScheduleConstructionError(TimetableError):
    """Generation produced a structurally broken grid.

    This indicates a defect in the engine rather than bad input.
    """

    def __init__(self, day_group: str, message: str):
        self.day_group = day_group
        super().__init__(f"{day_group} schedule construction failed: {message}")
