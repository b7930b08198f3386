"""Per-teacher constraint lookup."""

import math
from dataclasses import dataclass, field

from ..constants import WORD_TEST_LABEL
from ..exceptions import ConfigError, ConstraintTokenError
from ..models import Day, TeacherConstraint

# Highest period number in any day-group
MAX_PERIOD = 8


@dataclass
class _Entry:
    homeroom_disabled: bool = False
    max_homerooms: float = math.inf
    blocked_periods: set[tuple[Day, int]] = field(default_factory=set)
    exam_blocked_days: set[Day] = field(default_factory=set)


def parse_unavailable_token(teacher: str, token: str) -> tuple[Day, int | None]:
    """Parse a 'day|period' or 'day|WT' token.

    Args:
        teacher: Teacher the token belongs to (for error messages)
        token: Raw token string

    Returns:
        Tuple of (day, period), where period is None for word-test tokens

    Raises:
        ConstraintTokenError: If the token is malformed
    """
    day_part, separator, slot_part = token.partition("|")
    if not separator:
        raise ConstraintTokenError(teacher, token, "missing '|' separator")

    try:
        day = Day.parse(day_part)
    except ConfigError:
        raise ConstraintTokenError(teacher, token, f"unknown day '{day_part}'") from None

    slot = slot_part.strip()
    if slot.upper() == WORD_TEST_LABEL:
        return day, None

    if not slot.isdigit():
        raise ConstraintTokenError(teacher, token, f"'{slot}' is not a period number")
    period = int(slot)
    if not 1 <= period <= MAX_PERIOD:
        raise ConstraintTokenError(teacher, token, f"period {period} is out of range 1-{MAX_PERIOD}")

    return day, period


class ConstraintIndex:
    """Lookup of per-teacher constraints, keyed by teacher name.

    A teacher absent from the index is fully available, may take homeroom
    duty, and has unbounded homeroom capacity. Several records for the same
    teacher are merged: blocked slots are unioned, homeroom_disabled wins if
    set on any record, and the smallest cap applies.
    """

    def __init__(self, constraints: list[TeacherConstraint] | None = None) -> None:
        self._entries: dict[str, _Entry] = {}
        for record in constraints or []:
            self._add(record)

    def _add(self, record: TeacherConstraint) -> None:
        entry = self._entries.setdefault(record.teacher_name, _Entry())
        entry.homeroom_disabled = entry.homeroom_disabled or record.homeroom_disabled
        if record.max_homerooms is not None:
            entry.max_homerooms = min(entry.max_homerooms, record.max_homerooms)

        for token in record.unavailable:
            day, period = parse_unavailable_token(record.teacher_name, token)
            if period is None:
                entry.exam_blocked_days.add(day)
            else:
                entry.blocked_periods.add((day, period))

    def is_unavailable(self, teacher: str, day: Day, period: int) -> bool:
        """Check if a teacher is blocked for a regular period."""
        entry = self._entries.get(teacher)
        return entry is not None and (day, period) in entry.blocked_periods

    def is_exam_blocked(self, teacher: str, day: Day) -> bool:
        """Check if a teacher may not run word tests on the given day."""
        entry = self._entries.get(teacher)
        return entry is not None and day in entry.exam_blocked_days

    def homeroom_allowed(self, teacher: str) -> bool:
        entry = self._entries.get(teacher)
        return entry is None or not entry.homeroom_disabled

    def homeroom_capacity(self, teacher: str) -> float:
        """Maximum homeroom assignments for a teacher (math.inf when unbounded)."""
        entry = self._entries.get(teacher)
        return math.inf if entry is None else entry.max_homerooms

    def __contains__(self, teacher: str) -> bool:
        return teacher in self._entries
