"""Occupancy tracking for timetable generation."""

from collections import defaultdict

from ..models import Day


class OccupancyTracker:
    """Tracks which teachers are committed to each (day, period).

    One tracker covers one day-group within one generation call. It only
    prevents a teacher from holding two simultaneous assignments; an entry
    says nothing about constraint compliance.
    """

    def __init__(self) -> None:
        # (day, period, teacher) composite keys
        self._busy: set[tuple[Day, int, str]] = set()
        # (day, period) -> teachers, in the order they were committed
        self._by_slot: dict[tuple[Day, int], list[str]] = defaultdict(list)

    def can_use(self, day: Day, period: int, teacher: str) -> bool:
        """Check if a teacher is free at the given day and period."""
        return (day, period, teacher) not in self._busy

    def occupy(self, day: Day, period: int, teacher: str) -> None:
        """Mark a teacher as busy at the given day and period.

        Occupying an already busy slot is a no-op.
        """
        key = (day, period, teacher)
        if key in self._busy:
            return
        self._busy.add(key)
        self._by_slot[(day, period)].append(teacher)

    def busy_teachers(self, day: Day, period: int) -> list[str]:
        """Teachers committed at the given day and period."""
        return list(self._by_slot.get((day, period), []))

    def __len__(self) -> int:
        return len(self._busy)
