"""Candidate selectors for homeroom, Korean and foreign periods.

Every selector consults the occupancy tracker and the constraint index, and
occupies the slot as soon as it settles on a teacher. A selector that finds
nobody returns None; the caller leaves the cell without that assignment.
"""

import logging
from collections import Counter
from dataclasses import dataclass

from ..config import GlobalOptions, TeacherPools
from ..models import Day, Role, Teacher
from .constraints import ConstraintIndex
from .occupancy import OccupancyTracker

logger = logging.getLogger(__name__)


class _BaseSelector:
    def __init__(self, occupancy: OccupancyTracker, constraints: ConstraintIndex) -> None:
        self.occupancy = occupancy
        self.constraints = constraints

    def _is_free(self, teacher: str, day: Day, period: int) -> bool:
        return not self.constraints.is_unavailable(
            teacher, day, period
        ) and self.occupancy.can_use(day, period, teacher)

    def _first_free(self, pool: list[Teacher], day: Day, period: int) -> str | None:
        for teacher in pool:
            if self._is_free(teacher.name, day, period):
                return teacher.name
        return None

    def _take(self, teacher: str | None, day: Day, period: int) -> str | None:
        if teacher is not None:
            self.occupancy.occupy(day, period, teacher)
        return teacher


class HomeroomSelector(_BaseSelector):
    """Picks homeroom teachers: fixed pin first, then the pool in order.

    The running homeroom count is shared with the caller so that capacity
    holds across every day-group of one generation call.
    """

    def __init__(
        self,
        pool: list[Teacher],
        fixed_homerooms: dict[str, str],
        occupancy: OccupancyTracker,
        constraints: ConstraintIndex,
        homeroom_counts: Counter,
    ) -> None:
        super().__init__(occupancy, constraints)
        self.pool = pool
        self.fixed_homerooms = fixed_homerooms
        self.homeroom_counts = homeroom_counts

    def _eligible(self, teacher: str, day: Day, period: int) -> bool:
        return (
            self.constraints.homeroom_allowed(teacher)
            and self._is_free(teacher, day, period)
            and self.homeroom_counts[teacher] < self.constraints.homeroom_capacity(teacher)
        )

    def pick(self, class_id: str, day: Day, period: int) -> str | None:
        """Select and occupy a homeroom teacher for a class period.

        Args:
            class_id: Class being filled
            day: Day of the week
            period: Period number

        Returns:
            Teacher name, or None if nobody is eligible
        """
        chosen = None
        pinned = self.fixed_homerooms.get(class_id)
        if pinned and self._eligible(pinned, day, period):
            chosen = pinned
        else:
            for teacher in self.pool:
                if self._eligible(teacher.name, day, period):
                    chosen = teacher.name
                    break

        if chosen is not None:
            self.homeroom_counts[chosen] += 1
        return self._take(chosen, day, period)


class KoreanSelector(_BaseSelector):
    """Picks Korean-role teachers, optionally borrowing homeroom teachers."""

    def __init__(
        self,
        pools: TeacherPools,
        options: GlobalOptions,
        occupancy: OccupancyTracker,
        constraints: ConstraintIndex,
    ) -> None:
        super().__init__(occupancy, constraints)
        self.pools = pools
        self.options = options

    def candidates(self, own_homeroom: str | None) -> list[Teacher]:
        """Ordered candidate list for a class with the given homeroom teacher."""
        pool = list(self.pools.korean)
        if self.options.include_h_in_k:
            for teacher in self.pools.homeroom:
                if self.options.disallow_own_h_as_k and teacher.name == own_homeroom:
                    continue
                pool.append(teacher)

        if not (self.options.prefer_other_h_for_k and own_homeroom):
            return pool

        preferred = [
            t for t in pool if t.role is Role.HOMEROOM and t.name != own_homeroom
        ]
        rest = [t for t in pool if t not in preferred]
        return preferred + rest

    def pick(
        self, class_id: str, own_homeroom: str | None, day: Day, period: int
    ) -> str | None:
        """Select and occupy a Korean teacher for a class period."""
        chosen = self._first_free(self.candidates(own_homeroom), day, period)
        if chosen is None:
            logger.debug(f"No Korean teacher for {class_id} on {day.value} period {period}")
        return self._take(chosen, day, period)


class ForeignSelector(_BaseSelector):
    """Picks foreign teachers in pool order (first free wins)."""

    def __init__(
        self,
        pool: list[Teacher],
        occupancy: OccupancyTracker,
        constraints: ConstraintIndex,
    ) -> None:
        super().__init__(occupancy, constraints)
        self.pool = pool

    def pick(self, day: Day, period: int) -> str | None:
        return self._take(self._first_free(self.pool, day, period), day, period)


@dataclass
class RotationState:
    """Round-robin cursor into the foreign pool.

    Created fresh for every day; never shared between generation calls.
    """

    cursor: int = 0


class RotationSelector(ForeignSelector):
    """Picks foreign teachers round-robin so picks cycle through the pool."""

    def pick(self, day: Day, period: int, state: RotationState | None = None) -> str | None:
        """Select and occupy the next free foreign teacher after the cursor.

        The cursor moves to just past the chosen teacher, skipping every
        candidate that was consulted and rejected on the way.
        """
        if state is None:
            return super().pick(day, period)
        if not self.pool:
            return None

        size = len(self.pool)
        for offset in range(size):
            index = (state.cursor + offset) % size
            name = self.pool[index].name
            if self._is_free(name, day, period):
                state.cursor = (index + 1) % size
                logger.debug(f"Rotation picked {name} on {day.value} period {period}")
                return self._take(name, day, period)
        return None
