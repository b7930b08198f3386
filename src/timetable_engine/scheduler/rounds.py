"""Round-by-round slot filling for one day-group."""

import logging
from collections import Counter

from ..config import SlotConfig
from ..models import Assignment, Day, DayGroup, Role, ScheduleResult
from .constraints import ConstraintIndex
from .exams import WordTestScheduler
from .occupancy import OccupancyTracker
from .policies import round_layout
from .selectors import (
    ForeignSelector,
    HomeroomSelector,
    KoreanSelector,
    RotationSelector,
    RotationState,
)

logger = logging.getLogger(__name__)


class RoundGenerator:
    """Fills one day-group's grid from the policy table.

    Generation moves strictly forward: day (weekday order), round
    (ascending), class (generation order), period (layout order). Each
    selector decision is final.

    Attributes:
        day_group: Day-group being generated
        occupancy: Occupancy tracker owned by this generator
        resolved_homerooms: class_id -> most recent homeroom teacher picked
    """

    def __init__(
        self,
        day_group: DayGroup,
        config: SlotConfig,
        constraints: ConstraintIndex,
        homeroom_counts: Counter | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            day_group: Day-group to generate
            config: Slot configuration (pools, pins, options)
            constraints: Constraint index built for this generation call
            homeroom_counts: Running homeroom counter shared across day-groups
        """
        self.day_group = day_group
        self.config = config
        self.options = config.options
        self.constraints = constraints
        self.occupancy = OccupancyTracker()
        self.homeroom_counts = homeroom_counts if homeroom_counts is not None else Counter()
        self.resolved_homerooms: dict[str, str] = {}

        self.homeroom_selector = HomeroomSelector(
            config.pools.homeroom,
            config.fixed_homerooms,
            self.occupancy,
            constraints,
            self.homeroom_counts,
        )
        self.korean_selector = KoreanSelector(
            config.pools, self.options, self.occupancy, constraints
        )
        if self.options.foreign_selection == "rotation":
            self.foreign_selector: ForeignSelector = RotationSelector(
                config.pools.foreign, self.occupancy, constraints
            )
        else:
            self.foreign_selector = ForeignSelector(
                config.pools.foreign, self.occupancy, constraints
            )
        self.word_tests = WordTestScheduler(day_group, constraints)

    def generate(self) -> ScheduleResult:
        """Generate the full weekly grid for this day-group."""
        result = ScheduleResult.empty(self.day_group)

        for day in self.day_group.days:
            rotation = RotationState()
            foreign_per_round: Counter = Counter()
            for round_number in self.day_group.rounds:
                for class_id in self.options.class_ids(self.day_group, round_number):
                    self._fill_class(
                        result, day, round_number, class_id, rotation, foreign_per_round
                    )

        return result

    def _own_homeroom(self, class_id: str, picked_today: str | None) -> str | None:
        return (
            picked_today
            or self.resolved_homerooms.get(class_id)
            or self.config.fixed_homerooms.get(class_id)
        )

    def _foreign_cap(self) -> int | None:
        target = self.options.target_foreign_per_round
        if target is None:
            return None
        return min(target, len(self.config.pools.foreign))

    def _pick_foreign(
        self,
        class_id: str,
        own_homeroom: str | None,
        day: Day,
        period: int,
        round_number: int,
        rotation: RotationState,
        foreign_per_round: Counter,
    ) -> tuple[str | None, Role]:
        cap = self._foreign_cap()
        teacher = None
        if cap is None or foreign_per_round[round_number] < cap:
            if isinstance(self.foreign_selector, RotationSelector):
                teacher = self.foreign_selector.pick(day, period, rotation)
            else:
                teacher = self.foreign_selector.pick(day, period)

        if teacher is not None:
            foreign_per_round[round_number] += 1
            return teacher, Role.FOREIGN

        if self.options.allow_foreign_fallback_to_k:
            substitute = self.korean_selector.pick(class_id, own_homeroom, day, period)
            if substitute is not None:
                logger.debug(
                    f"{class_id} {day.value} period {period}: foreign shortage, "
                    f"using {substitute} as K"
                )
            return substitute, Role.KOREAN

        return None, Role.FOREIGN

    def _fill_class(
        self,
        result: ScheduleResult,
        day: Day,
        round_number: int,
        class_id: str,
        rotation: RotationState,
        foreign_per_round: Counter,
    ) -> None:
        layout = round_layout(
            self.day_group, round_number, day, self.options.mwf_round1_period2
        )
        picked_today: str | None = None

        for period, role in layout:
            if role is Role.HOMEROOM:
                teacher = self.homeroom_selector.pick(class_id, day, period)
                if teacher is not None and picked_today is None:
                    picked_today = teacher
                    self.resolved_homerooms[class_id] = teacher
            elif role is Role.KOREAN:
                teacher = self.korean_selector.pick(
                    class_id, self._own_homeroom(class_id, picked_today), day, period
                )
            else:
                teacher, role = self._pick_foreign(
                    class_id,
                    self._own_homeroom(class_id, picked_today),
                    day,
                    period,
                    round_number,
                    rotation,
                    foreign_per_round,
                )

            if teacher is None:
                logger.debug(f"Unfilled: {class_id} {day.value} period {period} ({role.value})")
                continue

            result.add(
                day,
                Assignment(
                    teacher=teacher,
                    role=role,
                    class_id=class_id,
                    round=round_number,
                    period=period,
                    time=self.day_group.period_times[period],
                ),
            )

        exam = self.word_tests.schedule(
            class_id, round_number, day, self._own_homeroom(class_id, picked_today)
        )
        if exam is not None:
            result.add_word_test(day, exam)
