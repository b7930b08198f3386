"""Top-level timetable generation."""

import logging
from collections import Counter

from ..config import SlotConfig
from ..exceptions import ScheduleConstructionError
from ..models import DayGroup, GenerationResult, ScheduleResult
from .constraints import ConstraintIndex
from .rounds import RoundGenerator
from .validator import validate_schedules

logger = logging.getLogger(__name__)


def _check_structure(result: ScheduleResult) -> None:
    """Raise if a generated grid is missing a day or a period."""
    group = result.day_group
    for day in group.days:
        schedule = result.days.get(day)
        if schedule is None:
            raise ScheduleConstructionError(group.value, f"day {day.value} missing")
        missing = [p for p in group.periods if p not in schedule.periods]
        if missing:
            raise ScheduleConstructionError(
                group.value, f"{day.value} is missing periods {missing}"
            )


def generate_day_group(
    day_group: DayGroup,
    config: SlotConfig,
    constraints: ConstraintIndex | None = None,
    homeroom_counts: Counter | None = None,
) -> ScheduleResult:
    """Generate the timetable for one day-group.

    Args:
        day_group: Day-group to generate
        config: Slot configuration
        constraints: Prebuilt constraint index (built from config if omitted)
        homeroom_counts: Homeroom counter to share with other day-groups

    Returns:
        ScheduleResult with every day and period present

    Raises:
        ConstraintTokenError: If a constraint token is malformed
        ScheduleConstructionError: If the generated grid is structurally broken
    """
    if constraints is None:
        constraints = ConstraintIndex(config.constraints)

    class_total = sum(config.options.class_count(day_group, r) for r in day_group.rounds)
    logger.info(f"Generating {day_group.value} timetable for {class_total} classes")

    result = RoundGenerator(day_group, config, constraints, homeroom_counts).generate()
    _check_structure(result)

    logger.info(f"{day_group.value}: {result.total_assignments} assignments")
    return result


def generate_mwf(config: SlotConfig) -> ScheduleResult:
    """Generate the Mon/Wed/Fri timetable on its own."""
    return generate_day_group(DayGroup.MWF, config)


def generate_tt(config: SlotConfig) -> ScheduleResult:
    """Generate the Tue/Thu timetable on its own."""
    return generate_day_group(DayGroup.TT, config)


def generate_schedules(config: SlotConfig) -> GenerationResult:
    """Generate both timetables and validate them.

    The result is a pure function of the configuration: identical input,
    including pool order, always yields identical timetables. Each
    day-group gets its own occupancy tracker; the homeroom counter is
    shared so that homeroom caps hold for the whole week.

    Args:
        config: Slot configuration

    Returns:
        GenerationResult with both timetables and the validation result
    """
    constraints = ConstraintIndex(config.constraints)
    homeroom_counts: Counter = Counter()

    mwf = generate_day_group(DayGroup.MWF, config, constraints, homeroom_counts)
    tt = generate_day_group(DayGroup.TT, config, constraints, homeroom_counts)
    validation = validate_schedules(mwf, tt, config)

    logger.info(
        f"Validation: valid={validation.is_valid}, errors={len(validation.errors)}, "
        f"warnings={len(validation.warnings)}"
    )
    return GenerationResult(mwf=mwf, tt=tt, validation=validation)
