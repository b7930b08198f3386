"""Post-hoc validation of generated timetables.

Findings are split into three levels:
- errors: structural breakage (missing days, stray periods, double-booking);
  any error makes the result invalid
- warnings: soft issues worth surfacing (unfilled slots, constraint
  violations, clashing word tests)
- infos: non-blocking observations (consistency score, fill rate, round
  statistics, foreign shortages unless strict)

The validator works on any pair of schedules, including ones loaded from
disk or edited by hand, so it re-checks everything the generator promises.
"""

import logging
from collections import Counter, defaultdict

from ..config import SlotConfig
from ..constants import time_ranges_overlap
from ..models import DayGroup, Role, ScheduleResult, ValidationResult
from .constraints import ConstraintIndex
from .metrics import fill_rate, round_statistics, teacher_consistency
from .policies import required_cells

logger = logging.getLogger(__name__)


def _check_structure(result: ScheduleResult, expected: DayGroup, report: ValidationResult) -> bool:
    """Record structural errors; return True if the grid is usable."""
    if result.day_group is not expected:
        report.errors.append(
            f"Expected a {expected.value} schedule, got {result.day_group.value}"
        )
        return False

    group = expected
    for day in group.days:
        if day not in result.days:
            report.errors.append(f"{group.value}: day {day.value} is missing")

    for day, schedule in result.days.items():
        if day not in group.days:
            report.errors.append(f"{group.value}: unexpected day {day.value}")
        for period, assignments in schedule.periods.items():
            if period not in group.period_times:
                report.errors.append(
                    f"{group.value} {day.value}: period {period} is outside 1-{max(group.periods)}"
                )
            for a in assignments:
                if a.period != period:
                    report.errors.append(
                        f"{group.value} {day.value}: {a.class_id} assignment says period "
                        f"{a.period} but sits in period {period}"
                    )
    return True


def _check_double_booking(result: ScheduleResult, report: ValidationResult) -> None:
    group = result.day_group.value
    for day, schedule in result.days.items():
        for period in sorted(schedule.periods):
            counts = Counter(a.teacher for a in schedule.periods[period])
            for teacher, count in counts.items():
                if count > 1:
                    report.errors.append(
                        f"{group} {day.value} period {period}: {teacher} is double-booked "
                        f"({count} assignments)"
                    )


def _check_word_tests(result: ScheduleResult, report: ValidationResult) -> None:
    group = result.day_group
    for day, schedule in result.days.items():
        by_teacher_time: Counter = Counter()
        for exam in schedule.word_tests:
            by_teacher_time[(exam.teacher, exam.time)] += 1
            for period, period_time in group.period_times.items():
                if time_ranges_overlap(exam.time, period_time):
                    report.warnings.append(
                        f"{group.value} {day.value}: word test for {exam.class_id} at "
                        f"{exam.time} overlaps period {period}"
                    )
        for (teacher, time), count in sorted(by_teacher_time.items()):
            if count > 1:
                report.warnings.append(
                    f"{group.value} {day.value}: {teacher} runs {count} word tests at {time}"
                )


def _check_constraints(
    results: list[ScheduleResult], constraints: ConstraintIndex, report: ValidationResult
) -> None:
    homerooms: Counter = Counter()
    for result in results:
        group = result.day_group.value
        for day, a in result.iter_assignments():
            if constraints.is_unavailable(a.teacher, day, a.period):
                report.warnings.append(
                    f"{group} {day.value} period {a.period}: {a.teacher} is marked unavailable"
                )
            if a.role is Role.HOMEROOM:
                homerooms[a.teacher] += 1
                if not constraints.homeroom_allowed(a.teacher):
                    report.warnings.append(
                        f"{group} {day.value} period {a.period}: {a.teacher} has homeroom "
                        f"disabled but teaches {a.class_id} as H"
                    )
        for day, exam in result.iter_word_tests():
            if constraints.is_exam_blocked(exam.teacher, day):
                report.warnings.append(
                    f"{group} {day.value}: {exam.teacher} is exam-blocked but runs the "
                    f"word test for {exam.class_id}"
                )

    for teacher, count in sorted(homerooms.items()):
        capacity = constraints.homeroom_capacity(teacher)
        if count > capacity:
            report.warnings.append(
                f"{teacher} has {count} homeroom periods, above the limit of {int(capacity)}"
            )


def _check_required_cells(
    results: list[ScheduleResult], config: SlotConfig, report: ValidationResult
) -> None:
    for result in results:
        group = result.day_group
        cells: dict[tuple, list[Role]] = defaultdict(list)
        for day, a in result.iter_assignments():
            cells[(day, a.class_id, a.period)].append(a.role)

        foreign_required = foreign_missing = 0
        for day, _, class_id, period, role in required_cells(group, config.options):
            if day not in result.days:
                continue
            roles = cells.get((day, class_id, period), [])
            if not roles:
                report.warnings.append(
                    f"{group.value} {day.value} period {period}: {class_id} has no "
                    f"{role.value} teacher"
                )
            if role is Role.FOREIGN:
                foreign_required += 1
                if Role.FOREIGN not in roles:
                    foreign_missing += 1

        if foreign_missing:
            message = (
                f"{group.value}: {foreign_missing} of {foreign_required} foreign periods "
                f"have no foreign teacher"
            )
            if config.options.strict_foreign:
                report.warnings.append(message)
            else:
                report.infos.append(message)


def validate_schedules(
    mwf: ScheduleResult,
    tt: ScheduleResult,
    config: SlotConfig | None = None,
) -> ValidationResult:
    """Validate a pair of schedules and compute summary metrics.

    Args:
        mwf: Mon/Wed/Fri schedule
        tt: Tue/Thu schedule
        config: Slot configuration; enables constraint and fill checks

    Returns:
        ValidationResult; is_valid is False only when errors were found
    """
    report = ValidationResult()

    usable = [
        result
        for result, expected in ((mwf, DayGroup.MWF), (tt, DayGroup.TT))
        if _check_structure(result, expected, report)
    ]

    for result in usable:
        _check_double_booking(result, report)
        _check_word_tests(result, report)

    if config is not None:
        _check_constraints(usable, ConstraintIndex(config.constraints), report)
        _check_required_cells(usable, config, report)

        filled, required = fill_rate(config.options, *usable)
        rate = filled / required if required else 1.0
        report.metrics["fill_rate"] = rate
        report.metrics["filled_cells"] = filled
        report.metrics["required_cells"] = required
        report.infos.append(f"Fill rate: {filled}/{required} ({rate:.0%})")

    consistency = teacher_consistency(*usable)
    stats = round_statistics(*usable)
    report.metrics["consistency_score"] = consistency["score"]
    report.metrics["class_consistency"] = consistency["classes"]
    report.metrics["round_statistics"] = stats
    report.metrics["total_assignments"] = sum(r.total_assignments for r in usable)
    report.metrics["word_tests"] = sum(1 for r in usable for _ in r.iter_word_tests())

    report.infos.append(f"Teacher consistency score: {consistency['score']:.2f}")
    for key, counts in stats.items():
        if any(counts.values()):
            summary = ", ".join(f"{role}={n}" for role, n in counts.items())
            report.infos.append(f"{key}: {summary}")

    report.is_valid = not report.errors
    logger.debug(
        f"Validation finished: {len(report.errors)} errors, "
        f"{len(report.warnings)} warnings, {len(report.infos)} infos"
    )
    return report
