"""Summary metrics for generated timetables."""

from typing import Any

import pandas as pd

from ..config import GlobalOptions
from ..models import Role, ScheduleResult
from .policies import required_cells

FRAME_COLUMNS = [
    "day_group",
    "day",
    "period",
    "round",
    "class_id",
    "role",
    "teacher",
    "time",
    "kind",
]

ROLE_NAMES = {Role.HOMEROOM.value: "homeroom", Role.KOREAN.value: "korean", Role.FOREIGN.value: "foreign"}


def assignments_frame(*results: ScheduleResult) -> pd.DataFrame:
    """Flatten schedules into one row per assignment or word test.

    Word tests have kind 'word_test', role 'WT' and period 0.
    """
    rows = []
    for result in results:
        group = result.day_group.value
        for day, a in result.iter_assignments():
            rows.append(
                {
                    "day_group": group,
                    "day": day.value,
                    "period": a.period,
                    "round": a.round,
                    "class_id": a.class_id,
                    "role": a.role.value,
                    "teacher": a.teacher,
                    "time": a.time,
                    "kind": "class",
                }
            )
        for day, exam in result.iter_word_tests():
            rows.append(
                {
                    "day_group": group,
                    "day": day.value,
                    "period": 0,
                    "round": exam.round,
                    "class_id": exam.class_id,
                    "role": exam.label,
                    "teacher": exam.teacher,
                    "time": exam.time,
                    "kind": "word_test",
                }
            )
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def teacher_workload(*results: ScheduleResult) -> pd.DataFrame:
    """Per-teacher counts of H, K, F periods and word tests, plus a total.

    The total counts regular periods only; word tests are reported
    separately since they do not occupy a period.
    """
    frame = assignments_frame(*results)
    columns = ["H", "K", "F", "WT"]
    if frame.empty:
        return pd.DataFrame(columns=columns + ["total"]).rename_axis("teacher")

    table = pd.crosstab(frame["teacher"], frame["role"]).reindex(columns=columns, fill_value=0)
    table["total"] = table[["H", "K", "F"]].sum(axis=1)
    table.columns.name = None
    return table.sort_values(["total", "H"], ascending=False, kind="stable")


def teacher_consistency(*results: ScheduleResult) -> dict[str, Any]:
    """Measure whether each class kept one teacher per role all week.

    A class is consistent when no role was taught by more than one distinct
    teacher. Roles a class never has (e.g. foreign in a late round) do not
    count against it.

    Returns:
        Dictionary with per-class details and the overall score (share of
        consistent classes; 1.0 when there are no classes)
    """
    frame = assignments_frame(*results)
    frame = frame[frame["kind"] == "class"]
    if frame.empty:
        return {"classes": {}, "score": 1.0}

    grouped = frame.groupby(["class_id", "role"], sort=True)["teacher"]
    distinct = grouped.nunique()
    first = grouped.first()

    classes: dict[str, dict[str, Any]] = {}
    for class_id, per_role in distinct.groupby(level="class_id"):
        entry: dict[str, Any] = {name: None for name in ROLE_NAMES.values()}
        for role, teacher in first.xs(class_id, level="class_id").items():
            entry[ROLE_NAMES[role]] = teacher
        entry["consistent"] = bool(per_role.max() <= 1)
        classes[class_id] = entry

    score = sum(1 for c in classes.values() if c["consistent"]) / len(classes)
    return {"classes": classes, "score": score}


def round_statistics(*results: ScheduleResult) -> dict[str, dict[str, int]]:
    """Count assignments per role for every round, keyed like 'MWF-R1'."""
    stats: dict[str, dict[str, int]] = {}
    for result in results:
        group = result.day_group
        for round_number in group.rounds:
            stats[f"{group.value}-R{round_number}"] = {r.value: 0 for r in Role}
        for _, a in result.iter_assignments():
            key = f"{group.value}-R{a.round}"
            stats.setdefault(key, {r.value: 0 for r in Role})[a.role.value] += 1
    return stats


def fill_rate(options: GlobalOptions, *results: ScheduleResult) -> tuple[int, int]:
    """Count required cells that received a teacher.

    A cell counts as filled when the class has any assignment in that
    period, including a Korean substitute in a foreign period.

    Returns:
        Tuple of (filled, required)
    """
    filled = required = 0
    for result in results:
        present = {
            (day, a.class_id, a.period) for day, a in result.iter_assignments()
        }
        for day, _, class_id, period, _ in required_cells(result.day_group, options):
            required += 1
            if (day, class_id, period) in present:
                filled += 1
    return filled, required
