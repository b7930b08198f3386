"""Data models for the timetable assignment engine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterator

from .constants import (
    DAY_ALIASES,
    MWF_PERIOD_TIMES,
    MWF_ROUND_PERIODS,
    MWF_WORD_TEST_TIMES,
    TT_PERIOD_TIMES,
    TT_ROUND_PERIODS,
    TT_WORD_TEST_TIMES,
    WORD_TEST_LABEL,
)
from .exceptions import ConfigError


class Role(str, Enum):
    """Teaching role within a period."""

    HOMEROOM = "H"
    KOREAN = "K"
    FOREIGN = "F"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Parse a role code ('H', 'K', 'F'), case-insensitive."""
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ConfigError(f"Unknown role '{value}'", field="role") from None


class Day(str, Enum):
    """Teaching days of the week."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"

    @classmethod
    def parse(cls, value: "str | Day") -> "Day":
        """Parse a day name.

        Accepts short and full English names in any case, and the Korean
        weekday characters used by legacy data files.
        """
        if isinstance(value, Day):
            return value
        canonical = DAY_ALIASES.get(str(value).strip().lower())
        if canonical is None:
            raise ConfigError(f"Unknown day '{value}'", field="day")
        return cls(canonical)


class DayGroup(str, Enum):
    """The two independent weekly patterns."""

    MWF = "MWF"
    TT = "TT"

    @property
    def days(self) -> list[Day]:
        """Days of this group in fixed weekday order."""
        if self is DayGroup.MWF:
            return [Day.MON, Day.WED, Day.FRI]
        return [Day.TUE, Day.THU]

    @property
    def period_times(self) -> dict[int, str]:
        return MWF_PERIOD_TIMES if self is DayGroup.MWF else TT_PERIOD_TIMES

    @property
    def periods(self) -> list[int]:
        return sorted(self.period_times)

    @property
    def round_periods(self) -> dict[int, tuple[int, ...]]:
        return MWF_ROUND_PERIODS if self is DayGroup.MWF else TT_ROUND_PERIODS

    @property
    def rounds(self) -> list[int]:
        return sorted(self.round_periods)

    @property
    def word_test_times(self) -> dict[int, str]:
        """Word-test clock time per round; rounds without a test are absent."""
        return MWF_WORD_TEST_TIMES if self is DayGroup.MWF else TT_WORD_TEST_TIMES

    @property
    def config_key(self) -> str:
        """Key used for this group in round class counts."""
        return self.value.lower()

    def class_id(self, round_number: int, index: int) -> str:
        """Build the synthetic class id, e.g. 'MWF-R1C1'."""
        return f"{self.value}-R{round_number}C{index}"


@dataclass(frozen=True)
class Teacher:
    """A member of one of the two teacher pools."""

    name: str
    role: Role
    id: str = ""

    @classmethod
    def from_dict(cls, data: "dict[str, Any] | str", default_role: Role) -> "Teacher":
        """Create a Teacher from a '{name, role}' mapping or a bare name."""
        if isinstance(data, str):
            return cls(name=data.strip(), role=default_role, id=data.strip())
        name = str(data.get("name", "")).strip()
        if not name:
            raise ConfigError("Teacher entry without a name", field="teachers")
        role = Role.parse(data["role"]) if data.get("role") else default_role
        return cls(name=name, role=role, id=str(data.get("id", name)))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "role": self.role.value}


@dataclass
class TeacherConstraint:
    """Per-teacher restrictions.

    Attributes:
        teacher_name: Display name of the constrained teacher
        homeroom_disabled: Teacher may never take homeroom duty
        max_homerooms: Ceiling on homeroom assignments in one generation call
        unavailable: Raw 'day|period' or 'day|WT' tokens
    """

    teacher_name: str
    homeroom_disabled: bool = False
    max_homerooms: int | None = None
    unavailable: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TeacherConstraint":
        """Create a constraint from snake_case or legacy camelCase keys."""
        name = data.get("teacher_name", data.get("teacherName", ""))
        if not name:
            raise ConfigError("Constraint without a teacher name", field="constraints")

        max_homerooms = data.get("max_homerooms", data.get("maxHomerooms"))
        if max_homerooms is not None:
            if isinstance(max_homerooms, bool) or not isinstance(max_homerooms, int):
                raise ConfigError(
                    f"maxHomerooms for '{name}' must be an integer, got {max_homerooms!r}",
                    field="constraints",
                )
            if max_homerooms < 0:
                raise ConfigError(
                    f"maxHomerooms for '{name}' must not be negative",
                    field="constraints",
                )

        unavailable = data.get("unavailable", [])
        if isinstance(unavailable, str) or not isinstance(unavailable, (list, tuple, set)):
            raise ConfigError(
                f"unavailable for '{name}' must be a list of tokens",
                field="constraints",
            )

        return cls(
            teacher_name=str(name).strip(),
            homeroom_disabled=bool(
                data.get("homeroom_disabled", data.get("homeroomDisabled", False))
            ),
            max_homerooms=max_homerooms,
            unavailable=[str(token) for token in unavailable],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "teacher_name": self.teacher_name,
            "homeroom_disabled": self.homeroom_disabled,
            "max_homerooms": self.max_homerooms,
            "unavailable": list(self.unavailable),
        }


@dataclass
class Assignment:
    """One teaching event in a (day, period) cell."""

    teacher: str
    role: Role
    class_id: str
    round: int
    period: int
    time: str
    is_exam: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Assignment":
        return cls(
            teacher=data["teacher"],
            role=Role.parse(data["role"]),
            class_id=data.get("class_id", data.get("classId", "")),
            round=int(data["round"]),
            period=int(data["period"]),
            time=data.get("time", ""),
            is_exam=bool(data.get("is_exam", data.get("isExam", False))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "teacher": self.teacher,
            "role": self.role.value,
            "class_id": self.class_id,
            "round": self.round,
            "period": self.period,
            "time": self.time,
            "is_exam": self.is_exam,
        }


@dataclass
class ExamAssignment:
    """A word test run by the class's homeroom teacher outside regular periods."""

    class_id: str
    teacher: str
    time: str
    round: int
    role: Role = Role.HOMEROOM
    label: str = WORD_TEST_LABEL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExamAssignment":
        return cls(
            class_id=data.get("class_id", data.get("classId", "")),
            teacher=data["teacher"],
            time=data.get("time", ""),
            round=int(data.get("round", 0)),
            role=Role.parse(data.get("role", "H")),
            label=data.get("label", WORD_TEST_LABEL),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class_id": self.class_id,
            "teacher": self.teacher,
            "role": self.role.value,
            "label": self.label,
            "time": self.time,
            "round": self.round,
        }


@dataclass
class DaySchedule:
    """All assignments and word tests for one day."""

    periods: dict[int, list[Assignment]] = field(default_factory=dict)
    word_tests: list[ExamAssignment] = field(default_factory=list)

    @classmethod
    def empty(cls, periods: list[int]) -> "DaySchedule":
        return cls(periods={p: [] for p in periods})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DaySchedule":
        periods = {
            int(period): [Assignment.from_dict(a) for a in assignments]
            for period, assignments in data.get("periods", {}).items()
        }
        word_tests = [
            ExamAssignment.from_dict(w)
            for w in data.get("word_tests", data.get("wordTests", []))
        ]
        return cls(periods=periods, word_tests=word_tests)

    def to_dict(self) -> dict[str, Any]:
        return {
            "periods": {
                str(period): [a.to_dict() for a in assignments]
                for period, assignments in sorted(self.periods.items())
            },
            "word_tests": [w.to_dict() for w in self.word_tests],
        }


@dataclass
class ScheduleResult:
    """Generated timetable for one day-group."""

    day_group: DayGroup
    days: dict[Day, DaySchedule] = field(default_factory=dict)

    @classmethod
    def empty(cls, day_group: DayGroup) -> "ScheduleResult":
        """Build a grid with every day and period present and empty."""
        return cls(
            day_group=day_group,
            days={day: DaySchedule.empty(day_group.periods) for day in day_group.days},
        )

    def add(self, day: Day, assignment: Assignment) -> None:
        self.days[day].periods.setdefault(assignment.period, []).append(assignment)

    def add_word_test(self, day: Day, exam: ExamAssignment) -> None:
        self.days[day].word_tests.append(exam)

    def iter_assignments(self) -> Iterator[tuple[Day, Assignment]]:
        """Yield (day, assignment) in day, period, insertion order."""
        for day, schedule in self.days.items():
            for period in sorted(schedule.periods):
                for assignment in schedule.periods[period]:
                    yield day, assignment

    def iter_word_tests(self) -> Iterator[tuple[Day, ExamAssignment]]:
        for day, schedule in self.days.items():
            for exam in schedule.word_tests:
                yield day, exam

    @property
    def total_assignments(self) -> int:
        return sum(1 for _ in self.iter_assignments())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleResult":
        """Rebuild a result; missing days stay missing so validation can see them."""
        return cls(
            day_group=DayGroup(data["day_group"]),
            days={
                Day.parse(day): DaySchedule.from_dict(schedule)
                for day, schedule in data.get("days", {}).items()
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day_group": self.day_group.value,
            "days": {day.value: schedule.to_dict() for day, schedule in self.days.items()},
        }


@dataclass
class ValidationResult:
    """Diagnostics computed from a completed pair of schedules."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationResult":
        return cls(
            is_valid=bool(data.get("is_valid", True)),
            errors=list(data.get("errors", [])),
            warnings=list(data.get("warnings", [])),
            infos=list(data.get("infos", [])),
            metrics=dict(data.get("metrics", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "infos": self.infos,
            "metrics": self.metrics,
        }


@dataclass
class GenerationResult:
    """Output of one generation call: both timetables plus diagnostics."""

    mwf: ScheduleResult
    tt: ScheduleResult
    validation: ValidationResult
    generated_at: str = field(
        default_factory=lambda: datetime.now().isoformat(), compare=False
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationResult":
        return cls(
            mwf=ScheduleResult.from_dict(data["mwf"]),
            tt=ScheduleResult.from_dict(data["tt"]),
            validation=ValidationResult.from_dict(data.get("validation", {})),
            generated_at=data.get("generated_at", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "mwf": self.mwf.to_dict(),
            "tt": self.tt.to_dict(),
            "validation": self.validation.to_dict(),
        }
