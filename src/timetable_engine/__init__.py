"""Timetable Engine - weekly timetables for a language school.

This module builds two independent weekly timetables from a slot
configuration: Mon/Wed/Fri (8 periods in 4 rounds) and Tue/Thu (6 periods in
2 rounds). Every class period gets a homeroom, Korean or foreign teacher,
and word tests are attached to the class's homeroom teacher.

Example usage:
    from timetable_engine import generate_schedules, load_slot_config

    config = load_slot_config("slot.json")
    result = generate_schedules(config)

    print(f"Valid: {result.validation.is_valid}")
    for day, assignment in result.mwf.iter_assignments():
        print(f"{day.value} P{assignment.period} {assignment.class_id} {assignment.teacher}")

    # Export to JSON
    from timetable_engine.exporters import export_result_json
    export_result_json(result, "timetable.json")
"""

from .config import GlobalOptions, SlotConfig, TeacherPools, load_slot_config
from .exceptions import (
    ConfigError,
    ConstraintTokenError,
    ScheduleConstructionError,
    TimetableError,
)
from .exporters import export_result_json, load_result_json
from .models import (
    Assignment,
    Day,
    DayGroup,
    DaySchedule,
    ExamAssignment,
    GenerationResult,
    Role,
    ScheduleResult,
    Teacher,
    TeacherConstraint,
    ValidationResult,
)
from .scheduler import generate_mwf, generate_schedules, generate_tt, validate_schedules

__version__ = "0.1.0"

__all__ = [
    # Generation
    "generate_schedules",
    "generate_mwf",
    "generate_tt",
    "validate_schedules",
    # Configuration
    "SlotConfig",
    "GlobalOptions",
    "TeacherPools",
    "load_slot_config",
    # Models
    "Role",
    "Day",
    "DayGroup",
    "Teacher",
    "TeacherConstraint",
    "Assignment",
    "ExamAssignment",
    "DaySchedule",
    "ScheduleResult",
    "ValidationResult",
    "GenerationResult",
    # Export
    "export_result_json",
    "load_result_json",
    # Exceptions
    "TimetableError",
    "ConfigError",
    "ConstraintTokenError",
    "ScheduleConstructionError",
]
