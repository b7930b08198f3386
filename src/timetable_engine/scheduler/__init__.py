"""Deterministic timetable generation for the MWF and TT day-groups.

The generator walks days, rounds, classes and periods in a fixed order and
fills each cell from a role layout table. Selectors consult an occupancy
tracker and a per-teacher constraint index; nothing is ever undone.

Main entry points:
- generate_schedules: Build and validate both timetables
- generate_mwf / generate_tt: Build one day-group on its own
- validate_schedules: Re-check any pair of schedules

Usage:
    from timetable_engine.config import load_slot_config
    from timetable_engine.scheduler import generate_schedules

    config = load_slot_config("slot.json")
    result = generate_schedules(config)
"""

from .constraints import ConstraintIndex, parse_unavailable_token
from .engine import generate_day_group, generate_mwf, generate_schedules, generate_tt
from .exams import WordTestScheduler
from .metrics import (
    assignments_frame,
    fill_rate,
    round_statistics,
    teacher_consistency,
    teacher_workload,
)
from .occupancy import OccupancyTracker
from .policies import POLICY_TABLE, required_cells, round_layout, word_test_time
from .rounds import RoundGenerator
from .selectors import (
    ForeignSelector,
    HomeroomSelector,
    KoreanSelector,
    RotationSelector,
    RotationState,
)
from .validator import validate_schedules

__all__ = [
    # Generation
    "generate_schedules",
    "generate_mwf",
    "generate_tt",
    "generate_day_group",
    "RoundGenerator",
    # Building blocks
    "OccupancyTracker",
    "ConstraintIndex",
    "parse_unavailable_token",
    "HomeroomSelector",
    "KoreanSelector",
    "ForeignSelector",
    "RotationSelector",
    "RotationState",
    "WordTestScheduler",
    # Policies
    "POLICY_TABLE",
    "round_layout",
    "required_cells",
    "word_test_time",
    # Validation and metrics
    "validate_schedules",
    "assignments_frame",
    "teacher_workload",
    "teacher_consistency",
    "round_statistics",
    "fill_rate",
]
