"""Configuration loaders for the timetable engine."""

from .loader import SlotConfig, load_slot_config
from .options import FOREIGN_SELECTION_MODES, GlobalOptions
from .teachers import TeacherPools

__all__ = [
    "SlotConfig",
    "load_slot_config",
    "GlobalOptions",
    "FOREIGN_SELECTION_MODES",
    "TeacherPools",
]
