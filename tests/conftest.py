"""Test fixtures for timetable engine tests."""

import pytest

from timetable_engine.config import SlotConfig
from timetable_engine.scheduler.constraints import ConstraintIndex
from timetable_engine.scheduler.occupancy import OccupancyTracker


def build_config(
    homeroom_korean=None,
    foreign=None,
    mwf=None,
    tt=None,
    constraints=None,
    fixed_homerooms=None,
    **options,
) -> SlotConfig:
    """Build a SlotConfig from plain values the way a JSON file would."""
    options["round_class_counts"] = {"mwf": mwf or {}, "tt": tt or {}}
    return SlotConfig.from_dict(
        {
            "id": "test-slot",
            "name": "Test slot",
            "teachers": {
                "homeroom_korean": homeroom_korean if homeroom_korean is not None else ["Ann", "Bea"],
                "foreign": foreign if foreign is not None else ["Cid", "Dee"],
            },
            "constraints": constraints or [],
            "fixed_homerooms": fixed_homerooms or {},
            "options": options,
        }
    )


@pytest.fixture
def make_config():
    """Factory fixture for slot configurations."""
    return build_config


@pytest.fixture
def worked_example_config():
    """Two H/K teachers, two foreign teachers, one MWF round-1 class."""
    return build_config(mwf={1: 1})


@pytest.fixture
def busy_config():
    """Every round populated, with fewer teachers than the grid would like."""
    return build_config(
        homeroom_korean=[
            {"name": "Ann", "role": "H"},
            {"name": "Bea", "role": "H"},
            {"name": "Cal", "role": "H"},
            {"name": "Kim", "role": "K"},
        ],
        foreign=["Cid", "Dee"],
        mwf={1: 3, 2: 3, 3: 3, 4: 3},
        tt={1: 2, 2: 2},
    )


@pytest.fixture
def occupancy():
    return OccupancyTracker()


@pytest.fixture
def no_constraints():
    return ConstraintIndex()
