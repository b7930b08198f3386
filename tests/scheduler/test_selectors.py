"""Tests for homeroom, Korean and foreign candidate selectors."""

from collections import Counter

import pytest

from timetable_engine.config import GlobalOptions, TeacherPools
from timetable_engine.models import Day, Role, Teacher, TeacherConstraint
from timetable_engine.scheduler.constraints import ConstraintIndex
from timetable_engine.scheduler.selectors import (
    ForeignSelector,
    HomeroomSelector,
    KoreanSelector,
    RotationSelector,
    RotationState,
)

ANN = Teacher("Ann", Role.HOMEROOM)
BEA = Teacher("Bea", Role.HOMEROOM)
KIM = Teacher("Kim", Role.KOREAN)
CID = Teacher("Cid", Role.FOREIGN)
DEE = Teacher("Dee", Role.FOREIGN)


@pytest.fixture
def pools():
    return TeacherPools(homeroom_korean=[ANN, KIM, BEA], foreign=[CID, DEE])


class TestHomeroomSelector:
    """Tests for HomeroomSelector class."""

    def _selector(self, occupancy, constraints=None, fixed=None, counts=None):
        return HomeroomSelector(
            [ANN, BEA],
            fixed or {},
            occupancy,
            constraints or ConstraintIndex(),
            counts if counts is not None else Counter(),
        )

    def test_first_in_pool_order(self, occupancy):
        selector = self._selector(occupancy)
        assert selector.pick("MWF-R1C1", Day.MON, 1) == "Ann"
        assert not occupancy.can_use(Day.MON, 1, "Ann")

    def test_skips_busy_teacher(self, occupancy):
        selector = self._selector(occupancy)
        assert selector.pick("MWF-R1C1", Day.MON, 1) == "Ann"
        assert selector.pick("MWF-R1C2", Day.MON, 1) == "Bea"
        assert selector.pick("MWF-R1C3", Day.MON, 1) is None

    def test_fixed_homeroom_preferred(self, occupancy):
        selector = self._selector(occupancy, fixed={"MWF-R1C1": "Bea"})
        assert selector.pick("MWF-R1C1", Day.MON, 1) == "Bea"

    def test_fixed_homeroom_falls_back_when_unavailable(self, occupancy):
        constraints = ConstraintIndex([TeacherConstraint("Bea", unavailable=["Mon|1"])])
        selector = self._selector(occupancy, constraints, fixed={"MWF-R1C1": "Bea"})
        assert selector.pick("MWF-R1C1", Day.MON, 1) == "Ann"

    def test_homeroom_disabled_never_chosen(self, occupancy):
        constraints = ConstraintIndex([TeacherConstraint("Ann", homeroom_disabled=True)])
        selector = self._selector(occupancy, constraints, fixed={"MWF-R1C1": "Ann"})
        assert selector.pick("MWF-R1C1", Day.MON, 1) == "Bea"

    def test_capacity_respected(self, occupancy):
        constraints = ConstraintIndex([TeacherConstraint("Ann", max_homerooms=1)])
        counts = Counter()
        selector = self._selector(occupancy, constraints, counts=counts)
        assert selector.pick("MWF-R1C1", Day.MON, 1) == "Ann"
        assert selector.pick("MWF-R1C1", Day.MON, 2) == "Bea"
        assert counts == Counter({"Ann": 1, "Bea": 1})

    def test_zero_capacity_excludes_teacher(self, occupancy):
        constraints = ConstraintIndex([TeacherConstraint("Ann", max_homerooms=0)])
        selector = self._selector(occupancy, constraints)
        assert selector.pick("MWF-R1C1", Day.MON, 1) == "Bea"

    def test_failed_pick_does_not_count(self, occupancy):
        counts = Counter()
        occupancy.occupy(Day.MON, 1, "Ann")
        occupancy.occupy(Day.MON, 1, "Bea")
        selector = self._selector(occupancy, counts=counts)
        assert selector.pick("MWF-R1C1", Day.MON, 1) is None
        assert sum(counts.values()) == 0


class TestKoreanSelector:
    """Tests for KoreanSelector class."""

    def test_candidates_prefer_other_homeroom_teachers(self, pools, occupancy, no_constraints):
        selector = KoreanSelector(pools, GlobalOptions(), occupancy, no_constraints)
        names = [t.name for t in selector.candidates("Ann")]
        assert names == ["Bea", "Kim", "Ann"]

    def test_candidates_without_known_homeroom(self, pools, occupancy, no_constraints):
        selector = KoreanSelector(pools, GlobalOptions(), occupancy, no_constraints)
        names = [t.name for t in selector.candidates(None)]
        assert names == ["Kim", "Ann", "Bea"]

    def test_candidates_without_homeroom_teachers(self, pools, occupancy, no_constraints):
        options = GlobalOptions(include_h_in_k=False)
        selector = KoreanSelector(pools, options, occupancy, no_constraints)
        assert [t.name for t in selector.candidates("Ann")] == ["Kim"]

    def test_own_homeroom_excluded(self, pools, occupancy, no_constraints):
        options = GlobalOptions(disallow_own_h_as_k=True, prefer_other_h_for_k=False)
        selector = KoreanSelector(pools, options, occupancy, no_constraints)
        assert [t.name for t in selector.candidates("Ann")] == ["Kim", "Bea"]

    def test_pick_occupies_slot(self, pools, occupancy, no_constraints):
        selector = KoreanSelector(pools, GlobalOptions(), occupancy, no_constraints)
        assert selector.pick("MWF-R1C1", "Ann", Day.WED, 1) == "Bea"
        assert not occupancy.can_use(Day.WED, 1, "Bea")

    def test_pick_skips_unavailable(self, pools, occupancy):
        constraints = ConstraintIndex([TeacherConstraint("Bea", unavailable=["Wed|1"])])
        selector = KoreanSelector(pools, GlobalOptions(), occupancy, constraints)
        assert selector.pick("MWF-R1C1", "Ann", Day.WED, 1) == "Kim"

    def test_pick_returns_none_when_exhausted(self, occupancy, no_constraints):
        pools = TeacherPools(homeroom_korean=[KIM])
        occupancy.occupy(Day.WED, 1, "Kim")
        selector = KoreanSelector(pools, GlobalOptions(), occupancy, no_constraints)
        assert selector.pick("MWF-R1C1", None, Day.WED, 1) is None


class TestForeignSelector:
    """Tests for pool-order ForeignSelector."""

    def test_first_free_wins(self, occupancy, no_constraints):
        selector = ForeignSelector([CID, DEE], occupancy, no_constraints)
        assert selector.pick(Day.MON, 2) == "Cid"
        assert selector.pick(Day.MON, 4) == "Cid"
        assert selector.pick(Day.MON, 2) == "Dee"
        assert selector.pick(Day.MON, 2) is None

    def test_empty_pool(self, occupancy, no_constraints):
        selector = ForeignSelector([], occupancy, no_constraints)
        assert selector.pick(Day.MON, 2) is None


class TestRotationSelector:
    """Tests for round-robin RotationSelector."""

    def test_alternates_through_pool(self, occupancy, no_constraints):
        selector = RotationSelector([CID, DEE], occupancy, no_constraints)
        state = RotationState()
        picks = [selector.pick(Day.MON, period, state) for period in (2, 4, 6, 8)]
        assert picks == ["Cid", "Dee", "Cid", "Dee"]

    def test_skips_busy_and_advances_past_pick(self, occupancy, no_constraints):
        selector = RotationSelector([CID, DEE], occupancy, no_constraints)
        state = RotationState()
        occupancy.occupy(Day.MON, 2, "Cid")
        assert selector.pick(Day.MON, 2, state) == "Dee"
        assert state.cursor == 0
        assert selector.pick(Day.MON, 4, state) == "Cid"
        assert state.cursor == 1

    def test_respects_constraints(self, occupancy):
        constraints = ConstraintIndex([TeacherConstraint("Cid", unavailable=["Mon|2"])])
        selector = RotationSelector([CID, DEE], occupancy, constraints)
        assert selector.pick(Day.MON, 2, RotationState()) == "Dee"

    def test_exhausted_pool_leaves_cursor(self, occupancy, no_constraints):
        selector = RotationSelector([CID, DEE], occupancy, no_constraints)
        state = RotationState(cursor=1)
        occupancy.occupy(Day.MON, 2, "Cid")
        occupancy.occupy(Day.MON, 2, "Dee")
        assert selector.pick(Day.MON, 2, state) is None
        assert state.cursor == 1

    def test_without_state_uses_pool_order(self, occupancy, no_constraints):
        selector = RotationSelector([CID, DEE], occupancy, no_constraints)
        assert selector.pick(Day.MON, 2) == "Cid"
        assert selector.pick(Day.MON, 4) == "Cid"

    def test_separate_states_do_not_interfere(self, occupancy, no_constraints):
        selector = RotationSelector([CID, DEE], occupancy, no_constraints)
        first, second = RotationState(), RotationState()
        assert selector.pick(Day.MON, 2, first) == "Cid"
        assert selector.pick(Day.WED, 2, second) == "Cid"
