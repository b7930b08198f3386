"""Tests for timetable generation."""

from collections import Counter

import pytest

from timetable_engine.exceptions import ConstraintTokenError
from timetable_engine.models import Day, DayGroup, Role
from timetable_engine.scheduler.constraints import ConstraintIndex
from timetable_engine.scheduler.engine import (
    generate_day_group,
    generate_mwf,
    generate_schedules,
    generate_tt,
)
from timetable_engine.scheduler.rounds import RoundGenerator


def _cells(result, day):
    """Map period -> [(class_id, role, teacher)] for one day."""
    return {
        period: [(a.class_id, a.role.value, a.teacher) for a in assignments]
        for period, assignments in result.days[day].periods.items()
        if assignments
    }


def _homeroom_counts(*results):
    return Counter(
        a.teacher for r in results for _, a in r.iter_assignments() if a.role is Role.HOMEROOM
    )


class TestWorkedExample:
    """One MWF round-1 class with pools [Ann, Bea] / [Cid, Dee]."""

    def test_monday(self, worked_example_config):
        mwf = generate_mwf(worked_example_config)
        assert _cells(mwf, Day.MON) == {
            1: [("MWF-R1C1", "H", "Ann")],
            2: [("MWF-R1C1", "F", "Cid")],
        }

    def test_wednesday_korean_is_other_homeroom_teacher(self, worked_example_config):
        mwf = generate_mwf(worked_example_config)
        assert _cells(mwf, Day.WED) == {
            1: [("MWF-R1C1", "K", "Bea")],
            2: [("MWF-R1C1", "F", "Cid")],
        }

    def test_friday(self, worked_example_config):
        mwf = generate_mwf(worked_example_config)
        assert _cells(mwf, Day.FRI) == {
            1: [("MWF-R1C1", "K", "Bea")],
            2: [("MWF-R1C1", "H", "Ann")],
        }

    def test_assignment_times_and_rounds(self, worked_example_config):
        mwf = generate_mwf(worked_example_config)
        for _, a in mwf.iter_assignments():
            assert a.round == 1
            assert a.time == DayGroup.MWF.period_times[a.period]
            assert not a.is_exam

    def test_round1_has_no_word_test(self, worked_example_config):
        mwf = generate_mwf(worked_example_config)
        assert list(mwf.iter_word_tests()) == []

    def test_tt_is_empty(self, worked_example_config):
        tt = generate_tt(worked_example_config)
        assert tt.total_assignments == 0
        assert set(tt.days) == {Day.TUE, Day.THU}
        assert all(
            sorted(schedule.periods) == DayGroup.TT.periods for schedule in tt.days.values()
        )

    def test_korean_in_monday_period2(self, make_config):
        config = make_config(mwf={1: 1}, mwf_round1_period2="K")
        mwf = generate_mwf(config)
        assert _cells(mwf, Day.MON)[2] == [("MWF-R1C1", "K", "Bea")]


class TestTwoDayGroup:
    """Tests for TT generation and its word test."""

    def test_round1_layout_and_word_test(self, make_config):
        tt = generate_tt(make_config(tt={1: 1}))
        for day in (Day.TUE, Day.THU):
            assert _cells(tt, day) == {
                1: [("TT-R1C1", "H", "Ann")],
                2: [("TT-R1C1", "K", "Bea")],
                3: [("TT-R1C1", "F", "Cid")],
            }
            (exam,) = tt.days[day].word_tests
            assert exam.teacher == "Ann"
            assert exam.time == "17:50–18:10"
            assert exam.round == 1

    def test_round2_has_no_foreign_or_word_test(self, make_config):
        tt = generate_tt(make_config(tt={2: 1}))
        roles = [a.role for _, a in tt.iter_assignments()]
        assert Role.FOREIGN not in roles
        assert list(tt.iter_word_tests()) == []

    def test_exam_blocked_teacher_skips_word_test(self, make_config):
        config = make_config(
            tt={1: 1},
            constraints=[{"teacherName": "Ann", "unavailable": ["Tue|WT"]}],
        )
        tt = generate_tt(config)
        assert tt.days[Day.TUE].word_tests == []
        assert [w.teacher for w in tt.days[Day.THU].word_tests] == ["Ann"]
        # Word-test blocks leave regular periods alone
        assert _cells(tt, Day.TUE)[1] == [("TT-R1C1", "H", "Ann")]


class TestGenerationProperties:
    """Properties that hold for every generated timetable."""

    def test_no_double_booking(self, busy_config):
        result = generate_schedules(busy_config)
        for schedule in (result.mwf, result.tt):
            for day, day_schedule in schedule.days.items():
                for period, assignments in day_schedule.periods.items():
                    teachers = [a.teacher for a in assignments]
                    assert len(teachers) == len(set(teachers)), (day, period)

    def test_generated_result_has_no_errors(self, busy_config):
        result = generate_schedules(busy_config)
        assert result.validation.is_valid
        assert result.validation.errors == []

    def test_deterministic(self, busy_config):
        first = generate_schedules(busy_config)
        second = generate_schedules(busy_config)
        assert first.mwf.to_dict() == second.mwf.to_dict()
        assert first.tt.to_dict() == second.tt.to_dict()
        assert first.validation == second.validation

    def test_pool_order_changes_result(self, make_config):
        forward = generate_mwf(make_config(mwf={1: 1}))
        reverse = generate_mwf(make_config(homeroom_korean=["Bea", "Ann"], mwf={1: 1}))
        assert _cells(forward, Day.MON)[1] == [("MWF-R1C1", "H", "Ann")]
        assert _cells(reverse, Day.MON)[1] == [("MWF-R1C1", "H", "Bea")]

    def test_unavailable_periods_respected(self, make_config):
        blocked = ["Mon|1", "Wed|1", "Fri|2", "Tue|1", "Thu|2"]
        config = make_config(
            mwf={1: 2, 2: 1},
            tt={1: 1, 2: 1},
            constraints=[{"teacherName": "Ann", "unavailable": blocked}],
        )
        result = generate_schedules(config)
        for schedule in (result.mwf, result.tt):
            for day, a in schedule.iter_assignments():
                if a.teacher == "Ann":
                    assert f"{day.value}|{a.period}" not in blocked

    def test_homeroom_disabled_teacher_still_teaches_korean(self, make_config):
        config = make_config(
            mwf={1: 1},
            constraints=[{"teacherName": "Ann", "homeroomDisabled": True}],
        )
        mwf = generate_mwf(config)
        roles = {a.role for _, a in mwf.iter_assignments() if a.teacher == "Ann"}
        assert Role.HOMEROOM not in roles
        assert Role.KOREAN in roles

    def test_homeroom_cap_holds_across_day_groups(self, make_config):
        config = make_config(
            mwf={1: 1},
            tt={1: 1},
            constraints=[{"teacherName": "Ann", "maxHomerooms": 1}],
        )
        result = generate_schedules(config)
        counts = _homeroom_counts(result.mwf, result.tt)
        assert counts["Ann"] == 1
        assert counts["Bea"] == 3

    def test_fixed_homeroom_preferred(self, make_config):
        config = make_config(mwf={1: 1}, fixed_homerooms={"MWF-R1C1": "Bea"})
        mwf = generate_mwf(config)
        assert _cells(mwf, Day.MON)[1] == [("MWF-R1C1", "H", "Bea")]
        # Own homeroom is Bea, so the Korean slot goes to Ann
        assert _cells(mwf, Day.WED)[1] == [("MWF-R1C1", "K", "Ann")]

    def test_fixed_homeroom_for_missing_class_ignored(self, make_config):
        config = make_config(mwf={1: 1}, fixed_homerooms={"MWF-R9C1": "Bea"})
        mwf = generate_mwf(config)
        assert _cells(mwf, Day.MON)[1] == [("MWF-R1C1", "H", "Ann")]

    def test_word_test_run_by_that_days_homeroom_teacher(self, busy_config):
        tt = generate_tt(busy_config)
        for day, exam in tt.iter_word_tests():
            homerooms = [
                a.teacher
                for a in tt.days[day].periods[1]
                if a.class_id == exam.class_id and a.role is Role.HOMEROOM
            ]
            assert homerooms == [exam.teacher]

    def test_word_tests_do_not_occupy_periods(self, busy_config):
        result = generate_schedules(busy_config)
        for _, a in result.mwf.iter_assignments():
            assert a.period in DayGroup.MWF.period_times
        for _, exam in result.mwf.iter_word_tests():
            assert exam.time not in DayGroup.MWF.period_times.values()

    def test_malformed_constraint_token_raises(self, make_config):
        config = make_config(
            mwf={1: 1},
            constraints=[{"teacherName": "Ann", "unavailable": ["Mon-1"]}],
        )
        with pytest.raises(ConstraintTokenError):
            generate_schedules(config)


class TestForeignShortage:
    """Tests for foreign-teacher shortage handling."""

    def test_unfilled_without_fallback(self, make_config):
        mwf = generate_mwf(make_config(foreign=[], mwf={1: 1}))
        assert 2 not in _cells(mwf, Day.MON)

    def test_fallback_to_korean(self, make_config):
        config = make_config(foreign=[], mwf={1: 1}, allow_foreign_fallback_to_k=True)
        mwf = generate_mwf(config)
        assert _cells(mwf, Day.MON)[2] == [("MWF-R1C1", "K", "Bea")]

    def test_target_per_round_caps_foreign(self, make_config):
        config = make_config(mwf={1: 2}, target_foreign_per_round=1)
        mwf = generate_mwf(config)
        assert _cells(mwf, Day.MON)[2] == [("MWF-R1C1", "F", "Cid")]

    def test_target_with_fallback(self, make_config):
        config = make_config(
            mwf={1: 2}, target_foreign_per_round=1, allow_foreign_fallback_to_k=True
        )
        mwf = generate_mwf(config)
        assert _cells(mwf, Day.MON)[2] == [
            ("MWF-R1C1", "F", "Cid"),
            ("MWF-R1C2", "K", "Ann"),
        ]

    def test_rotation_spreads_foreign_teachers(self, make_config):
        mwf = generate_mwf(make_config(mwf={1: 1, 2: 1, 3: 1}))
        foreign = [a.teacher for day, a in mwf.iter_assignments() if day is Day.MON and a.role is Role.FOREIGN]
        assert foreign == ["Cid", "Dee", "Cid"]

    def test_pool_order_reuses_first_teacher(self, make_config):
        config = make_config(mwf={1: 1, 2: 1, 3: 1}, foreign_selection="pool_order")
        mwf = generate_mwf(config)
        foreign = [a.teacher for day, a in mwf.iter_assignments() if day is Day.MON and a.role is Role.FOREIGN]
        assert foreign == ["Cid", "Cid", "Cid"]


class TestRoundGenerator:
    """Tests for RoundGenerator state."""

    def test_resolved_homerooms_recorded(self, worked_example_config):
        generator = RoundGenerator(
            DayGroup.MWF, worked_example_config, ConstraintIndex(worked_example_config.constraints)
        )
        generator.generate()
        assert generator.resolved_homerooms == {"MWF-R1C1": "Ann"}

    def test_shared_homeroom_counter(self, worked_example_config):
        counts = Counter()
        generate_day_group(DayGroup.MWF, worked_example_config, homeroom_counts=counts)
        assert counts == Counter({"Ann": 2})

    def test_empty_configuration(self, make_config):
        result = generate_schedules(make_config())
        assert result.mwf.total_assignments == 0
        assert result.tt.total_assignments == 0
        assert result.validation.is_valid


class TestWordTestClashes:
    """A teacher never runs two word tests at the same time."""

    def test_remembered_homeroom_already_testing_is_skipped(self, make_config):
        config = make_config(
            mwf={2: 2},
            constraints=[{"teacherName": "Ann", "unavailable": ["Fri|3"]}],
        )
        mwf = generate_schedules(config).mwf
        friday = [(w.class_id, w.teacher) for w in mwf.days[Day.FRI].word_tests]
        assert friday == [("MWF-R2C1", "Bea")]

    def test_no_simultaneous_word_tests(self, make_config, busy_config):
        configs = [
            busy_config,
            make_config(
                mwf={2: 2},
                constraints=[{"teacherName": "Ann", "unavailable": ["Fri|3"]}],
            ),
        ]
        for config in configs:
            result = generate_schedules(config)
            for schedule in (result.mwf, result.tt):
                clash = Counter(
                    (day, exam.teacher, exam.time) for day, exam in schedule.iter_word_tests()
                )
                assert not clash or max(clash.values()) == 1
            assert not any("word tests at" in w for w in result.validation.warnings)
