"""Role layout tables for each day-group, round and weekday.

Each entry lists the (period, role) pairs a class fills in that round on that
day, in the order the generator visits them.

Three-day group (per class, per week):
- Rounds 1-3: two homeroom, two Korean and two foreign periods
- Round 4: four homeroom and two Korean periods, no foreign period

Two-day group (same layout on Tuesday and Thursday):
- Round 1: homeroom, Korean, foreign; word test between periods 3 and 4
- Round 2: homeroom, Korean, homeroom; no foreign period
"""

from typing import Iterator

from ..config import GlobalOptions
from ..models import Day, DayGroup, Role

H, K, F = Role.HOMEROOM, Role.KOREAN, Role.FOREIGN

RoundLayout = tuple[tuple[int, Role], ...]

POLICY_TABLE: dict[tuple[DayGroup, int, Day], RoundLayout] = {
    # MWF round 1 (periods 1-2)
    (DayGroup.MWF, 1, Day.MON): ((1, H), (2, F)),
    (DayGroup.MWF, 1, Day.WED): ((1, K), (2, F)),
    (DayGroup.MWF, 1, Day.FRI): ((1, K), (2, H)),
    # MWF round 2 (periods 3-4)
    (DayGroup.MWF, 2, Day.MON): ((3, H), (4, F)),
    (DayGroup.MWF, 2, Day.WED): ((3, K), (4, F)),
    (DayGroup.MWF, 2, Day.FRI): ((3, H), (4, K)),
    # MWF round 3 (periods 5-6)
    (DayGroup.MWF, 3, Day.MON): ((5, H), (6, F)),
    (DayGroup.MWF, 3, Day.WED): ((5, K), (6, F)),
    (DayGroup.MWF, 3, Day.FRI): ((5, H), (6, K)),
    # MWF round 4 (periods 7-8)
    (DayGroup.MWF, 4, Day.MON): ((7, H), (8, K)),
    (DayGroup.MWF, 4, Day.WED): ((7, H), (8, K)),
    (DayGroup.MWF, 4, Day.FRI): ((7, H), (8, H)),
    # TT round 1 (periods 1-3)
    (DayGroup.TT, 1, Day.TUE): ((1, H), (2, K), (3, F)),
    (DayGroup.TT, 1, Day.THU): ((1, H), (2, K), (3, F)),
    # TT round 2 (periods 4-6)
    (DayGroup.TT, 2, Day.TUE): ((4, H), (5, K), (6, H)),
    (DayGroup.TT, 2, Day.THU): ((4, H), (5, K), (6, H)),
}


def round_layout(
    day_group: DayGroup,
    round_number: int,
    day: Day,
    round1_period2: Role = Role.FOREIGN,
) -> RoundLayout:
    """Get the (period, role) layout for a round on a given day.

    Args:
        day_group: Day-group being generated
        round_number: Round number within the day-group
        day: Day of the week (must belong to the day-group)
        round1_period2: Role for MWF round 1 period 2 on Monday ('F' or 'K')

    Returns:
        Ordered (period, role) pairs; empty if the combination has no layout
    """
    layout = POLICY_TABLE.get((day_group, round_number, day), ())
    if (day_group, round_number, day) == (DayGroup.MWF, 1, Day.MON):
        layout = tuple(
            (period, round1_period2 if period == 2 else role) for period, role in layout
        )
    return layout


def required_cells(
    day_group: DayGroup, options: GlobalOptions
) -> Iterator[tuple[Day, int, str, int, Role]]:
    """Yield every (day, round, class_id, period, role) the layout asks for."""
    for day in day_group.days:
        for round_number in day_group.rounds:
            layout = round_layout(day_group, round_number, day, options.mwf_round1_period2)
            for class_id in options.class_ids(day_group, round_number):
                for period, role in layout:
                    yield day, round_number, class_id, period, role


def word_test_time(day_group: DayGroup, round_number: int) -> str | None:
    """Clock time of a round's word test, or None if the round has none."""
    return day_group.word_test_times.get(round_number)
