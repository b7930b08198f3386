"""Constants for timetable generation."""

# Label used for word-test (exam) events
WORD_TEST_LABEL = "WT"

# Three-day group (Mon/Wed/Fri): 8 periods in 4 rounds
MWF_PERIOD_TIMES = {
    1: "14:20–15:05",
    2: "15:10–15:55",
    3: "16:15–17:00",
    4: "17:05–17:50",
    5: "18:05–18:55",
    6: "19:00–19:50",
    7: "20:15–21:05",
    8: "21:10–22:00",
}

# Word tests open rounds 2-4, in the gap before the round's first period
MWF_WORD_TEST_TIMES = {
    2: "16:00–16:15",
    3: "17:50–18:05",
    4: "20:00–20:15",
}

MWF_ROUND_PERIODS = {
    1: (1, 2),
    2: (3, 4),
    3: (5, 6),
    4: (7, 8),
}

# Two-day group (Tue/Thu): 6 periods in 2 rounds
TT_PERIOD_TIMES = {
    1: "15:20–16:05",
    2: "16:10–16:55",
    3: "17:00–17:45",
    4: "18:10–19:00",
    5: "19:05–19:55",
    6: "20:00–20:50",
}

# Round 1 word test sits between periods 3 and 4
TT_WORD_TEST_TIMES = {
    1: "17:50–18:10",
}

TT_ROUND_PERIODS = {
    1: (1, 2, 3),
    2: (4, 5, 6),
}

# Day name aliases accepted in constraint tokens and config files.
# Korean weekday characters match the legacy data format.
DAY_ALIASES = {
    "mon": "Mon",
    "monday": "Mon",
    "월": "Mon",
    "tue": "Tue",
    "tuesday": "Tue",
    "화": "Tue",
    "wed": "Wed",
    "wednesday": "Wed",
    "수": "Wed",
    "thu": "Thu",
    "thursday": "Thu",
    "목": "Thu",
    "fri": "Fri",
    "friday": "Fri",
    "금": "Fri",
}

# Option keys in the legacy camelCase format mapped to snake_case
LEGACY_OPTION_KEYS = {
    "includeHInK": "include_h_in_k",
    "preferOtherHForK": "prefer_other_h_for_k",
    "disallowOwnHAsK": "disallow_own_h_as_k",
    "roundClassCounts": "round_class_counts",
    "mwfRound1Period2": "mwf_round1_period2",
    "foreignSelection": "foreign_selection",
    "allowForeignFallbackToK": "allow_foreign_fallback_to_k",
    "targetForeignPerRound": "target_foreign_per_round",
    "strictForeign": "strict_foreign",
}


def parse_time_range(time_range: str) -> tuple[int, int] | None:
    """Parse a 'HH:MM–HH:MM' range into minutes since midnight.

    Accepts both en dash and hyphen separators.

    Returns:
        Tuple of (start_minutes, end_minutes), or None if unparseable
    """
    normalized = time_range.replace("–", "-").strip()
    parts = normalized.split("-")
    if len(parts) != 2:
        return None

    minutes = []
    for part in parts:
        hours, _, mins = part.strip().partition(":")
        if not hours.isdigit() or not mins.isdigit():
            return None
        minutes.append(int(hours) * 60 + int(mins))

    return minutes[0], minutes[1]


def time_ranges_overlap(first: str, second: str) -> bool:
    """Check whether two time ranges share any minute.

    Touching ranges ('16:00–16:15' and '16:15–17:00') do not overlap.
    """
    a = parse_time_range(first)
    b = parse_time_range(second)
    if a is None or b is None:
        return False
    return a[0] < b[1] and b[0] < a[1]
