"""Global generation options."""

import logging
from dataclasses import dataclass, field
from typing import Any

from ..constants import LEGACY_OPTION_KEYS
from ..exceptions import ConfigError
from ..models import DayGroup, Role

logger = logging.getLogger(__name__)

FOREIGN_SELECTION_MODES = ("rotation", "pool_order")


@dataclass
class GlobalOptions:
    """Options that steer candidate selection and round layout.

    Attributes:
        include_h_in_k: Homeroom-role teachers may also be picked as Korean teachers
        prefer_other_h_for_k: Try other classes' homeroom teachers first for K
        disallow_own_h_as_k: A class's own homeroom teacher never acts as its K
        round_class_counts: {DayGroup: {round: class count}}
        mwf_round1_period2: Role placed in MWF round 1 period 2 on Monday
        foreign_selection: 'rotation' (round-robin per day) or 'pool_order'
        allow_foreign_fallback_to_k: Fill foreign periods with a K teacher on shortage
        target_foreign_per_round: Per-day cap of foreign assignments in one round
        strict_foreign: Report foreign shortages as warnings rather than infos
    """

    include_h_in_k: bool = True
    prefer_other_h_for_k: bool = True
    disallow_own_h_as_k: bool = False
    round_class_counts: dict[DayGroup, dict[int, int]] = field(default_factory=dict)
    mwf_round1_period2: Role = Role.FOREIGN
    foreign_selection: str = "rotation"
    allow_foreign_fallback_to_k: bool = False
    target_foreign_per_round: int | None = None
    strict_foreign: bool = False

    def class_count(self, day_group: DayGroup, round_number: int) -> int:
        """Number of parallel classes in a round; unspecified rounds have none."""
        return self.round_class_counts.get(day_group, {}).get(round_number, 0)

    def class_ids(self, day_group: DayGroup, round_number: int) -> list[str]:
        """Class ids for a round in generation order."""
        return [
            day_group.class_id(round_number, index)
            for index in range(1, self.class_count(day_group, round_number) + 1)
        ]

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "GlobalOptions":
        """Create options from snake_case or legacy camelCase keys."""
        data = {LEGACY_OPTION_KEYS.get(k, k): v for k, v in (data or {}).items()}

        period2 = Role.parse(data.get("mwf_round1_period2", "F"))
        if period2 not in (Role.FOREIGN, Role.KOREAN):
            raise ConfigError(
                f"must be 'F' or 'K', got '{period2.value}'", field="mwf_round1_period2"
            )

        selection = data.get("foreign_selection", "rotation")
        if selection not in FOREIGN_SELECTION_MODES:
            raise ConfigError(
                f"must be one of {', '.join(FOREIGN_SELECTION_MODES)}, got '{selection}'",
                field="foreign_selection",
            )

        target = data.get("target_foreign_per_round")
        if target is not None and (isinstance(target, bool) or not isinstance(target, int)):
            raise ConfigError(f"must be an integer, got {target!r}", field="target_foreign_per_round")
        if target is not None and target < 0:
            logger.warning(f"Negative target_foreign_per_round {target}; using 0")
            target = 0

        return cls(
            include_h_in_k=bool(data.get("include_h_in_k", True)),
            prefer_other_h_for_k=bool(data.get("prefer_other_h_for_k", True)),
            disallow_own_h_as_k=bool(data.get("disallow_own_h_as_k", False)),
            round_class_counts=_parse_round_class_counts(data.get("round_class_counts")),
            mwf_round1_period2=period2,
            foreign_selection=selection,
            allow_foreign_fallback_to_k=bool(data.get("allow_foreign_fallback_to_k", False)),
            target_foreign_per_round=target,
            strict_foreign=bool(data.get("strict_foreign", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "include_h_in_k": self.include_h_in_k,
            "prefer_other_h_for_k": self.prefer_other_h_for_k,
            "disallow_own_h_as_k": self.disallow_own_h_as_k,
            "round_class_counts": {
                group.config_key: {str(r): n for r, n in sorted(counts.items())}
                for group, counts in self.round_class_counts.items()
            },
            "mwf_round1_period2": self.mwf_round1_period2.value,
            "foreign_selection": self.foreign_selection,
            "allow_foreign_fallback_to_k": self.allow_foreign_fallback_to_k,
            "target_foreign_per_round": self.target_foreign_per_round,
            "strict_foreign": self.strict_foreign,
        }


def _parse_round_class_counts(raw: Any) -> dict[DayGroup, dict[int, int]]:
    """Parse {'mwf': {1: n, ...}, 'tt': {...}} into typed counts.

    Missing groups or rounds mean zero classes. Negative counts are clamped
    to zero. Unknown rounds and non-integer counts raise ConfigError.
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("must be a mapping of day-group to round counts", field="round_class_counts")

    counts: dict[DayGroup, dict[int, int]] = {}
    for group_key, rounds in raw.items():
        try:
            group = DayGroup(str(group_key).upper())
        except ValueError:
            raise ConfigError(f"unknown day-group '{group_key}'", field="round_class_counts") from None

        if rounds is None:
            continue
        if not isinstance(rounds, dict):
            raise ConfigError(f"{group.value} counts must be a mapping", field="round_class_counts")

        group_counts: dict[int, int] = {}
        for round_key, count in rounds.items():
            try:
                round_number = int(round_key)
            except (TypeError, ValueError):
                raise ConfigError(
                    f"{group.value} round '{round_key}' is not a number", field="round_class_counts"
                ) from None
            if round_number not in group.rounds:
                raise ConfigError(
                    f"{group.value} has no round {round_number}", field="round_class_counts"
                )
            if count is None:
                continue
            if isinstance(count, bool) or not isinstance(count, int):
                raise ConfigError(
                    f"{group.value} round {round_number} count must be an integer, got {count!r}",
                    field="round_class_counts",
                )
            if count < 0:
                logger.warning(
                    f"{group.value} round {round_number} has negative class count {count}; using 0"
                )
                count = 0
            group_counts[round_number] = count

        counts[group] = group_counts

    return counts
