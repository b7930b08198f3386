"""Slot configuration loader."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..exceptions import ConfigError
from ..models import TeacherConstraint
from .options import GlobalOptions
from .teachers import TeacherPools

logger = logging.getLogger(__name__)


@dataclass
class SlotConfig:
    """Complete input for one generation call.

    Attributes:
        id: Identifier of the slot configuration
        name: Display name
        pools: Homeroom/Korean and foreign teacher pools
        constraints: Per-teacher constraint records
        fixed_homerooms: class_id -> pinned homeroom teacher name
        options: Global generation options
        description: Free-form description
    """

    id: str = ""
    name: str = ""
    pools: TeacherPools = field(default_factory=TeacherPools)
    constraints: list[TeacherConstraint] = field(default_factory=list)
    fixed_homerooms: dict[str, str] = field(default_factory=dict)
    options: GlobalOptions = field(default_factory=GlobalOptions)
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SlotConfig":
        """Create a slot configuration from a mapping.

        Both the flat layout and the legacy layout that nests everything under
        a 'slot' key are accepted, with snake_case or camelCase keys.
        """
        if not isinstance(data, dict):
            raise ConfigError("Slot configuration must be a JSON object")

        body = data.get("slot", data)
        if not isinstance(body, dict):
            raise ConfigError("must be an object", field="slot")

        raw_constraints = body.get("constraints", [])
        if isinstance(raw_constraints, dict):
            # Legacy files key constraint records by teacher name
            raw_constraints = [
                {"teacherName": name, **record} for name, record in raw_constraints.items()
            ]
        if not isinstance(raw_constraints, list):
            raise ConfigError("must be a list", field="constraints")

        fixed = body.get("fixed_homerooms", body.get("fixedHomerooms")) or {}
        if not isinstance(fixed, dict):
            raise ConfigError("must be a mapping of class id to teacher", field="fixed_homerooms")

        pools = TeacherPools.from_dict(body.get("teachers", body.get("pools")))
        config = cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            pools=pools,
            constraints=[TeacherConstraint.from_dict(c) for c in raw_constraints],
            fixed_homerooms={str(k): str(v) for k, v in fixed.items()},
            options=GlobalOptions.from_dict(body.get("options", body.get("globalOptions"))),
        )

        known = set(pools.names)
        for class_id, teacher in config.fixed_homerooms.items():
            if teacher not in known:
                logger.warning(f"Fixed homeroom for {class_id} names unknown teacher '{teacher}'")

        return config

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "teachers": self.pools.to_dict(),
            "constraints": [c.to_dict() for c in self.constraints],
            "fixed_homerooms": dict(self.fixed_homerooms),
            "options": self.options.to_dict(),
        }


def load_slot_config(path: Path | str) -> SlotConfig:
    """Load a slot configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed SlotConfig

    Raises:
        ConfigError: If the file is missing, not valid JSON, or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"File not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}") from e

    return SlotConfig.from_dict(data)
