"""Teacher pool configuration."""

from dataclasses import dataclass, field
from typing import Any

from ..exceptions import ConfigError
from ..models import Role, Teacher


@dataclass
class TeacherPools:
    """The two ordered teacher pools.

    Pool order is significant: selectors scan pools front to back, so the
    same order always yields the same timetable.
    """

    homeroom_korean: list[Teacher] = field(default_factory=list)
    foreign: list[Teacher] = field(default_factory=list)

    def __post_init__(self) -> None:
        for teacher in self.homeroom_korean:
            if teacher.role not in (Role.HOMEROOM, Role.KOREAN):
                raise ConfigError(
                    f"'{teacher.name}' has role {teacher.role.value} in the homeroom/Korean pool",
                    field="teachers",
                )
        for teacher in self.foreign:
            if teacher.role is not Role.FOREIGN:
                raise ConfigError(
                    f"'{teacher.name}' has role {teacher.role.value} in the foreign pool",
                    field="teachers",
                )

        seen: set[str] = set()
        for teacher in self.homeroom_korean + self.foreign:
            if teacher.name in seen:
                raise ConfigError(f"Duplicate teacher name '{teacher.name}'", field="teachers")
            seen.add(teacher.name)

    @property
    def homeroom(self) -> list[Teacher]:
        """Homeroom-role members, in pool order."""
        return [t for t in self.homeroom_korean if t.role is Role.HOMEROOM]

    @property
    def korean(self) -> list[Teacher]:
        """Dedicated Korean-role members, in pool order."""
        return [t for t in self.homeroom_korean if t.role is Role.KOREAN]

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.homeroom_korean + self.foreign]

    def role_of(self, name: str) -> Role | None:
        for teacher in self.homeroom_korean + self.foreign:
            if teacher.name == name:
                return teacher.role
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "TeacherPools":
        """Create pools from snake_case or legacy camelCase keys.

        Entries may be '{name, role}' objects or bare names. Bare names in the
        homeroom/Korean pool default to the homeroom role.
        """
        data = data or {}
        hk_raw = data.get("homeroom_korean", data.get("homeroomKoreanPool", []))
        f_raw = data.get("foreign", data.get("foreignPool", []))
        if not isinstance(hk_raw, list) or not isinstance(f_raw, list):
            raise ConfigError("Teacher pools must be lists", field="teachers")

        return cls(
            homeroom_korean=[Teacher.from_dict(entry, Role.HOMEROOM) for entry in hk_raw],
            foreign=[Teacher.from_dict(entry, Role.FOREIGN) for entry in f_raw],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "homeroom_korean": [t.to_dict() for t in self.homeroom_korean],
            "foreign": [t.to_dict() for t in self.foreign],
        }
