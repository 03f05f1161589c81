"""
Typed data structures for the application resource domain.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, asdict, field, fields
from typing import Any


class ApplicationType(str, enum.Enum):
    HOSTED_ON_DESKTOP = "HostedOnDesktop"
    INSTALLED_ON_CLIENT = "InstalledOnClient"


class Ensure(str, enum.Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


class _Unset(enum.Enum):
    """Marker for a parameter the caller did not supply."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET


def is_set(value: object) -> bool:
    """True when *value* was supplied and is not None."""
    return value is not UNSET and value is not None


# PascalCase resource property names -> Python attribute names
PROPERTY_NAMES: dict[str, str] = {
    "Name": "name",
    "Path": "path",
    "DesktopGroupName": "desktop_group_name",
    "ApplicationType": "application_type",
    "Arguments": "arguments",
    "WorkingDirectory": "working_directory",
    "Description": "description",
    "DisplayName": "display_name",
    "Enabled": "enabled",
    "Visible": "visible",
    "Ensure": "ensure",
}

# Values used at creation time when the caller left the property out
CREATE_DEFAULTS: dict[str, Any] = {
    "application_type": ApplicationType.HOSTED_ON_DESKTOP,
    "enabled": True,
    "visible": True,
}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {PROPERTY_NAMES.get(k, k): v for k, v in data.items()}


@dataclass(frozen=True)
class Credential:
    """Alternate principal used for remote calls."""

    username: str
    password: str = field(repr=False)


@dataclass
class ApplicationDescriptor:
    """Snapshot of one published application as read from the broker."""

    name: str
    desktop_group_name: str
    path: str | None = None
    application_type: ApplicationType | None = None
    arguments: str | None = None
    working_directory: str | None = None
    description: str | None = None
    display_name: str | None = None
    enabled: bool | None = None
    visible: bool | None = None
    ensure: Ensure = Ensure.ABSENT

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_properties(self) -> dict[str, Any]:
        """Return the snapshot keyed by PascalCase property names."""
        data = self.to_dict()
        result = {}
        for prop, attr in PROPERTY_NAMES.items():
            value = data[attr]
            result[prop] = value.value if isinstance(value, enum.Enum) else value
        return result


@dataclass(frozen=True)
class DesiredState:
    """Parameters supplied by the caller for Test and Set.

    Optional properties default to ``UNSET``; only supplied properties are
    compared and patched.
    """

    name: str
    path: str
    desktop_group_name: str
    application_type: ApplicationType | _Unset = UNSET
    arguments: str | None | _Unset = UNSET
    working_directory: str | None | _Unset = UNSET
    description: str | None | _Unset = UNSET
    display_name: str | None | _Unset = UNSET
    enabled: bool | None | _Unset = UNSET
    visible: bool | None | _Unset = UNSET
    ensure: Ensure = Ensure.PRESENT

    def supplied(self, attr: str) -> bool:
        """Whether the caller supplied a non-null value for *attr*."""
        return is_set(getattr(self, attr))

    def effective(self, attr: str) -> Any:
        """Supplied value, falling back to the creation default."""
        value = getattr(self, attr)
        if is_set(value):
            return value
        return CREATE_DEFAULTS.get(attr)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DesiredState:
        """Build from a mapping keyed by attribute or PascalCase names.

        Enum properties accept their text values (case-insensitive).
        """
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in _normalize_keys(data).items() if k in valid_keys}
        if isinstance(filtered.get("application_type"), str):
            filtered["application_type"] = parse_enum(ApplicationType, filtered["application_type"])
        if isinstance(filtered.get("ensure"), str):
            filtered["ensure"] = parse_enum(Ensure, filtered["ensure"])
        return cls(**filtered)


def parse_enum(enum_cls: type[enum.Enum], text: str) -> Any:
    """Case-insensitive lookup of an enum member by value."""
    for member in enum_cls:
        if member.value.lower() == text.strip().lower():
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__} '{text}' (allowed: {allowed})")
