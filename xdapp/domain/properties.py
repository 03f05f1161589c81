"""
Declared comparable properties of a published application.

Each entry ties a descriptor attribute to its broker attribute, the
comparator used for drift detection and its mutability.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable


class Mutability(enum.Enum):
    MUTABLE = "mutable"
    # Change after creation is an error
    IMMUTABLE = "immutable"
    # Used to locate the record, never compared or patched
    IDENTITY = "identity"


def equals(desired: Any, actual: Any) -> bool:
    return desired == actual


def equals_ignore_case(desired: Any, actual: Any) -> bool:
    """String equality ignoring case; the broker matches text case-insensitively.

    An empty string and a missing value are equal.
    """
    text_like = (str, type(None))
    if isinstance(desired, text_like) and isinstance(actual, text_like):
        return (desired or "").casefold() == (actual or "").casefold()
    return desired == actual


@dataclass(frozen=True)
class PropertySpec:
    """A comparable resource property."""

    name: str  # PascalCase resource property name
    attribute: str  # descriptor attribute
    broker_attribute: str | None
    comparator: Callable[[Any, Any], bool]
    mutability: Mutability

    def matches(self, desired: Any, actual: Any) -> bool:
        return self.comparator(desired, actual)


PROPERTIES: tuple[PropertySpec, ...] = (
    PropertySpec("Name", "name", "Name", equals_ignore_case, Mutability.IDENTITY),
    PropertySpec("DesktopGroupName", "desktop_group_name", None, equals_ignore_case, Mutability.IDENTITY),
    PropertySpec("ApplicationType", "application_type", "ApplicationType", equals, Mutability.IMMUTABLE),
    PropertySpec("Path", "path", "CommandLineExecutable", equals_ignore_case, Mutability.MUTABLE),
    PropertySpec("Arguments", "arguments", "CommandLineArguments", equals_ignore_case, Mutability.MUTABLE),
    PropertySpec("WorkingDirectory", "working_directory", "WorkingDirectory", equals_ignore_case, Mutability.MUTABLE),
    PropertySpec("Description", "description", "Description", equals_ignore_case, Mutability.MUTABLE),
    PropertySpec("DisplayName", "display_name", "PublishedName", equals_ignore_case, Mutability.MUTABLE),
    PropertySpec("Enabled", "enabled", "Enabled", equals, Mutability.MUTABLE),
    PropertySpec("Visible", "visible", "Visible", equals, Mutability.MUTABLE),
)

IMMUTABLE_PROPERTIES = tuple(p for p in PROPERTIES if p.mutability is Mutability.IMMUTABLE)
MUTABLE_PROPERTIES = tuple(p for p in PROPERTIES if p.mutability is Mutability.MUTABLE)
