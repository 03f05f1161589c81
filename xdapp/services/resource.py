"""
Desktop group application resource: Get, Test and Set.

Each public operation validates its parameters and then runs exactly one
unit of remote work through the channel selected for the caller's
credential. Failures from the broker propagate unchanged.

Concurrent Set calls for the same application are not serialized; each
pass re-reads the record immediately before acting.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from xdapp.config.messages import format_message
from xdapp.domain.broker import DesktopGroupNotFoundError, descriptor_from_record
from xdapp.domain.properties import IMMUTABLE_PROPERTIES, MUTABLE_PROPERTIES
from xdapp.domain.remote import ExecutionContext, get_channel
from xdapp.domain.types import (
    ApplicationDescriptor,
    Credential,
    DesiredState,
    Ensure,
)
from xdapp.observability import DRIFT_DETECTED, IMMUTABLE_VIOLATIONS, RECONCILE_ACTIONS
from xdapp.validators import (
    validate_application_name,
    validate_desired_state,
    validate_desktop_group_name,
    validate_path,
)

logger = logging.getLogger("xdapp")


class ImmutablePropertyError(Exception):
    """Raised when a desired value would change a property fixed at creation."""

    def __init__(self, property_name: str, actual: Any, expected: Any) -> None:
        self.property_name = property_name
        self.actual = actual
        self.expected = expected
        super().__init__(format_message(
            "immutable_property",
            property=property_name,
            actual=_text(actual),
            expected=_text(expected),
        ))


class ReconcileAction(enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"
    NONE = "none"


@dataclass(frozen=True)
class PropertyDrift:
    """One property whose current value differs from the desired value."""

    property_name: str
    expected: Any
    actual: Any


def _text(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


# =============================================================================
# Comparison
# =============================================================================

def check_immutable(desired: DesiredState, current: ApplicationDescriptor) -> None:
    """
    Raise if a supplied immutable property differs from an existing record.

    Raises:
        ImmutablePropertyError: On the first differing immutable property
    """
    if current.ensure is not Ensure.PRESENT:
        return
    for prop in IMMUTABLE_PROPERTIES:
        if not desired.supplied(prop.attribute):
            continue
        expected = getattr(desired, prop.attribute)
        actual = getattr(current, prop.attribute)
        if not prop.matches(expected, actual):
            IMMUTABLE_VIOLATIONS.labels(property=prop.name).inc()
            raise ImmutablePropertyError(prop.name, actual, expected)


def find_drift(desired: DesiredState, current: ApplicationDescriptor) -> list[PropertyDrift]:
    """
    List the supplied properties that differ from the current record.

    Only Ensure is compared when either side is Absent.
    """
    drift: list[PropertyDrift] = []
    if desired.ensure is not current.ensure:
        drift.append(PropertyDrift("Ensure", desired.ensure, current.ensure))

    if desired.ensure is Ensure.ABSENT or current.ensure is Ensure.ABSENT:
        return drift

    for prop in MUTABLE_PROPERTIES:
        if not desired.supplied(prop.attribute):
            continue
        expected = getattr(desired, prop.attribute)
        actual = getattr(current, prop.attribute)
        if not prop.matches(expected, actual):
            drift.append(PropertyDrift(prop.name, expected, actual))
    return drift


def build_changes(drift: list[PropertyDrift]) -> dict[str, Any]:
    """Map drifted mutable properties to broker attributes."""
    by_name = {prop.name: prop for prop in MUTABLE_PROPERTIES}
    changes = {}
    for item in drift:
        prop = by_name.get(item.property_name)
        if prop is not None:
            changes[prop.broker_attribute] = _text(item.expected)
    return changes


# =============================================================================
# Remote units of work
# =============================================================================

@dataclass(frozen=True)
class ReadApplication:
    """Looks up an application within a desktop group."""

    name: ClassVar[str] = "ReadApplication"

    application_name: str
    desktop_group_name: str

    def execute(self, context: ExecutionContext) -> ApplicationDescriptor:
        record = None
        group = context.api.get_desktop_group(self.desktop_group_name)
        if group is None:
            logger.debug(format_message(
                "desktop_group_not_found", desktop_group=self.desktop_group_name
            ))
        else:
            record = context.api.get_application(self.application_name, group["Uid"])
            if record is None:
                logger.debug(format_message(
                    "application_not_found",
                    name=self.application_name,
                    desktop_group=self.desktop_group_name,
                ))
        return descriptor_from_record(self.application_name, self.desktop_group_name, record)


@dataclass(frozen=True)
class ApplyApplication:
    """Creates, updates or removes an application to match the desired state."""

    name: ClassVar[str] = "ApplyApplication"

    desired: DesiredState

    def execute(self, context: ExecutionContext) -> ReconcileAction:
        desired = self.desired
        api = context.api

        group = api.get_desktop_group(desired.desktop_group_name)
        record = None
        if group is not None:
            record = api.get_application(desired.name, group["Uid"])

        if record is not None:
            if desired.ensure is Ensure.PRESENT:
                return self._update(context, record)
            return self._remove(context, record)

        if desired.ensure is Ensure.PRESENT:
            return self._create(context, group)

        logger.info(format_message("no_action_required", name=desired.name))
        return ReconcileAction.NONE

    def _update(self, context: ExecutionContext, record: dict) -> ReconcileAction:
        desired = self.desired
        current = descriptor_from_record(desired.name, desired.desktop_group_name, record)
        check_immutable(desired, current)

        changes = build_changes(find_drift(desired, current))
        if not changes:
            logger.info(format_message("resource_in_desired_state", name=desired.name))
            return ReconcileAction.NONE

        logger.info(format_message(
            "updating_application", name=desired.name, properties=", ".join(sorted(changes))
        ))
        context.api.set_application(record["Uid"], changes)
        return ReconcileAction.UPDATE

    def _remove(self, context: ExecutionContext, record: dict) -> ReconcileAction:
        logger.info(format_message(
            "removing_application",
            name=self.desired.name,
            desktop_group=self.desired.desktop_group_name,
        ))
        context.api.remove_application(record["Uid"])
        return ReconcileAction.REMOVE

    def _create(self, context: ExecutionContext, group: dict | None) -> ReconcileAction:
        desired = self.desired
        if group is None:
            raise DesktopGroupNotFoundError(desired.desktop_group_name)

        logger.info(format_message(
            "adding_application", name=desired.name, desktop_group=desired.desktop_group_name
        ))
        icon_uid = context.icons.resolve(desired.path)

        attributes: dict[str, Any] = {
            "Name": desired.name,
            "BrowserName": desired.name,
            "ApplicationType": _text(desired.effective("application_type")),
            "DesktopGroupUid": group["Uid"],
            "IconUid": icon_uid,
            "PublishedName": desired.name,
        }
        for prop in MUTABLE_PROPERTIES:
            value = desired.effective(prop.attribute)
            if value is not None:
                attributes[prop.broker_attribute] = _text(value)

        context.api.new_application(attributes)
        return ReconcileAction.CREATE


# =============================================================================
# Public operations
# =============================================================================

def get_target_resource(
    name: str,
    path: str,
    desktop_group_name: str,
    credential: Credential | None = None,
) -> ApplicationDescriptor:
    """
    Read the current state of an application.

    Args:
        name: Application name
        path: Executable path (required by the resource contract, not used for lookup)
        desktop_group_name: Desktop group the application is published to
        credential: Optional alternate credential

    Returns:
        Current descriptor; Ensure=Absent when the group or application is missing
    """
    validate_application_name(name)
    validate_path(path)
    validate_desktop_group_name(desktop_group_name)
    return get_channel(credential).invoke(ReadApplication(name, desktop_group_name))


def test_target_resource(desired: DesiredState, credential: Credential | None = None) -> bool:
    """
    Test whether an application is in the desired state.

    Args:
        desired: Desired parameters
        credential: Optional alternate credential

    Returns:
        True if no drift was found

    Raises:
        ImmutablePropertyError: If ApplicationType differs from the existing record
    """
    validate_desired_state(desired)
    current = get_target_resource(desired.name, desired.path, desired.desktop_group_name, credential)

    check_immutable(desired, current)

    drift = find_drift(desired, current)
    for item in drift:
        DRIFT_DETECTED.labels(property=item.property_name).inc()
        logger.debug(format_message(
            "resource_property_mismatch",
            property=item.property_name,
            expected=_text(item.expected),
            actual=_text(item.actual),
        ))

    if drift:
        logger.info(format_message("resource_not_in_desired_state", name=desired.name))
        return False

    logger.info(format_message("resource_in_desired_state", name=desired.name))
    return True


def set_target_resource(
    desired: DesiredState, credential: Credential | None = None
) -> ReconcileAction:
    """
    Create, update or remove an application to match the desired state.

    Args:
        desired: Desired parameters
        credential: Optional alternate credential

    Returns:
        The action applied to the broker
    """
    validate_desired_state(desired)
    action = get_channel(credential).invoke(ApplyApplication(desired))
    RECONCILE_ACTIONS.labels(action=action.value).inc()
    return action
