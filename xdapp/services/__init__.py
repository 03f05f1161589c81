"""Services module for the desired-state operations."""

from xdapp.services.resource import (
    ImmutablePropertyError,
    ReconcileAction,
    get_target_resource,
    set_target_resource,
    test_target_resource,
)

__all__ = [
    "ImmutablePropertyError",
    "ReconcileAction",
    "get_target_resource",
    "set_target_resource",
    "test_target_resource",
]
