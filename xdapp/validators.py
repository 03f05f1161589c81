"""
Input validation for resource parameters.
"""

from xdapp.config.settings import (
    INVALID_NAME_PATTERN,
    MAX_APPLICATION_NAME_LENGTH,
    MAX_DESKTOP_GROUP_NAME_LENGTH,
    MAX_PATH_LENGTH,
)
from xdapp.domain.types import ApplicationType, DesiredState, Ensure, UNSET

# Free-text properties; YAML scalars like 2024 or yes must be quoted
TEXT_PROPERTIES = {
    "Arguments": "arguments",
    "WorkingDirectory": "working_directory",
    "Description": "description",
    "DisplayName": "display_name",
}


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_application_name(name: str) -> str:
    """
    Validate an application name.

    Args:
        name: The application name to validate

    Returns:
        Validated name

    Raises:
        ValidationError: If the name is invalid
    """
    if not name or not name.strip():
        raise ValidationError("Application name is required")

    if len(name) > MAX_APPLICATION_NAME_LENGTH:
        raise ValidationError(f"Application name exceeds maximum length of {MAX_APPLICATION_NAME_LENGTH}")

    if INVALID_NAME_PATTERN.search(name):
        raise ValidationError("Application name contains invalid characters")

    return name


def validate_desktop_group_name(name: str) -> str:
    """
    Validate a desktop group name.

    Args:
        name: The desktop group name to validate

    Returns:
        Validated name

    Raises:
        ValidationError: If the name is invalid
    """
    if not name or not name.strip():
        raise ValidationError("Desktop group name is required")

    if len(name) > MAX_DESKTOP_GROUP_NAME_LENGTH:
        raise ValidationError(f"Desktop group name exceeds maximum length of {MAX_DESKTOP_GROUP_NAME_LENGTH}")

    if INVALID_NAME_PATTERN.search(name):
        raise ValidationError("Desktop group name contains invalid characters")

    return name


def validate_path(path: str) -> str:
    """
    Validate an executable path.

    Args:
        path: The executable path to validate

    Returns:
        Validated path

    Raises:
        ValidationError: If the path is invalid
    """
    if not path or not path.strip():
        raise ValidationError("Path is required")

    if len(path) > MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length of {MAX_PATH_LENGTH}")

    return path


def validate_desired_state(desired: DesiredState) -> DesiredState:
    """Validate every parameter of a desired state before any remote call."""
    validate_application_name(desired.name)
    validate_desktop_group_name(desired.desktop_group_name)
    validate_path(desired.path)

    if desired.application_type not in (UNSET, None) and not isinstance(desired.application_type, ApplicationType):
        raise ValidationError(f"Invalid ApplicationType '{desired.application_type}'")

    if not isinstance(desired.ensure, Ensure):
        raise ValidationError(f"Invalid Ensure '{desired.ensure}'")

    for attr in ("enabled", "visible"):
        value = getattr(desired, attr)
        if value is not UNSET and value is not None and not isinstance(value, bool):
            raise ValidationError(f"{attr.capitalize()} must be a boolean")

    for prop, attr in TEXT_PROPERTIES.items():
        value = getattr(desired, attr)
        if value is not UNSET and value is not None and not isinstance(value, str):
            raise ValidationError(f"{prop} must be a string, got {type(value).__name__} {value!r}")

    return desired
