"""
Constants and settings for the application resource.
"""

import os
import re

# =============================================================================
# Constants
# =============================================================================

# Application and desktop group names as accepted by the broker
MAX_APPLICATION_NAME_LENGTH = 64
MAX_DESKTOP_GROUP_NAME_LENGTH = 64
MAX_PATH_LENGTH = 260

# Characters the broker rejects in application/group names
INVALID_NAME_PATTERN = re.compile(r'[\\/;:#*?=<>|\[\]"]')


# Icon index extracted from the executable
DEFAULT_ICON_INDEX = 0

ENV_PREFIX = "XDAPP_"


def get_env(key: str, default: str = None, required: bool = False, prefixed_only: bool = False) -> str:
    """
    Retrieve a configuration value from the environment.

    Looks up ``XDAPP_<KEY>`` first, then ``<KEY>`` unless *prefixed_only*.

    Args:
        key: Configuration key
        default: Default value
        required: Whether the value is required
        prefixed_only: Ignore the bare ``<KEY>`` name (used for secrets)

    Returns:
        Configuration value

    Raises:
        ValueError: If required value is missing
    """
    env_key = key.upper().replace("-", "_")
    value = os.environ.get(f"{ENV_PREFIX}{env_key}")
    if not value and not prefixed_only:
        value = os.environ.get(env_key)
    value = value or default
    if required and not value:
        raise ValueError(f"Required configuration missing: {ENV_PREFIX}{env_key}")
    return value
