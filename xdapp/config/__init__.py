"""Configuration module for the application resource."""

from xdapp.config.settings import (
    MAX_APPLICATION_NAME_LENGTH,
    MAX_DESKTOP_GROUP_NAME_LENGTH,
    MAX_PATH_LENGTH,
    INVALID_NAME_PATTERN,
    DEFAULT_ICON_INDEX,
    get_env,
)
from xdapp.config.messages import MESSAGES, format_message
from xdapp.config.loader import (
    ResourceConfig,
    CONFIG_PATH,
    RESOURCE_CONFIG_FILE,
)

__all__ = [
    "MAX_APPLICATION_NAME_LENGTH",
    "MAX_DESKTOP_GROUP_NAME_LENGTH",
    "MAX_PATH_LENGTH",
    "INVALID_NAME_PATTERN",
    "DEFAULT_ICON_INDEX",
    "get_env",
    "MESSAGES",
    "format_message",
    "ResourceConfig",
    "CONFIG_PATH",
    "RESOURCE_CONFIG_FILE",
]
