"""
Icon resolution for newly published applications.
"""

from __future__ import annotations

import logging

from xdapp.config.messages import format_message
from xdapp.config.settings import DEFAULT_ICON_INDEX
from xdapp.domain.broker import BrokerAPI

logger = logging.getLogger("xdapp")


class IconResolutionError(RuntimeError):
    """Raised when no icon can be derived from an executable path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(format_message("icon_not_resolved", path=path))


class IconResolver:
    """Resolves the broker icon Uid for an executable."""

    def __init__(self, api: BrokerAPI, index: int = DEFAULT_ICON_INDEX):
        self.api = api
        self.index = index

    def resolve(self, path: str) -> int:
        """
        Extract and register the icon of *path*.

        Args:
            path: Executable path

        Returns:
            Icon Uid

        Raises:
            IconResolutionError: If the broker returns no icon
        """
        logger.debug(format_message("resolving_icon", path=path))
        if not path:
            raise IconResolutionError(path)
        record = self.api.new_icon(path, self.index)
        uid = (record or {}).get("Uid")
        if uid is None:
            raise IconResolutionError(path)
        return uid
