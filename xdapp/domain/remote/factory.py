"""
Factory for creating remote channels.
"""

from __future__ import annotations

import logging
import threading

from xdapp.config.loader import ResourceConfig
from xdapp.domain.remote.base import RemoteChannel
from xdapp.domain.types import Credential

logger = logging.getLogger("xdapp")

# Ambient-identity channel is shared; credentialed channels are per call
_lock = threading.Lock()
_direct_channel: RemoteChannel | None = None


def get_channel(credential: Credential | None = None) -> RemoteChannel:
    """
    Get the remote channel for the requested principal.

    Args:
        credential: Alternate credential, or None for the ambient identity

    Returns:
        CredentialedChannel when a credential is supplied, DirectChannel otherwise
    """
    global _direct_channel

    from xdapp.domain.remote.channels import CredentialedChannel, DirectChannel

    connection = ResourceConfig.settings().broker
    if credential is not None:
        return CredentialedChannel(connection, credential)

    if _direct_channel is not None:
        return _direct_channel

    with _lock:
        if _direct_channel is None:
            logger.info(f"Initializing broker channel for {connection.base_url}")
            _direct_channel = DirectChannel(connection)

    return _direct_channel


def reset_channel() -> None:
    """
    Reset the shared channel.

    Useful for testing or configuration changes.
    """
    global _direct_channel
    with _lock:
        _direct_channel = None
