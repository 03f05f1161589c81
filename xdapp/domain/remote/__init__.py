"""
Remote execution module.

Units of work reach the broker either as the ambient identity or
under alternate credentials.
"""

from xdapp.domain.remote.base import ExecutionContext, RemoteChannel, RemoteOperation
from xdapp.domain.remote.factory import get_channel

__all__ = ["ExecutionContext", "RemoteChannel", "RemoteOperation", "get_channel"]
