"""
Base classes and protocols for remote execution against the broker.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from xdapp.domain.broker import BrokerAPI
from xdapp.domain.icons import IconResolver


@dataclass
class ExecutionContext:
    """Broker services available to a unit of remote work."""

    api: BrokerAPI
    icons: IconResolver


class RemoteOperation(Protocol):
    """Protocol for a unit of work executed through a remote channel."""

    name: str

    def execute(self, context: ExecutionContext) -> Any:
        """
        Run the unit of work.

        Args:
            context: Broker services bound to the channel's identity

        Returns:
            Operation-specific result
        """
        ...


class RemoteChannel(Protocol):
    """Protocol defining how units of work reach the broker."""

    def invoke(self, operation: RemoteOperation) -> Any:
        """
        Execute *operation* in a single remote round trip.

        Args:
            operation: Unit of work

        Returns:
            Whatever the operation returns; transport errors propagate
        """
        ...
