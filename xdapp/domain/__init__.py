"""Domain module containing broker access and resource types."""

from xdapp.domain.types import (
    UNSET,
    ApplicationDescriptor,
    ApplicationType,
    Credential,
    DesiredState,
    Ensure,
)
from xdapp.domain.broker import (
    BrokerAPI,
    DesktopGroupNotFoundError,
    UnsupportedApplicationTypeError,
    descriptor_from_record,
)
from xdapp.domain.icons import IconResolutionError, IconResolver

__all__ = [
    "UNSET",
    "ApplicationDescriptor",
    "ApplicationType",
    "Credential",
    "DesiredState",
    "Ensure",
    "BrokerAPI",
    "DesktopGroupNotFoundError",
    "UnsupportedApplicationTypeError",
    "descriptor_from_record",
    "IconResolutionError",
    "IconResolver",
]
