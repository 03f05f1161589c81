"""
Broker administration API client for REST operations.
"""

from __future__ import annotations

import logging
from typing import Any, Callable
from urllib.parse import quote

import requests

from xdapp.domain.properties import PROPERTIES, Mutability
from xdapp.domain.types import ApplicationDescriptor, ApplicationType, Ensure

logger = logging.getLogger("xdapp")


class DesktopGroupNotFoundError(LookupError):
    """Raised when an application must be created in a missing desktop group."""

    def __init__(self, desktop_group: str) -> None:
        self.desktop_group = desktop_group
        super().__init__(f"Desktop group '{desktop_group}' was not found")


class UnsupportedApplicationTypeError(ValueError):
    """Raised when the broker reports an application type this resource cannot manage."""

    def __init__(self, name: str, desktop_group: str, uid: Any, application_type: Any) -> None:
        self.application_type = application_type
        super().__init__(
            f"Application '{name}' (Uid {uid}) in desktop group '{desktop_group}' has "
            f"unsupported ApplicationType '{application_type}'"
        )


class BrokerAPI:
    """Client for the broker administration REST API."""

    def __init__(
        self,
        base_url: str,
        auth: requests.auth.AuthBase | None = None,
        api_key: str = "",
        verify: bool = True,
        timeout: float | None = None,
    ):
        """
        Initialize broker API client.

        Args:
            base_url: Broker administration base URL
            auth: Optional requests auth handler for an alternate principal
            api_key: Optional API key sent with every request
            verify: Whether to verify TLS certificates
            timeout: Request timeout in seconds (None blocks indefinitely)
        """
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.api_key = api_key
        self.verify = verify
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def _do_request(
        self,
        method: Callable[..., Any],
        path: str,
        *,
        raise_for_status: bool = True,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Make an API call against the broker.

        Args:
            method: HTTP method (requests.get, requests.post, etc.)
            path: API path relative to the base URL
            raise_for_status: Whether to raise on non-2xx responses
            **kwargs: Additional arguments passed to the request

        Returns:
            Response object
        """
        resp = method(
            f"{self.base_url}/{path}",
            headers=self._headers(),
            auth=self.auth,
            verify=self.verify,
            timeout=self.timeout,
            **kwargs,
        )
        if raise_for_status:
            resp.raise_for_status()
        return resp

    def get_desktop_group(self, name: str) -> dict | None:
        """
        Get a desktop group by name.

        Args:
            name: Desktop group name

        Returns:
            Desktop group record, or None if not found
        """
        resp = self._do_request(
            requests.get, f"desktopgroups/{quote(name, safe='')}", raise_for_status=False
        )
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def get_application(self, name: str, desktop_group_uid: int) -> dict | None:
        """
        Get an application published to a desktop group.

        Args:
            name: Application name
            desktop_group_uid: Uid of the owning desktop group

        Returns:
            Application record, or None if not found
        """
        resp = self._do_request(
            requests.get,
            "applications",
            params={"name": name, "desktopGroupUid": desktop_group_uid},
        )
        records = resp.json()
        if not records:
            return None
        return records[0]

    def new_application(self, attributes: dict[str, Any]) -> dict:
        """
        Create an application.

        Args:
            attributes: Broker attributes of the new application

        Returns:
            Created application record
        """
        resp = self._do_request(requests.post, "applications", json=attributes)
        return resp.json()

    def set_application(self, uid: int, changes: dict[str, Any]) -> None:
        """
        Update attributes of an existing application.

        Args:
            uid: Application Uid
            changes: Broker attributes to change
        """
        self._do_request(requests.patch, f"applications/{uid}", json=changes)

    def remove_application(self, uid: int) -> None:
        """
        Remove an application.

        Args:
            uid: Application Uid
        """
        self._do_request(requests.delete, f"applications/{uid}")

    def new_icon(self, file_name: str, index: int = 0) -> dict:
        """
        Register an icon extracted from an executable.

        Args:
            file_name: Executable path on the broker's hosts
            index: Icon index inside the executable

        Returns:
            Icon record
        """
        resp = self._do_request(
            requests.post, "icons", json={"FileName": file_name, "Index": index}
        )
        return resp.json()


def descriptor_from_record(
    name: str, desktop_group_name: str, record: dict | None
) -> ApplicationDescriptor:
    """
    Build a descriptor from a broker application record.

    Args:
        name: Application name that was looked up
        desktop_group_name: Desktop group name that was looked up
        record: Application record, or None when not found

    Returns:
        Descriptor with Ensure=Present when a record was found
    """
    descriptor = ApplicationDescriptor(name=name, desktop_group_name=desktop_group_name)
    if record is None:
        return descriptor

    for prop in PROPERTIES:
        if prop.mutability is Mutability.IDENTITY or prop.broker_attribute is None:
            continue
        setattr(descriptor, prop.attribute, record.get(prop.broker_attribute))

    if descriptor.application_type is not None:
        try:
            descriptor.application_type = ApplicationType(descriptor.application_type)
        except ValueError:
            raise UnsupportedApplicationTypeError(
                name, desktop_group_name, record.get("Uid"), descriptor.application_type
            ) from None
    descriptor.ensure = Ensure.PRESENT
    return descriptor
