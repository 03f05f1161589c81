"""
Shared pytest fixtures for the xdapp test suite.
"""

import copy
import os

import pytest

# ---------------------------------------------------------------------------
# Environment stubs – must be set BEFORE any xdapp module is imported so
# that module-level config paths point somewhere harmless.
# ---------------------------------------------------------------------------

os.environ.setdefault("XDAPP_CONFIG_PATH", "/tmp/xdapp-tests/config")
os.environ.setdefault("XDAPP_BROKER_URL", "http://ddc.example.test/Citrix/BrokerAdmin")

from xdapp.config.models import ResourceSettings  # noqa: E402
from xdapp.domain.icons import IconResolver  # noqa: E402
from xdapp.domain.remote.base import ExecutionContext  # noqa: E402
from xdapp.domain.types import DesiredState  # noqa: E402


# ---------------------------------------------------------------------------
# In-memory broker
# ---------------------------------------------------------------------------

class FakeBroker:
    """In-memory stand-in for BrokerAPI keyed by desktop group Uid."""

    def __init__(self) -> None:
        self.desktop_groups: dict[str, dict] = {}
        self.applications: dict[int, dict] = {}
        self.icons: dict[int, dict] = {}
        self.mutations: list[tuple] = []
        self._next_uid = 100

    def _uid(self) -> int:
        self._next_uid += 1
        return self._next_uid

    # -- seeding helpers ----------------------------------------------------

    def add_desktop_group(self, name: str) -> dict:
        group = {"Uid": self._uid(), "Name": name}
        self.desktop_groups[name.lower()] = group
        return group

    def add_application(self, desktop_group: str, **attributes) -> dict:
        group = self.desktop_groups[desktop_group.lower()]
        record = {
            "Uid": self._uid(),
            "DesktopGroupUid": group["Uid"],
            "ApplicationType": "HostedOnDesktop",
            "CommandLineArguments": "",
            "WorkingDirectory": "",
            "Description": "",
            "Enabled": True,
            "Visible": True,
        }
        record.update(attributes)
        record.setdefault("PublishedName", record["Name"])
        record.setdefault("BrowserName", record["Name"])
        self.applications[record["Uid"]] = record
        return record

    def find(self, name: str) -> dict | None:
        for record in self.applications.values():
            if record["Name"].lower() == name.lower():
                return record
        return None

    # -- BrokerAPI surface --------------------------------------------------

    def get_desktop_group(self, name: str) -> dict | None:
        group = self.desktop_groups.get(name.lower())
        return copy.deepcopy(group)

    def get_application(self, name: str, desktop_group_uid: int) -> dict | None:
        for record in self.applications.values():
            if record["Name"].lower() == name.lower() and record["DesktopGroupUid"] == desktop_group_uid:
                return copy.deepcopy(record)
        return None

    def new_application(self, attributes: dict) -> dict:
        self.mutations.append(("new", copy.deepcopy(attributes)))
        record = {
            "Uid": self._uid(),
            "CommandLineArguments": "",
            "WorkingDirectory": "",
            "Description": "",
        }
        record.update(attributes)
        self.applications[record["Uid"]] = record
        return copy.deepcopy(record)

    def set_application(self, uid: int, changes: dict) -> None:
        self.mutations.append(("set", uid, copy.deepcopy(changes)))
        self.applications[uid].update(changes)

    def remove_application(self, uid: int) -> None:
        self.mutations.append(("remove", uid))
        del self.applications[uid]

    def new_icon(self, file_name: str, index: int = 0) -> dict:
        icon = {"Uid": self._uid(), "FileName": file_name, "Index": index}
        self.icons[icon["Uid"]] = icon
        return icon


class FakeChannel:
    """Runs units of work directly against a FakeBroker."""

    def __init__(self, broker: FakeBroker) -> None:
        self.broker = broker
        self.invocations: list[str] = []

    def invoke(self, operation):
        self.invocations.append(operation.name)
        context = ExecutionContext(api=self.broker, icons=IconResolver(self.broker))
        return operation.execute(context)


@pytest.fixture
def fake_broker():
    """Broker with a 'Sales' desktop group and no applications."""
    broker = FakeBroker()
    broker.add_desktop_group("Sales")
    return broker


@pytest.fixture
def fake_channel(mocker, fake_broker):
    """Route every remote unit of work to the fake broker."""
    channel = FakeChannel(fake_broker)
    get_channel = mocker.patch("xdapp.services.resource.get_channel", return_value=channel)
    channel.factory = get_channel
    return channel


# ---------------------------------------------------------------------------
# ResourceConfig mock
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_resource_config(mocker):
    """Patch ResourceConfig.settings to return defaults pointing at a test broker."""
    settings = ResourceSettings(broker={
        "base_url": "http://ddc.example.test/Citrix/BrokerAdmin",
        "api_key": "test-api-key",
        "timeout": 30,
    })
    mocker.patch("xdapp.config.loader.ResourceConfig.settings", return_value=settings)
    return settings


# ---------------------------------------------------------------------------
# Desired state factory
# ---------------------------------------------------------------------------

@pytest.fixture
def desired_state():
    """Factory for a DesiredState publishing Notepad to Sales."""
    def _make(**overrides) -> DesiredState:
        defaults = {
            "name": "Notepad",
            "path": r"C:\Windows\notepad.exe",
            "desktop_group_name": "Sales",
        }
        defaults.update(overrides)
        return DesiredState(**defaults)
    return _make
