"""
Pytest configuration and shared fixtures for WinNet tests.

This module provides reusable fixtures and configuration for all tests.
No test runs a real command or touches WMI.
"""

import pytest

from winnet.utils import CommandResult


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with all collaborators mocked")


class FakeWmiObject:
    """Stands in for a wmi._wmi_object: attributes plus a `properties` map."""

    def __init__(self, **props):
        self.properties = dict.fromkeys(props)
        for name, value in props.items():
            setattr(self, name, value)


def make_result(exit_code=0, stdout="", stderr="", command=""):
    return CommandResult(
        error=exit_code != 0 or bool(stderr.strip()),
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
        command=command,
    )


@pytest.fixture
def wmi_object():
    """Factory for fake WMI objects."""
    return FakeWmiObject


@pytest.fixture
def command_result():
    """Factory for CommandResult values shaped like run_command output."""
    return make_result


@pytest.fixture
def mock_adapters(wmi_object):
    """Two Win32_NetworkAdapter records: a connected NIC and a disabled one."""
    return [
        wmi_object(
            Caption="[00000001] Intel(R) Ethernet Connection I219-V",
            Description="Intel(R) Ethernet Connection I219-V",
            GUID="{11111111-2222-3333-4444-555555555555}",
            MACAddress="00:11:22:33:44:55",
            Name="Intel(R) Ethernet Connection I219-V",
            NetConnectionID="Ethernet 1",
            NetConnectionStatus=2,
        ),
        wmi_object(
            Caption="[00000002] Realtek USB GbE Family Controller",
            Description="Realtek USB GbE Family Controller",
            GUID="{66666666-7777-8888-9999-000000000000}",
            MACAddress="66:77:88:99:AA:BB",
            Name="Realtek USB GbE Family Controller",
            NetConnectionID="Ethernet 2",
            NetConnectionStatus=None,
        ),
    ]


@pytest.fixture
def mock_adapter_confs(wmi_object):
    """Win32_NetworkAdapterConfiguration records as the wmi package returns them."""
    return [
        wmi_object(
            Description="Intel(R) Ethernet Connection I219-V",
            MACAddress="00:11:22:33:44:55",
            IPAddress=("192.168.1.20", "fe80::1c2b:3a4d:5e6f:7081"),
            DefaultIPGateway=("192.168.1.1",),
            DNSServerSearchOrder=("192.168.1.1",),
            SettingID="{11111111-2222-3333-4444-555555555555}",
        ),
        wmi_object(
            Description="Realtek USB GbE Family Controller",
            MACAddress="66:77:88:99:AA:BB",
            IPAddress=None,
            DefaultIPGateway=None,
            DNSServerSearchOrder=None,
            SettingID="{66666666-7777-8888-9999-000000000000}",
        ),
    ]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep logs and config overrides inside the test's temp directory."""
    from winnet import config

    monkeypatch.setattr(config, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(config, "LOG_FILE", tmp_path / "logs" / "winnet.log")
    config.reset_config()
    yield
    config.reset_config()


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
    yield
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
