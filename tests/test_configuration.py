"""
Unit tests for winnet/network/configuration.py

Tests host checks, netsh argument composition (through dry-run),
idempotent DHCP handling, firewall export/import and WMI return codes.
"""

import math
import pytest
from unittest.mock import patch, MagicMock


NON_STRINGS = [True, False, None, 0, 1, math.nan, math.inf, [], {}]


def _netsh():
    from winnet import config

    return config.EXECUTABLES["netsh"]


@pytest.mark.unit
class TestRespondsHost:
    """Tests for responds_host."""

    @pytest.mark.parametrize("value", NON_STRINGS + ["", "   ", "-t", "127.0.0.1 -t"])
    def test_invalid_host_raises_before_ping(self, value):
        from winnet.errors import InvalidArgumentError
        from winnet.network.configuration import responds_host

        with patch("winnet.network.configuration.run_command") as mock_run:
            with pytest.raises(InvalidArgumentError):
                responds_host(value)

        mock_run.assert_not_called()

    def test_english_reply(self, command_result):
        from winnet import config
        from winnet.network.configuration import responds_host

        reply = "Reply from 127.0.0.1: bytes=32 time<1ms TTL=128\r\n"
        with patch(
            "winnet.network.configuration.run_command", return_value=command_result(stdout=reply)
        ) as mock_run:
            assert responds_host("127.0.0.1") is True

        assert mock_run.call_args.args[0] == [config.EXECUTABLES["ping"], "127.0.0.1"]

    def test_japanese_reply(self, command_result):
        from winnet.network.configuration import responds_host

        reply = "127.0.0.1 からの応答: バイト数 =32 時間 =12ms TTL=123\r\n"
        with patch("winnet.network.configuration.run_command", return_value=command_result(stdout=reply)):
            assert responds_host("127.0.0.1") is True

    def test_no_reply(self, command_result):
        from winnet.network.configuration import responds_host

        output = "Pinging 127.0.0.0 with 32 bytes of data:\r\nGeneral failure.\r\n"
        with patch(
            "winnet.network.configuration.run_command",
            return_value=command_result(exit_code=1, stdout=output),
        ):
            assert responds_host("127.0.0.0") is False


@pytest.mark.unit
class TestSetIpAddress:
    """Tests for set_ip_address."""

    @pytest.mark.parametrize("value", NON_STRINGS + [""])
    def test_requires_net_name(self, value):
        from winnet.errors import InvalidArgumentError
        from winnet.network.configuration import set_ip_address

        with pytest.raises(InvalidArgumentError):
            set_ip_address(value, dry_run=True)

    def test_static_with_gateway(self):
        from winnet.network.configuration import set_ip_address

        with patch("winnet.utils.commands.subprocess.run") as mock_run:
            result = set_ip_address(
                "Ethernet 1", "11.22.33.44", "255.255.0.0", "11.22.33.1", dry_run=True
            )

        assert result == (
            f"dry-run [set_ip_address]: {_netsh()} interface ipv4 set address"
            ' name="Ethernet 1" source=static address=11.22.33.44'
            " mask=255.255.0.0 gateway=11.22.33.1 gwmetric=1"
        )
        mock_run.assert_not_called()

    def test_static_defaults_mask_and_omits_gateway(self):
        from winnet.network.configuration import set_ip_address

        result = set_ip_address("LAN", "10.0.0.5", dry_run=True)

        assert result.endswith('name="LAN" source=static address=10.0.0.5 mask=255.255.255.0')
        assert "gateway=" not in result

    def test_dhcp(self):
        from winnet.network.configuration import set_ip_address

        result = set_ip_address("Ethernet 1", dry_run=True)

        assert result.endswith('set address name="Ethernet 1" source=dhcp')

    def test_name_reaches_netsh_unescaped(self):
        import subprocess
        from winnet.network.configuration import set_ip_address

        completed = subprocess.CompletedProcess([], 0, stdout="", stderr="")
        with patch("winnet.utils.commands.subprocess.run", return_value=completed) as mock_run:
            set_ip_address("Ethernet 1", "11.22.33.44")

        command_line = mock_run.call_args.args[0]
        assert ' name="Ethernet 1" source=static ' in command_line
        assert '\\"' not in command_line

    def test_dhcp_already_enabled_is_success(self, command_result):
        from winnet.network.configuration import set_ip_address

        already = command_result(exit_code=1, stdout="DHCP is already enabled on this interface.\r\n")
        with patch("winnet.network.configuration.run_command", return_value=already):
            result = set_ip_address("Ethernet 1")

        assert result.error is False

    def test_failure_is_returned(self, command_result):
        from winnet.network.configuration import set_ip_address

        failed = command_result(exit_code=1, stdout="The filename, directory name, or volume label syntax is incorrect.")
        with patch("winnet.network.configuration.run_command", return_value=failed):
            result = set_ip_address("Ethernet 9", "10.0.0.5")

        assert result.error is True


@pytest.mark.unit
class TestSetDnsServers:
    """Tests for set_dns_servers."""

    def test_dhcp(self):
        from winnet.network.configuration import set_dns_servers

        result = set_dns_servers("Ethernet 1", dry_run=True)

        assert result == (
            f"dry-run [set_dns_servers]: {_netsh()} interface ipv4 set dnsservers"
            ' name="Ethernet 1" source=dhcp'
        )

    def test_primary_only(self):
        from winnet.network.configuration import set_dns_servers

        result = set_dns_servers("Ethernet 1", "11.22.33.1", dry_run=True)

        assert result.endswith("source=static address=11.22.33.1 register=non validate=no")
        assert "add dnsservers" not in result

    def test_primary_and_secondary(self):
        from winnet.network.configuration import set_dns_servers

        result = set_dns_servers("Ethernet 1", "11.22.33.1", "11.22.33.2", dry_run=True)
        first, second = result.split("\n")

        assert "set dnsservers" in first
        assert second == (
            f"dry-run [set_dns_servers]: {_netsh()} interface ipv4 add dnsservers"
            ' name="Ethernet 1" address=11.22.33.2 index=2 validate=no'
        )

    def test_runs_both_steps(self, command_result):
        from winnet.network.configuration import set_dns_servers

        with patch("winnet.network.configuration.run_command", return_value=command_result()) as mock_run:
            assert set_dns_servers("Ethernet 1", "11.22.33.1", "11.22.33.2") is None

        assert mock_run.call_count == 2

    def test_failure_raises(self, command_result):
        from winnet.errors import CommandError
        from winnet.network.configuration import set_dns_servers

        failed = command_result(exit_code=1, stdout="", stderr="The interface is unknown.")
        with patch("winnet.network.configuration.run_command", return_value=failed) as mock_run:
            with pytest.raises(CommandError) as excinfo:
                set_dns_servers("Nope", "11.22.33.1", "11.22.33.2")

        assert excinfo.value.result is failed
        assert mock_run.call_count == 1


@pytest.mark.unit
class TestWmiReturnCodes:
    """Tests for check_wmi_return_code and set_dns_servers_wmi."""

    @pytest.mark.parametrize("code", [0, 1])
    def test_success_codes(self, code):
        from winnet.network.configuration import check_wmi_return_code

        assert check_wmi_return_code("fn", code) is True

    def test_invalid_subnet_mask(self):
        from winnet.errors import InvalidSubnetMaskError
        from winnet.network.configuration import check_wmi_return_code

        with pytest.raises(InvalidSubnetMaskError):
            check_wmi_return_code("fn", -66)

    def test_config_window_open(self):
        from winnet.errors import NetworkConfigWindowOpenError
        from winnet.network.configuration import check_wmi_return_code

        with pytest.raises(NetworkConfigWindowOpenError):
            check_wmi_return_code("fn", -2147180508)

    def test_other_code(self):
        from winnet.errors import WmiReturnCodeError
        from winnet.network.configuration import check_wmi_return_code

        with pytest.raises(WmiReturnCodeError) as excinfo:
            check_wmi_return_code("fn", 91)

        assert excinfo.value.code == 91

    def test_set_search_order(self):
        from winnet.network.configuration import set_dns_servers_wmi

        adapter = MagicMock()
        adapter.SetDNSServerSearchOrder.return_value = (0,)
        with patch("winnet.network.configuration.wmi_query", return_value=[adapter]) as mock_query:
            assert set_dns_servers_wmi(14, ["11.22.33.1", "11.22.33.2"]) is True

        assert mock_query.call_args.args[0].endswith("WHERE IPEnabled = True AND Index = 14")
        adapter.SetDNSServerSearchOrder.assert_called_once_with(
            DNSServerSearchOrder=["11.22.33.1", "11.22.33.2"]
        )

    def test_reset_to_dhcp(self):
        from winnet.network.configuration import set_dns_servers_wmi

        adapter = MagicMock()
        adapter.SetDNSServerSearchOrder.return_value = (1,)
        with patch("winnet.network.configuration.wmi_query", return_value=[adapter]):
            assert set_dns_servers_wmi(14) is True

        adapter.SetDNSServerSearchOrder.assert_called_once_with()

    def test_unknown_index(self):
        from winnet.errors import CommandError
        from winnet.network.configuration import set_dns_servers_wmi

        with patch("winnet.network.configuration.wmi_query", return_value=[]):
            with pytest.raises(CommandError):
                set_dns_servers_wmi(99, ["1.1.1.1"])

    def test_dry_run(self):
        from winnet.network.configuration import set_dns_servers_wmi

        with patch("winnet.network.configuration.wmi_query") as mock_query:
            result = set_dns_servers_wmi(14, ["1.1.1.1"], dry_run=True)

        assert result.startswith("dry-run [set_dns_servers_wmi]: ")
        assert "Index = 14" in result
        mock_query.assert_not_called()

    @pytest.mark.parametrize("value", ["14", None, True, 1.5])
    def test_index_must_be_int(self, value):
        from winnet.errors import InvalidArgumentError
        from winnet.network.configuration import set_dns_servers_wmi

        with pytest.raises(InvalidArgumentError):
            set_dns_servers_wmi(value)


@pytest.mark.unit
class TestFirewall:
    """Tests for firewall export and import."""

    @pytest.mark.parametrize("value", NON_STRINGS + [""])
    def test_export_requires_path(self, value):
        from winnet.errors import InvalidArgumentError
        from winnet.network.configuration import export_firewall_settings

        with pytest.raises(InvalidArgumentError):
            export_firewall_settings(value, dry_run=True)

    def test_export_dry_run(self, tmp_path):
        from winnet.network.configuration import export_firewall_settings

        dest = tmp_path / "backup.wfw"
        result = export_firewall_settings(str(dest), dry_run=True)

        assert result == f"dry-run [export_firewall_settings]: {_netsh()} advfirewall export {dest}"

    def test_export_requires_admin(self, tmp_path):
        from winnet.errors import AdminRightsRequiredError
        from winnet.network.configuration import export_firewall_settings

        with (
            patch("winnet.utils.commands.is_admin", return_value=False),
            patch("winnet.utils.commands.subprocess.run") as mock_run,
        ):
            with pytest.raises(AdminRightsRequiredError):
                export_firewall_settings(str(tmp_path / "backup.wfw"))

        mock_run.assert_not_called()

    def test_import_missing_file(self, tmp_path):
        from winnet.errors import PathNotFoundError
        from winnet.network.configuration import import_firewall_settings

        with pytest.raises(PathNotFoundError):
            import_firewall_settings(str(tmp_path / "missing.wfw"), dry_run=True)

    def test_import_dry_run(self, tmp_path):
        from winnet.network.configuration import import_firewall_settings

        src = tmp_path / "backup.wfw"
        src.write_text("Dummy FireWall Values")

        result = import_firewall_settings(str(src), dry_run=True)

        assert result == f"dry-run [import_firewall_settings]: {_netsh()} advfirewall import {src}"


@pytest.mark.unit
class TestShowIpConfigAll:
    """Tests for show_ip_config_all."""

    def test_opens_window(self):
        from winnet import config
        from winnet.network.configuration import show_ip_config_all

        with patch("winnet.network.configuration.run_command_async", return_value=99) as mock_async:
            assert show_ip_config_all() == 99

        mock_async.assert_called_once_with(
            [config.EXECUTABLES["ipconfig"], "/all"],
            win_style="activeDef",
            keep_open=True,
            label="show_ip_config_all",
        )
