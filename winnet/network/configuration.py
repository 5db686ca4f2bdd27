"""
Network configuration functions for WinNet.

This module provides functions to check hosts and configure IP addresses,
DNS servers and the Windows firewall through ping, ipconfig and netsh.
"""

import os
import re

from .. import config
from ..errors import (
    CommandError,
    InvalidArgumentError,
    InvalidSubnetMaskError,
    NetworkConfigWindowOpenError,
    WmiReturnCodeError,
)
from ..logging_config import get_logger
from ..utils import RawArg, dry_run_text, run_command, run_command_async, wmi_query
from ..utils.validation import is_solid_string, require_file, require_host, require_string

# Get module logger
logger = get_logger(__name__)

# netsh reports this on stdout when source=dhcp is requested twice
DHCP_ALREADY_ENABLED = re.compile(
    r"DHCP is already enabled|DHCP はこのインターフェイスで既に有効です", re.IGNORECASE
)

WMI_SUCCESS = 0
WMI_SUCCESS_REBOOT_REQUIRED = 1
WMI_INVALID_SUBNET_MASK = -66
WMI_CONFIG_WINDOW_OPEN = -2147180508


def _netsh(*args):
    return [config.EXECUTABLES["netsh"]] + list(args)


def _name_arg(net_name):
    # netsh reads the quotes itself; they must reach it unescaped
    return RawArg(f'name="{net_name}"')


def responds_host(host):
    """
    Check whether the host answers ping.

    The reply line is locale dependent; English and Japanese outputs are
    recognized.
    """
    require_host("responds_host", host)

    result = run_command([config.EXECUTABLES["ping"], host], label="responds_host")
    responded = bool(re.search(config.PING_REPLY_PATTERN, result.stdout))
    logger.debug(f"Host {host} {'responded' if responded else 'did not respond'}")
    return responded


def show_ip_config_all(win_style="activeDef"):
    """Open a console window showing `ipconfig /all`."""
    return run_command_async(
        [config.EXECUTABLES["ipconfig"], "/all"],
        win_style=win_style,
        keep_open=True,
        label="show_ip_config_all",
    )


def build_set_address_args(net_name, ip=None, mask=None, default_gateway=None):
    """Build the netsh argument list for `set address`."""
    args = _netsh("interface", "ipv4", "set", "address", _name_arg(net_name))

    if not is_solid_string(ip):
        return args + ["source=dhcp"]

    args += ["source=static", f"address={ip}"]
    args.append(f"mask={mask if is_solid_string(mask) else config.DEFAULT_SUBNET_MASK}")
    if is_solid_string(default_gateway):
        args += [f"gateway={default_gateway}", "gwmetric=1"]
    return args


def set_ip_address(net_name, ip=None, mask=None, default_gateway=None, runs_admin=None, dry_run=False):
    """
    Set a static IP address, subnet mask and default gateway, or enable DHCP.

    Args:
        net_name: NetConnectionID of the adapter, e.g. 'Ethernet 1'
        ip: IPv4 address; if empty, DHCP is enabled instead
        mask: Subnet mask, defaults to 255.255.255.0
        default_gateway: Gateway address; omitted when empty
        runs_admin: If True, require an elevated process
        dry_run: If True, return the command line instead of running it

    Returns:
        CommandResult, or the dry-run string
    """
    require_string("set_ip_address", net_name)

    args = build_set_address_args(net_name, ip, mask, default_gateway)
    if not is_solid_string(ip):
        logger.info(f"Enabling DHCP on '{net_name}'")
    else:
        logger.info(f"Setting IP address of '{net_name}' to {ip}")

    result = run_command(args, dry_run=dry_run, runs_admin=runs_admin, label="set_ip_address")
    if dry_run:
        return result

    if result.error and DHCP_ALREADY_ENABLED.search(result.stdout + result.stderr):
        logger.info(f"DHCP is already enabled on '{net_name}'")
        result.error = False

    return result


def build_set_dns_args(net_name, dns1=None):
    """Build the netsh argument list for `set dnsservers`."""
    args = _netsh("interface", "ipv4", "set", "dnsservers", _name_arg(net_name))
    if is_solid_string(dns1):
        return args + ["source=static", f"address={dns1}", "register=non", "validate=no"]
    return args + ["source=dhcp"]


def build_add_dns_args(net_name, dns2):
    """Build the netsh argument list that adds the secondary DNS server."""
    return _netsh(
        "interface", "ipv4", "add", "dnsservers",
        _name_arg(net_name), f"address={dns2}", "index=2", "validate=no",
    )


def set_dns_servers(net_name, dns1=None, dns2=None, runs_admin=None, dry_run=False):
    """
    Set the DNS servers of an adapter. The Windows network settings window
    must be closed.

    Args:
        net_name: NetConnectionID of the adapter
        dns1: Primary DNS server; if empty, DNS is obtained through DHCP
        dns2: Secondary DNS server; added only when given
        runs_admin: If True, require an elevated process
        dry_run: If True, return the command lines instead of running them

    Returns:
        None, or the dry-run string

    Raises:
        CommandError: netsh reported a failure
    """
    require_string("set_dns_servers", net_name)

    steps = [build_set_dns_args(net_name, dns1)]
    if is_solid_string(dns2):
        steps.append(build_add_dns_args(net_name, dns2))

    if dry_run:
        return "\n".join(dry_run_text("set_dns_servers", args) for args in steps)

    logger.info(f"Setting DNS servers of '{net_name}' to {[d for d in (dns1, dns2) if d] or 'DHCP'}")
    for args in steps:
        result = run_command(args, runs_admin=runs_admin, label="set_dns_servers")
        if result.error:
            raise CommandError(f"Failed to set DNS servers of '{net_name}'", result)


def check_wmi_return_code(function_name, code):
    """
    Map a WMI method return code to success or an exception.

    Returns:
        True for 0 and 1 (1 means a reboot is required)
    """
    if code == WMI_SUCCESS:
        return True
    if code == WMI_SUCCESS_REBOOT_REQUIRED:
        logger.warning(f"{function_name}: successful completion, reboot required")
        return True
    if code == WMI_INVALID_SUBNET_MASK:
        raise InvalidSubnetMaskError(function_name, code)
    if code == WMI_CONFIG_WINDOW_OPEN:
        raise NetworkConfigWindowOpenError(function_name, code)
    raise WmiReturnCodeError(function_name, code)


def set_dns_servers_wmi(adapter_index, dns_addresses=None, dry_run=False):
    """
    Set the DNS server search order through WMI.

    Args:
        adapter_index: Win32_NetworkAdapterConfiguration Index
        dns_addresses: DNS servers in order; if empty, DHCP supplies them
        dry_run: If True, return a description of the call instead

    Returns:
        True, or the dry-run string

    Raises:
        CommandError: No IP-enabled adapter has that index
        WmiReturnCodeError: The WMI method failed
    """
    if isinstance(adapter_index, bool) or not isinstance(adapter_index, int):
        raise InvalidArgumentError("set_dns_servers_wmi", adapter_index, "adapter index")

    dns_addresses = list(dns_addresses or [])
    query = (
        "SELECT * FROM Win32_NetworkAdapterConfiguration"
        f" WHERE IPEnabled = True AND Index = {adapter_index}"
    )

    if dry_run:
        return f"dry-run [set_dns_servers_wmi]: {query} -> SetDNSServerSearchOrder({dns_addresses})"

    adapters = wmi_query(query)
    if not adapters:
        raise CommandError(f"No IP-enabled adapter with index {adapter_index}")

    if dns_addresses:
        returned = adapters[0].SetDNSServerSearchOrder(DNSServerSearchOrder=dns_addresses)
    else:
        returned = adapters[0].SetDNSServerSearchOrder()

    # wmi returns the out parameters as a tuple, ReturnValue first
    code = returned[0] if isinstance(returned, tuple) else returned
    return check_wmi_return_code("set_dns_servers_wmi", code)


def export_firewall_settings(dest_path, runs_admin=True, dry_run=False):
    """
    Export the Windows firewall policy to a file (.wfw recommended).
    Requires administrator rights.

    Returns:
        CommandResult, or the dry-run string
    """
    require_string("export_firewall_settings", dest_path)

    args = _netsh("advfirewall", "export", os.path.abspath(dest_path))
    return run_command(
        args, dry_run=dry_run, runs_admin=runs_admin, label="export_firewall_settings"
    )


def import_firewall_settings(src_path, runs_admin=True, dry_run=False):
    """
    Import a Windows firewall policy file. Requires administrator rights.

    Returns:
        CommandResult, or the dry-run string

    Raises:
        PathNotFoundError: src_path is not an existing file
    """
    require_string("import_firewall_settings", src_path)
    path = require_file("import_firewall_settings", os.path.abspath(src_path))

    args = _netsh("advfirewall", "import", path)
    return run_command(
        args, dry_run=dry_run, runs_admin=runs_admin, label="import_firewall_settings"
    )
