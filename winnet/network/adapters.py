"""
Network adapter queries for WinNet.

This module builds WQL queries against Win32_NetworkAdapter and
Win32_NetworkAdapterConfiguration, and reads the per-adapter TCP/IP
registry values that WMI does not expose reliably.
"""

import ipaddress
import re

from .. import config
from ..logging_config import get_logger
from ..utils import read_registry_value, to_property_dicts, wmi_query
from ..utils.validation import is_solid_string, require_string

# Get module logger
logger = get_logger(__name__)

# NetConnectionStatus 0-3: Disconnected, Connecting, Connected, Disconnecting
CONNECTING_STATUSES = range(0, 4)


def _is_specific_mac(mac_address):
    return is_solid_string(mac_address) and mac_address != "*"


def _description_filters(excludes_virtual, excludes_wireless):
    clauses = ""
    if excludes_virtual:
        clauses += ' AND NOT Description LIKE "%virtual%"'
    if excludes_wireless:
        clauses += ' AND NOT Description LIKE "%wireless%"'
    return clauses


def build_adapters_props_query(mac_address=None, excludes_virtual=True, excludes_wireless=False):
    """
    Build the WQL query for physical network adapters.

    A specific MAC address ('*' means any) selects that adapter only and the
    description filters are skipped. Without a MAC address, adapters lacking
    one are excluded.
    """
    query = "SELECT * FROM Win32_NetworkAdapter WHERE PhysicalAdapter = True"

    if _is_specific_mac(mac_address):
        return query + f' AND MACAddress = "{mac_address}"'

    if not is_solid_string(mac_address):
        query += " AND NOT MACAddress = null"

    return query + _description_filters(excludes_virtual, excludes_wireless)


def build_adapters_confs_query(mac_address=None, excludes_virtual=True, excludes_wireless=False):
    """
    Build the WQL query for adapter configurations.

    The RAS Async Adapter (used by remote desktop) is always excluded, and
    the description filters apply even when a MAC address is given.
    """
    query = (
        "SELECT * FROM Win32_NetworkAdapterConfiguration"
        ' WHERE NOT Description LIKE "RAS Async Adapter"'
    )

    if _is_specific_mac(mac_address):
        query += f' AND MACAddress = "{mac_address}"'
    else:
        query += " AND NOT MACAddress = null"

    return query + _description_filters(excludes_virtual, excludes_wireless)


def _is_connecting(adapter):
    status = adapter.get("NetConnectionStatus")
    return isinstance(status, int) and status in CONNECTING_STATUSES


def get_adapters_props(
    mac_address=None, excludes_virtual=True, excludes_wireless=False, is_connecting=None
):
    """
    Get Win32_NetworkAdapter properties for the physical adapters.

    Args:
        mac_address: Exact MAC address to select; empty or '*' means all
        excludes_virtual: Skip adapters described as virtual
        excludes_wireless: Skip adapters described as wireless
        is_connecting: If not None, keep only adapters whose
            NetConnectionStatus is between 0 and 3

    Returns:
        list[dict]: One property dictionary per adapter
    """
    query = build_adapters_props_query(mac_address, excludes_virtual, excludes_wireless)
    adapters = to_property_dicts(wmi_query(query))

    if is_connecting is None:
        return adapters

    return [adapter for adapter in adapters if _is_connecting(adapter)]


def get_adapters_confs(mac_address=None, excludes_virtual=True, excludes_wireless=False):
    """Get Win32_NetworkAdapterConfiguration properties as dictionaries."""
    query = build_adapters_confs_query(mac_address, excludes_virtual, excludes_wireless)
    return to_property_dicts(wmi_query(query))


def _interface_value_path(guid, value_name):
    return f"{config.TCPIP_INTERFACES_KEY}\\{guid}\\{value_name}"


def enables_dhcp(mac_address, **options):
    """
    Check whether DHCP is enabled on the adapter with the given MAC address.

    Returns:
        bool: True only when the adapter's EnableDHCP registry value is 1
    """
    require_string("enables_dhcp", mac_address)

    adapters = get_adapters_props(mac_address, **options)
    if not adapters:
        logger.debug(f"No adapter found for MAC address {mac_address}")
        return False

    value = read_registry_value(_interface_value_path(adapters[0]["GUID"], "EnableDHCP"))
    return value == 1


def _first_of_version(addresses, version):
    for address in addresses:
        try:
            if ipaddress.ip_address(address).version == version:
                return address
        except ValueError:
            continue
    return None


def get_ip_set_in_adapters(mac_address=None, ip_ver="IPv4", **options):
    """
    Get the IP address configured on each adapter.

    Args:
        mac_address: Exact MAC address to select; empty or '*' means all
        ip_ver: 'IPv4' or 'IPv6' (case-insensitive)

    Returns:
        list[str]: One address of the requested family per adapter
    """
    version = 6 if str(ip_ver).lower() == "ipv6" else 4

    ips = []
    for adapter in get_adapters_confs(mac_address, **options):
        address = _first_of_version(adapter.get("IPAddress") or (), version)
        if address:
            ips.append(address)
    return ips


def get_default_gateways(mac_address=None, **options):
    """
    Get the default gateway of each adapter that has one.

    Returns:
        list[str]: Gateways per adapter, comma-joined when an adapter has several
    """
    gateways = []
    for adapter in get_adapters_confs(mac_address, **options):
        gateway = adapter.get("DefaultIPGateway")
        if not gateway:
            continue
        if isinstance(gateway, (list, tuple)):
            gateway = ",".join(str(g) for g in gateway)
        gateways.append(str(gateway))
    return gateways


def get_dns_ips_set_in_adapters(mac_address=None, **options):
    """
    Get the statically configured DNS servers of the first matching adapter.

    Returns:
        list[str]: [primary, secondary, ...]; empty when nothing is configured
    """
    adapters = get_adapters_props(mac_address, **options)
    if not adapters:
        return []

    value = read_registry_value(_interface_value_path(adapters[0]["GUID"], "NameServer"))
    if not value:
        return []

    return [server for server in re.split(r"[,\s]+", value) if server]
