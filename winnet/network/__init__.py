"""
Network module for WinNet.

This module handles adapter and IP configuration operations:
- Adapter enumeration and IP/gateway/DNS reads (WMI, registry)
- IP address and DNS server configuration (netsh)
- Windows firewall export/import (netsh advfirewall)
- Host reachability (ping)
"""

from .adapters import (
    build_adapters_confs_query,
    build_adapters_props_query,
    enables_dhcp,
    get_adapters_confs,
    get_adapters_props,
    get_default_gateways,
    get_dns_ips_set_in_adapters,
    get_ip_set_in_adapters,
)
from .configuration import (
    check_wmi_return_code,
    export_firewall_settings,
    import_firewall_settings,
    responds_host,
    set_dns_servers,
    set_dns_servers_wmi,
    set_ip_address,
    show_ip_config_all,
)

__all__ = [
    "build_adapters_confs_query",
    "build_adapters_props_query",
    "enables_dhcp",
    "get_adapters_confs",
    "get_adapters_props",
    "get_default_gateways",
    "get_dns_ips_set_in_adapters",
    "get_ip_set_in_adapters",
    "check_wmi_return_code",
    "export_firewall_settings",
    "import_firewall_settings",
    "responds_host",
    "set_dns_servers",
    "set_dns_servers_wmi",
    "set_ip_address",
    "show_ip_config_all",
]
