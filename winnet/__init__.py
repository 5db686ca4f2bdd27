"""
WinNet - Windows network administration helpers.

Reads and changes host network configuration by driving ping, ipconfig,
netsh and net, and by querying WMI: adapters, IP/DNS settings, firewall
policy, SMB shares and SMB sessions.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Make key components available at package level
from . import config, errors, logging_config, network, smb

__all__ = ["config", "errors", "logging_config", "network", "smb"]
