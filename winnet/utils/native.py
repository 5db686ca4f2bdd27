"""
Native Windows API utilities for WinNet.

This module wraps the WMI query interface, the registry and the elevation
check. It serves as the central location for all native API calls to
avoid duplication.
"""

import ctypes

try:
    import winreg
except ImportError:
    winreg = None

try:
    import wmi
except ImportError:
    wmi = None

from .. import config
from ..errors import PlatformError
from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)

REGISTRY_HIVES = {
    "HKEY_CLASSES_ROOT": "HKEY_CLASSES_ROOT",
    "HKCR": "HKEY_CLASSES_ROOT",
    "HKEY_CURRENT_USER": "HKEY_CURRENT_USER",
    "HKCU": "HKEY_CURRENT_USER",
    "HKEY_LOCAL_MACHINE": "HKEY_LOCAL_MACHINE",
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKEY_USERS": "HKEY_USERS",
    "HKU": "HKEY_USERS",
    "HKEY_CURRENT_CONFIG": "HKEY_CURRENT_CONFIG",
}


def is_admin():
    """Return True if the current process runs with administrator rights."""
    try:
        return ctypes.windll.shell32.IsUserAnAdmin() != 0
    except AttributeError:
        # ctypes.windll only exists on Windows
        return False


def _connect_wmi(namespace):
    if wmi is None:
        raise PlatformError("WMI is not available on this platform")
    return wmi.WMI(namespace=namespace)


def wmi_query(query, namespace=None):
    """
    Run a WQL query and return the matching WMI objects.

    Args:
        query: WQL string, e.g. 'SELECT * FROM Win32_Share'
        namespace: WMI namespace, defaults to root/cimv2

    Returns:
        list: WMI objects

    Raises:
        PlatformError: WMI is not available
    """
    namespace = namespace or config.WMI_NAMESPACE
    logger.debug(f"WMI query ({namespace}): {query}")
    connection = _connect_wmi(namespace)
    return list(connection.query(query))


def to_property_dicts(objects):
    """Convert WMI objects into plain property dictionaries."""
    return [
        {name: getattr(obj, name, None) for name in obj.properties} for obj in objects
    ]


def split_registry_path(path):
    """
    Split 'HIVE\\key\\path\\ValueName' into (hive, key, value_name).

    Raises:
        ValueError: The path has no known hive or no value name
    """
    parts = path.split("\\")
    hive = REGISTRY_HIVES.get(parts[0].upper())
    if hive is None or len(parts) < 2:
        raise ValueError(f"Not a registry value path: {path!r}")
    return hive, "\\".join(parts[1:-1]), parts[-1]


def read_registry_value(path):
    """
    Read a single registry value.

    Args:
        path: Full path including the value name, e.g.
              'HKEY_LOCAL_MACHINE\\SYSTEM\\...\\EnableDHCP'

    Returns:
        The stored value, or None if the key or value does not exist

    Raises:
        PlatformError: The registry is not available
    """
    if winreg is None:
        raise PlatformError("The Windows registry is not available on this platform")

    hive, key_path, value_name = split_registry_path(path)
    try:
        with winreg.OpenKey(getattr(winreg, hive), key_path, 0, winreg.KEY_READ) as key:
            value, _ = winreg.QueryValueEx(key, value_name)
    except FileNotFoundError:
        logger.debug(f"Registry value not found: {path}")
        return None

    logger.debug(f"Registry value {path} = {value!r}")
    return value
