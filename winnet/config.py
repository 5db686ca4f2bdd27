"""
Configuration management for WinNet.

This module handles loading, validation, and default configuration values
for the WinNet library and command line tool.
"""

import logging
import ntpath
import os
import sys
from pathlib import Path

import toml

# --- App Constants ---
APP_NAME = "winnet"
IS_WINDOWS = sys.platform == "win32"


def _default_log_dir():
    local_app_data = os.environ.get("LOCALAPPDATA")
    if local_app_data:
        return Path(local_app_data) / APP_NAME / "Logs"
    return Path.home() / f".{APP_NAME}" / "logs"


LOG_DIR = _default_log_dir()
LOG_FILE = LOG_DIR / "winnet.log"

# --- Logging Constants ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Executables ---
SYSTEM_ROOT = os.environ.get("SystemRoot", r"C:\Windows")
SYSTEM32_DIR = ntpath.join(SYSTEM_ROOT, "System32")

DEFAULT_EXECUTABLES = {
    "cmd": ntpath.join(SYSTEM32_DIR, "cmd.exe"),
    "ping": ntpath.join(SYSTEM32_DIR, "PING.EXE"),
    "ipconfig": ntpath.join(SYSTEM32_DIR, "ipconfig.exe"),
    "netsh": ntpath.join(SYSTEM32_DIR, "netsh.exe"),
    "net": ntpath.join(SYSTEM32_DIR, "net.exe"),
}

# Live table consulted at call time; apply_config() may override entries.
EXECUTABLES = DEFAULT_EXECUTABLES.copy()

# Console tools write in the OEM code page on Windows.
DEFAULT_ENCODING = "oem" if IS_WINDOWS else "utf-8"
COMMAND_ENCODING = DEFAULT_ENCODING

# --- Network Constants ---
DEFAULT_SUBNET_MASK = "255.255.255.0"
TCPIP_INTERFACES_KEY = (
    r"HKEY_LOCAL_MACHINE\SYSTEM\ControlSet001\services\Tcpip\Parameters\Interfaces"
)
WMI_NAMESPACE = "root/cimv2"

# Windows 7/10 English and Japanese ping replies:
#   Reply from 127.0.0.1: bytes=32 time=12ms TTL=123
#   127.0.0.1 からの応答: バイト数 =32 時間 <1ms TTL=128
PING_REPLY_PATTERN = r"(time|時間 )[=<]\d+ms"

# --- Default Settings ---
DEFAULT_DEBUG = False
DEFAULT_DRY_RUN = False

DEFAULT_CONFIG = {
    "settings": {
        "debug": DEFAULT_DEBUG,
        "dry_run": DEFAULT_DRY_RUN,
        "encoding": DEFAULT_ENCODING,
    },
    "executables": {},
}


def get_config_path():
    """Gets the path to the configuration file."""
    app_data = os.environ.get("APPDATA")
    if app_data:
        return Path(app_data) / APP_NAME / "config.toml"
    return Path.home() / ".config" / APP_NAME / "config.toml"


def load_config(path=None):
    """Loads the configuration from the TOML file."""
    path = Path(path) if path else get_config_path()
    if not path.exists():
        # Create a default config if one doesn't exist
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            toml.dump(DEFAULT_CONFIG, f)
        return DEFAULT_CONFIG

    with open(path, "r") as f:
        config = toml.load(f)

    # stdlib logger here; importing logging_config would initialize handlers early
    logging.getLogger(__name__).debug(f"Loaded configuration from {path}")
    return config


def apply_config(config):
    """Applies executable and encoding overrides from a loaded configuration."""
    global COMMAND_ENCODING

    settings = config.get("settings", {})
    COMMAND_ENCODING = settings.get("encoding") or DEFAULT_ENCODING

    for name, exe_path in config.get("executables", {}).items():
        if name not in DEFAULT_EXECUTABLES:
            logging.getLogger(__name__).warning(
                f"Ignoring override for unknown executable '{name}'"
            )
            continue
        EXECUTABLES[name] = exe_path


def reset_config():
    """Restores the built-in executables and encoding."""
    global COMMAND_ENCODING

    EXECUTABLES.clear()
    EXECUTABLES.update(DEFAULT_EXECUTABLES)
    COMMAND_ENCODING = DEFAULT_ENCODING


if __name__ == "__main__":
    config = load_config()
    import json

    print(json.dumps(config, indent=4))
