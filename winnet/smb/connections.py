"""
SMB session management for WinNet.

Sessions to remote shares are opened and closed with `net use` and listed
through the Win32_NetworkConnection WMI class. connect_sync_surely()
reconciles the session to one remote path, retrying once on system
error 1219.
"""

import re

from .. import config
from ..errors import ConnectionFailedError
from ..logging_config import get_logger
from ..utils import (
    dry_run_text,
    run_command,
    run_command_async,
    to_property_dicts,
    wmi_query,
)
from ..utils.validation import is_solid_string, require_host, require_string

# Get module logger
logger = get_logger(__name__)

IPC = "IPC$"

# The connection could not be found; nothing left to disconnect
CONNECTION_NOT_FOUND = re.compile(r"NET HELPMSG 2250", re.IGNORECASE)

# Multiple connections by the same user with different credentials
MULTIPLE_CREDENTIALS = re.compile(r"1219")

HEALTHY_STATUS = re.compile(r"^(OK|Degraded)$", re.IGNORECASE)


def remote_path(comp, share_name=None):
    """Return \\\\comp\\share, defaulting the share to IPC$."""
    return f"\\\\{comp}\\{share_name if is_solid_string(share_name) else IPC}"


def build_connect_args(comp, share_name=None, domain=None, user=None, password=None):
    """
    Build the `net use` argument list that opens a session.

    Without a domain, net use logs on with the current domain. The
    connection is never persisted.
    """
    require_host("build_connect_args", comp)

    args = [config.EXECUTABLES["net"], "use", remote_path(comp, share_name)]

    if is_solid_string(password):
        args.append(password)

    if is_solid_string(user):
        if is_solid_string(domain):
            args.append(f"/user:{domain}\\{user}")
        else:
            args.append(f"/user:{user}")

    args.append("/persistent:no")
    return args


def build_disconnect_args(comp=None, share_name=None):
    """
    Build the `net use` argument list that closes sessions.

    Without a computer every session is closed ('*'); '*\\IPC$' is not
    accepted by net use.
    """
    args = [config.EXECUTABLES["net"], "use"]

    if is_solid_string(comp):
        if is_solid_string(share_name):
            args.append(f"\\\\{comp}\\{share_name}")
        else:
            args.append(f"\\\\{comp}")
    else:
        args.append("*")

    return args + ["/delete", "/yes"]


def connect(comp, share_name=None, domain=None, user=None, password=None, dry_run=False):
    """Open a session in the background. Returns the process id."""
    args = build_connect_args(comp, share_name, domain, user, password)
    return run_command_async(args, win_style="hidden", dry_run=dry_run, label="connect")


def connect_sync(comp, share_name=None, domain=None, user=None, password=None, dry_run=False):
    """
    Open a session and wait for net use to finish.

    Returns:
        CommandResult, or the dry-run string. stderr mentions system error
        1219 when a session with other credentials already exists.
    """
    args = build_connect_args(comp, share_name, domain, user, password)
    return run_command(args, dry_run=dry_run, label="connect_sync")


def disconnect(comp=None, share_name=None, dry_run=False):
    """Close sessions in the background. Returns the process id."""
    args = build_disconnect_args(comp, share_name)
    return run_command_async(args, win_style="hidden", dry_run=dry_run, label="disconnect")


def disconnect_sync(comp=None, share_name=None, dry_run=False):
    """
    Close sessions and wait for net use to finish.

    A session that does not exist (NET HELPMSG 2250) counts as
    disconnected, so the result is not flagged as an error.

    Returns:
        CommandResult, or the dry-run string
    """
    args = build_disconnect_args(comp, share_name)
    result = run_command(args, dry_run=dry_run, label="disconnect_sync")
    if dry_run:
        return result

    if result.error and CONNECTION_NOT_FOUND.search(result.stderr):
        logger.debug(f"No session to {args[2]}, nothing to disconnect")
        result.error = False
    return result


def show_current_session():
    """Open a console window listing the current sessions."""
    return run_command_async(
        [config.EXECUTABLES["net"], "use"], keep_open=True, label="show_current_session"
    )


def get_active_connections(matched=None):
    """
    Get the network connections of this computer.

    Args:
        matched: Optional regular expression searched (case-insensitive) in
            each connection's Name, e.g. r'^\\\\\\\\MyNas'

    Returns:
        list[dict]: Win32_NetworkConnection properties (Name, Status, ...)
    """
    connections = to_property_dicts(wmi_query("SELECT * FROM Win32_NetworkConnection"))
    if not is_solid_string(matched):
        return connections

    pattern = re.compile(matched, re.IGNORECASE)
    return [c for c in connections if pattern.search(str(c.get("Name") or ""))]


def has_connection(connection_name):
    """
    Check for a usable session with exactly this name, e.g. '\\\\NAS\\public'.

    Degraded sessions count as usable.
    """
    require_string("has_connection", connection_name)

    return any(
        connection.get("Name") == connection_name
        and HEALTHY_STATUS.match(str(connection.get("Status") or ""))
        for connection in get_active_connections()
    )


def connect_sync_surely(comp, share_name=None, domain=None, user=None, password=None, dry_run=False):
    """
    Make sure exactly one healthy session to \\\\comp\\share exists.

    Does nothing when the session already exists. Otherwise any stale
    session to the same path is dropped before connecting, and on system
    error 1219 the disconnect and connect are repeated once.

    Returns:
        None if already connected, the successful CommandResult, or the
        dry-run string (disconnect and connect lines)

    Raises:
        ConnectionFailedError: The session could not be established
    """
    require_host("connect_sync_surely", comp)
    share = share_name if is_solid_string(share_name) else IPC
    path = remote_path(comp, share)

    if dry_run:
        return "\n".join(
            [
                dry_run_text("connect_sync_surely", build_disconnect_args(comp, share)),
                dry_run_text(
                    "connect_sync_surely",
                    build_connect_args(comp, share, domain, user, password),
                ),
            ]
        )

    if has_connection(path):
        logger.debug(f"Already connected to {path}")
        return None

    disconnect_sync(comp, share)
    result = connect_sync(comp, share, domain, user, password)

    if result.error and MULTIPLE_CREDENTIALS.search(result.stderr):
        logger.info(f"System error 1219 connecting to {path}, reconnecting once")
        disconnect_sync(comp, share)
        result = connect_sync(comp, share, domain, user, password)

    if result.error:
        raise ConnectionFailedError(comp, share, domain, user, result)

    logger.info(f"Connected to {path}")
    return result
