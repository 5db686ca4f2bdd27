"""
SMB module for WinNet.

This module handles SMB/CIFS operations on Windows:
- Local share creation, deletion and listing (net share, Win32_Share)
- Session connect/disconnect and listing (net use, Win32_NetworkConnection)
"""

from .connections import (
    IPC,
    build_connect_args,
    build_disconnect_args,
    connect,
    connect_sync,
    connect_sync_surely,
    disconnect,
    disconnect_sync,
    get_active_connections,
    has_connection,
    remote_path,
    show_current_session,
)
from .shares import (
    build_share_args,
    del_shared_directory,
    exists_share_name,
    get_local_shares,
    share_directory,
    show_local_shares,
)

__all__ = [
    "IPC",
    "build_connect_args",
    "build_disconnect_args",
    "connect",
    "connect_sync",
    "connect_sync_surely",
    "disconnect",
    "disconnect_sync",
    "get_active_connections",
    "has_connection",
    "remote_path",
    "show_current_session",
    "build_share_args",
    "del_shared_directory",
    "exists_share_name",
    "get_local_shares",
    "share_directory",
    "show_local_shares",
]
