"""
Utility functions for WinNet.

This module provides the process runner and native Windows helpers used
throughout the package.
"""

from .commands import (
    CommandResult,
    RawArg,
    compose_command,
    dry_run_text,
    quote_arg,
    run_command,
    run_command_async,
)
from .native import (
    is_admin,
    read_registry_value,
    to_property_dicts,
    wmi_query,
)

__all__ = [
    "CommandResult",
    "RawArg",
    "compose_command",
    "dry_run_text",
    "quote_arg",
    "run_command",
    "run_command_async",
    "is_admin",
    "read_registry_value",
    "to_property_dicts",
    "wmi_query",
]
