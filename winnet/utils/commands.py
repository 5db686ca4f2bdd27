"""
Command execution utilities for WinNet.

This module provides command execution with error handling and logging,
plus the dry-run mode used by every mutating operation. It serves as the
central location for all command execution to avoid duplication.
"""

import re
import subprocess
from dataclasses import dataclass
from typing import Optional

from .. import config
from ..errors import AdminRightsRequiredError
from ..logging_config import get_logger
from .native import is_admin

# Get module logger
logger = get_logger(__name__)

# ShowWindow values for STARTUPINFO.wShowWindow
WINDOW_STYLES = {
    "hidden": 0,
    "activeDef": 1,
    "activeMin": 2,
    "activeMax": 3,
    "nonActive": 4,
    "nonActiveMin": 7,
}

DRY_RUN_FORMAT = "dry-run [{label}]: {command}"

# net use \\host\share <password> [/user:...]; the password is the first non-switch token
_PASSWORD_ARG = re.compile(r'^("\\\\[^"]*"|\\\\\S+) (?!/)("(?:[^"\\]|\\.)*"|\S+)')


@dataclass
class CommandResult:
    """Outcome of a synchronously executed command."""

    error: bool
    exit_code: Optional[int]
    stdout: str
    stderr: str
    command: str = ""


class RawArg(str):
    """An argument placed on the command line exactly as written."""


def quote_arg(value):
    """Quote a single token by the MS C runtime rules (only when needed)."""
    return subprocess.list2cmdline([str(value)])


def compose_command(args):
    """
    Join an argument list into a single Windows command line.

    Arguments containing spaces or double quotes are wrapped in quotes and
    embedded quotes are backslash-escaped, following the MS C runtime rules.
    RawArg values are inserted unchanged, for tools such as netsh that
    expect `name="Ethernet 1"` literally.
    """
    return " ".join(a if isinstance(a, RawArg) else quote_arg(a) for a in args)


def dry_run_text(label, args):
    """Return the string reported instead of running a command."""
    return DRY_RUN_FORMAT.format(label=label, command=compose_command(args))


def _loggable(command):
    """Mask the password positional of `net use` before logging."""
    prefix = f"{compose_command([config.EXECUTABLES['net']])} use "
    if not command.startswith(prefix):
        return command
    return prefix + _PASSWORD_ARG.sub(r"\1 ****", command[len(prefix):], count=1)


def _window_options(win_style, new_console=False):
    """Build Popen keyword arguments for the requested window style."""
    if win_style not in WINDOW_STYLES:
        raise ValueError(f"Unknown window style: {win_style!r}")

    if not hasattr(subprocess, "STARTUPINFO"):
        # Not on Windows, window styles do not apply
        return {}

    startupinfo = subprocess.STARTUPINFO()
    startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
    startupinfo.wShowWindow = WINDOW_STYLES[win_style]

    if win_style == "hidden":
        flags = subprocess.CREATE_NO_WINDOW
    elif new_console:
        flags = subprocess.CREATE_NEW_CONSOLE
    else:
        flags = 0

    return {"startupinfo": startupinfo, "creationflags": flags}


def _check_admin(runs_admin, label):
    if runs_admin and not is_admin():
        raise AdminRightsRequiredError(label)


def run_command(args, dry_run=False, runs_admin=None, win_style="hidden", label=None):
    """
    Execute a command synchronously and capture its output.

    Args:
        args: Command to execute as a list of strings, executable first
        dry_run: If True, return the composed command line instead of running it
        runs_admin: If True, refuse to run unless the process is elevated
        win_style: Window style for the spawned process (Windows only)
        label: Name reported in dry-run text and log lines

    Returns:
        CommandResult, or the dry-run string when dry_run is True

    Raises:
        AdminRightsRequiredError: runs_admin is set and the process is not elevated
    """
    label = label or "run_command"
    if dry_run:
        return dry_run_text(label, args)

    _check_admin(runs_admin, label)

    command = compose_command(args)
    logger.debug(f"Running command [{label}]: {_loggable(command)}")

    try:
        # Windows passes the string to CreateProcess unchanged
        proc = subprocess.run(
            command,
            check=False,
            capture_output=True,
            encoding=config.COMMAND_ENCODING,
            errors="ignore",
            **_window_options(win_style),
        )
    except FileNotFoundError:
        logger.error(f"Command not found: {args[0]}")
        return CommandResult(
            error=True,
            exit_code=None,
            stdout="",
            stderr=f"Command not found: {args[0]}",
            command=command,
        )

    stdout = proc.stdout or ""
    stderr = proc.stderr or ""
    result = CommandResult(
        error=proc.returncode != 0 or bool(stderr.strip()),
        exit_code=proc.returncode,
        stdout=stdout,
        stderr=stderr,
        command=command,
    )

    if result.error:
        logger.debug(f"Command [{label}] failed with status {proc.returncode}")
        if stderr.strip():
            logger.debug(f"Stderr: {stderr.strip()}")
        if stdout.strip():
            logger.debug(f"Stdout: {stdout.strip()}")

    return result


def run_command_async(
    args, win_style="activeDef", keep_open=False, dry_run=False, label=None
):
    """
    Start a command without waiting for it to finish.

    Args:
        args: Command to execute as a list of strings, executable first
        win_style: Window style for the spawned process (Windows only)
        keep_open: If True, run through `cmd /K` so the console stays open
        dry_run: If True, return the composed command line instead of running it
        label: Name reported in dry-run text and log lines

    Returns:
        The process id, or the dry-run string when dry_run is True
    """
    label = label or "run_command_async"
    if keep_open:
        args = [config.EXECUTABLES["cmd"], "/K"] + list(args)

    if dry_run:
        return dry_run_text(label, args)

    command = compose_command(args)
    logger.debug(f"Starting command [{label}]: {_loggable(command)}")
    proc = subprocess.Popen(
        command,
        stdin=subprocess.DEVNULL,
        stdout=None if keep_open else subprocess.DEVNULL,
        stderr=None if keep_open else subprocess.DEVNULL,
        **_window_options(win_style, new_console=True),
    )
    return proc.pid
