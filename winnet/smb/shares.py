"""
Local SMB share management for WinNet.

Shares are created and removed with `net share` and listed through the
Win32_Share WMI class.
"""

from .. import config
from ..errors import AdminRightsRequiredError
from ..logging_config import get_logger
from ..utils import (
    RawArg,
    is_admin,
    quote_arg,
    run_command,
    run_command_async,
    to_property_dicts,
    wmi_query,
)
from ..utils.validation import is_solid_string, require_directory, require_string

# Get module logger
logger = get_logger(__name__)


def _require_admin(function_name):
    if not is_admin():
        raise AdminRightsRequiredError(function_name)


def build_share_args(share_name, dir_path, user_name="Everyone", grant="READ", remark=""):
    """Build the `net share` argument list that publishes a directory."""
    # each side is quoted on its own: "My Share"="C:\My Dir"
    assignment = RawArg(f"{quote_arg(share_name)}={quote_arg(dir_path)}")
    args = [config.EXECUTABLES["net"], "share", assignment]

    if is_solid_string(user_name) and is_solid_string(grant):
        args.append(f"/GRANT:{user_name},{grant}")
    if is_solid_string(remark):
        args.append(f"/REMARK:{remark}")
    return args


def share_directory(share_name, dir_path, user_name="Everyone", grant="READ", remark="", dry_run=False):
    """
    Share a local directory. Requires administrator rights.

    Args:
        share_name: Name of the new share
        dir_path: Existing directory to share
        user_name: Account granted access
        grant: READ, CHANGE or FULL
        remark: Optional share comment
        dry_run: If True, return the command line instead of running it

    Returns:
        CommandResult, or the dry-run string. `net share` exits with 2 when
        the name is already shared.
    """
    require_string("share_directory", share_name)
    require_string("share_directory", dir_path)
    require_directory("share_directory", dir_path)

    args = build_share_args(share_name, dir_path, user_name, grant, remark)
    if dry_run:
        return run_command(args, dry_run=True, label="share_directory")

    _require_admin("share_directory")
    logger.info(f"Sharing {dir_path} as '{share_name}'")
    return run_command(args, label="share_directory")


def del_shared_directory(share_name, dry_run=False):
    """
    Stop sharing a directory. Requires administrator rights.

    /YES answers the prompt net share shows when files are open, which
    would otherwise block forever.

    Returns:
        CommandResult, or the dry-run string
    """
    require_string("del_shared_directory", share_name)

    args = [config.EXECUTABLES["net"], "share", share_name, "/DELETE", "/YES"]
    if dry_run:
        return run_command(args, dry_run=True, label="del_shared_directory")

    _require_admin("del_shared_directory")
    logger.info(f"Deleting share '{share_name}'")
    return run_command(args, label="del_shared_directory")


def show_local_shares():
    """Open a console window listing the local shares."""
    return run_command_async(
        [config.EXECUTABLES["net"], "share"], keep_open=True, label="show_local_shares"
    )


def get_local_shares():
    """
    Get the shared resources of this computer.

    Returns:
        list[dict]: Win32_Share properties (Name, Path, Description, Type, ...)
    """
    return to_property_dicts(wmi_query("SELECT * FROM Win32_Share"))


def exists_share_name(share_name):
    """Check whether a share with this name exists (case-insensitive)."""
    require_string("exists_share_name", share_name)

    wanted = share_name.casefold()
    return any(
        str(share.get("Name", "")).casefold() == wanted for share in get_local_shares()
    )
