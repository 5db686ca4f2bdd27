"""
Exception hierarchy for WinNet.

Validation and privilege errors are raised before any external command
runs. Command failures are usually returned as error-flagged
CommandResult objects; the exceptions below cover the cases where an
operation cannot hand a usable result back to the caller.
"""


class WinNetError(Exception):
    """Base class for all WinNet errors."""


class InvalidArgumentError(WinNetError, TypeError):
    """A required argument is missing, blank, or of the wrong type."""

    def __init__(self, function_name, value, expected="non-empty string"):
        self.function_name = function_name
        self.value = value
        super().__init__(f"{function_name}: expected {expected}, got {value!r}")


class PathNotFoundError(WinNetError, FileNotFoundError):
    """A required file or directory does not exist."""

    def __init__(self, function_name, path):
        self.function_name = function_name
        self.path = path
        super().__init__(f"{function_name}: no such path: {path}")


class AdminRightsRequiredError(WinNetError, PermissionError):
    """The operation must run from an elevated process."""

    def __init__(self, function_name):
        self.function_name = function_name
        super().__init__(f"{function_name}: administrator rights are required")


class PlatformError(WinNetError):
    """WMI or the registry is not available on this platform."""


class CommandError(WinNetError):
    """An external command failed and the operation cannot continue."""

    def __init__(self, message, result=None):
        self.result = result
        # result.command is left out; net use command lines carry passwords
        if result is not None:
            message = f"{message}\n  exit code: {result.exit_code}\n  stderr: {result.stderr.strip()}"
        super().__init__(message)


class ConnectionFailedError(CommandError):
    """An SMB session could not be established, even after the 1219 retry."""

    def __init__(self, comp, share_name, domain, user, result):
        self.comp = comp
        self.share_name = share_name
        self.domain = domain
        self.user = user
        super().__init__(
            f"Failed to connect to \\\\{comp}\\{share_name}"
            f" (domain={domain!r}, user={user!r})",
            result,
        )


class WmiReturnCodeError(WinNetError):
    """A WMI method returned a code that is neither 0 nor 1."""

    def __init__(self, function_name, code, message=None):
        self.function_name = function_name
        self.code = code
        super().__init__(f"{function_name}: {message or 'WMI method failed'} (code {code})")


class InvalidSubnetMaskError(WmiReturnCodeError):
    """WMI return code -66."""

    def __init__(self, function_name, code=-66):
        super().__init__(function_name, code, "invalid subnet mask")


class NetworkConfigWindowOpenError(WmiReturnCodeError):
    """WMI return code -2147180508."""

    def __init__(self, function_name, code=-2147180508):
        super().__init__(
            function_name,
            code,
            "close the network configuration window and retry",
        )
