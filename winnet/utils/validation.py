"""Argument checks shared by the network and SMB facades."""

import os

from ..errors import InvalidArgumentError, PathNotFoundError


def is_solid_string(value):
    """True for a str that is not empty or whitespace only."""
    return isinstance(value, str) and bool(value.strip())


def require_string(function_name, value):
    if not is_solid_string(value):
        raise InvalidArgumentError(function_name, value)
    return value


def require_host(function_name, value):
    """A host name or address: one token that cannot be read as an option."""
    require_string(function_name, value)
    if value.startswith("-") or any(c.isspace() for c in value):
        raise InvalidArgumentError(function_name, value, "host name or address")
    return value


def require_file(function_name, path):
    if not os.path.isfile(path):
        raise PathNotFoundError(function_name, path)
    return path


def require_directory(function_name, path):
    if not os.path.isdir(path):
        raise PathNotFoundError(function_name, path)
    return path
