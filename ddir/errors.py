"""Error taxonomy shared by the store, resolver and CLI.

A lookup that finds nothing is not an error; the resolver returns ``None``.
"""

from __future__ import annotations


class DdirError(Exception):
    """Base class for failures reported to the user with a nonzero exit."""


class ArgumentError(DdirError):
    """Malformed or missing command-line arguments."""


class PathError(DdirError):
    """A path argument could not be normalized to an absolute path."""


class FormatError(DdirError):
    """The persisted document exists but is not a valid description store."""


class StoreWriteError(DdirError):
    """The persisted document could not be written."""


__all__ = [
    "DdirError",
    "ArgumentError",
    "PathError",
    "FormatError",
    "StoreWriteError",
]
