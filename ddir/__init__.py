"""Public package surface for ddir.

Exports ``main`` for programmatic CLI invocation plus the store/resolver API.
Most implementation lives in submodules under ``ddir``.
"""

from __future__ import annotations

from .errors import ArgumentError, DdirError, FormatError, PathError, StoreWriteError
from .resolver import Resolution, resolve, substitute_wildcard
from .store import Entry, EntryKind, Store, load_store, normalize, save_store


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "main",
    "DdirError",
    "ArgumentError",
    "PathError",
    "FormatError",
    "StoreWriteError",
    "Entry",
    "EntryKind",
    "Store",
    "normalize",
    "load_store",
    "save_store",
    "Resolution",
    "resolve",
    "substitute_wildcard",
]
