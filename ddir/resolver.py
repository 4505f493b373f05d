"""Answer "what description applies to this path".

A direct description of the exact path wins and is returned verbatim.
Otherwise the nearest ancestor carrying a pattern supplies the text, with
every ``*`` replaced by the query's path segment directly under that
ancestor. A pattern never describes its own directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .store import Entry, EntryKind, Store, normalize

WILDCARD = "*"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Resolved description for one queried path."""

    path: Path
    description: str
    entry: Entry
    child_name: str | None = None

    @property
    def from_pattern(self) -> bool:
        return self.entry.kind is EntryKind.PATTERN


def substitute_wildcard(template: str, name: str) -> str:
    """Replace every wildcard token in ``template`` with ``name``."""
    return template.replace(WILDCARD, name)


def nearest_pattern(store: Store, path: Path) -> Entry | None:
    """Return the pattern entry of the closest strict ancestor of ``path``."""
    for ancestor in path.parents:
        entry = store.get_normalized(ancestor, EntryKind.PATTERN)
        if entry is not None:
            return entry
    return None


def resolve(store: Store, query: str | os.PathLike[str]) -> Resolution | None:
    """Resolve the description for ``query``, or ``None`` when nothing applies.

    Raises ``PathError`` when ``query`` cannot be normalized. The store is
    only read.
    """
    path = normalize(query)

    direct = store.get_normalized(path, EntryKind.DIRECT)
    if direct is not None:
        logger.debug("direct description for %s", path)
        return Resolution(path=path, description=direct.description, entry=direct)

    pattern = nearest_pattern(store, path)
    if pattern is None:
        logger.debug("no description for %s", path)
        return None

    child_name = path.relative_to(pattern.path).parts[0]
    logger.debug("pattern from %s applies to %s as %r", pattern.path, path, child_name)
    return Resolution(
        path=path,
        description=substitute_wildcard(pattern.description, child_name),
        entry=pattern,
        child_name=child_name,
    )
