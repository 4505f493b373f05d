"""Persistent path-to-description store.

Descriptions and patterns are kept in two maps keyed by normalized absolute
path and persisted as one pretty-printed JSON document::

    {
      "descriptions": {"/home/me/src": "Source checkouts."},
      "patterns": {"/home/me/src": "* is a git checkout."}
    }

Both sections stay hand-editable. Loading is strict: anything that does not
decode to that shape raises ``FormatError`` so a corrupt document is never
silently replaced on the next save.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import FormatError, PathError, StoreWriteError

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """Whether an entry describes its own path or the children of its path."""

    DIRECT = "direct"
    PATTERN = "pattern"

    @property
    def section(self) -> str:
        """Top-level JSON key holding entries of this kind."""
        return _SECTIONS[self]


_SECTIONS = {
    EntryKind.DIRECT: "descriptions",
    EntryKind.PATTERN: "patterns",
}
_KIND_FOR_SECTION = {section: kind for kind, section in _SECTIONS.items()}


@dataclass(frozen=True)
class Entry:
    """One stored description."""

    path: Path
    description: str
    kind: EntryKind = EntryKind.DIRECT


def normalize(raw: str | os.PathLike[str]) -> Path:
    """Return ``raw`` as an absolute path with ``.``/``..`` collapsed.

    A leading ``~`` is expanded and relative input is joined onto the current
    working directory. Normalization is lexical: symlinks are not followed, so
    a description stays attached to the name the user typed.
    """
    try:
        text = os.fsdecode(raw)
    except TypeError as exc:
        raise PathError(f"not a path: {raw!r}") from exc
    if not text:
        raise PathError("empty path")
    if "\x00" in text:
        raise PathError(f"path contains a NUL byte: {text!r}")
    try:
        absolute = os.path.abspath(os.path.expanduser(text))
    except OSError as exc:
        # os.getcwd() fails when the working directory has been removed.
        raise PathError(f"cannot resolve {text!r}: {exc}") from exc
    if os.sep == "/" and absolute.startswith("//"):
        # POSIX abspath keeps a leading "//" as implementation-defined.
        absolute = "/" + absolute.lstrip("/")
    return Path(absolute)


class Store:
    """In-memory description store.

    Holds at most one entry per normalized path and kind; a path may carry a
    direct description and a pattern at the same time.
    """

    normalize = staticmethod(normalize)

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: dict[EntryKind, dict[Path, Entry]] = {kind: {} for kind in EntryKind}
        for entry in entries:
            self.set(entry.path, entry.description, entry.kind)

    def set(self, path: str | os.PathLike[str], description: str, kind: EntryKind) -> Entry:
        """Insert or overwrite the entry for ``path`` and ``kind``."""
        if not isinstance(description, str):
            raise TypeError(f"description must be a string, not {type(description).__name__}")
        entry = Entry(path=self.normalize(path), description=description, kind=EntryKind(kind))
        previous = self._entries[entry.kind].get(entry.path)
        if previous is not None:
            logger.debug("overwriting %s entry for %s", entry.kind.value, entry.path)
        self._entries[entry.kind][entry.path] = entry
        return entry

    def add_description(self, path: str | os.PathLike[str], description: str) -> Entry:
        """Attach a description to ``path`` itself."""
        return self.set(path, description, EntryKind.DIRECT)

    def add_pattern(self, path: str | os.PathLike[str], description: str) -> Entry:
        """Attach a pattern describing every child of ``path``."""
        return self.set(path, description, EntryKind.PATTERN)

    def get(self, path: str | os.PathLike[str], kind: EntryKind = EntryKind.DIRECT) -> Entry | None:
        """Exact-match lookup; ancestors are not consulted."""
        return self._entries[EntryKind(kind)].get(self.normalize(path))

    def get_normalized(self, path: Path, kind: EntryKind) -> Entry | None:
        """Exact-match lookup for a path that is already normalized."""
        return self._entries[kind].get(path)

    def entries(self, kind: EntryKind | None = None) -> list[Entry]:
        """Return entries sorted by kind then path."""
        kinds = list(EntryKind) if kind is None else [EntryKind(kind)]
        out: list[Entry] = []
        for entry_kind in kinds:
            section = self._entries[entry_kind]
            out.extend(section[path] for path in sorted(section))
        return out

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return sum(len(section) for section in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Store):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Store({self.entries()!r})"

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Serialize to the on-disk JSON shape."""
        return {
            kind.section: {str(entry.path): entry.description for entry in self.entries(kind)}
            for kind in EntryKind
        }

    @classmethod
    def from_dict(cls, data: object, *, source: str | os.PathLike[str] | None = None) -> Store:
        """Build a store from decoded JSON, raising ``FormatError`` on bad shape.

        Missing sections are treated as empty. Keys are normalized, so a
        hand-edited ``"/a/b/"`` and ``"/a/b"`` land on the same entry.
        """
        where = f"{os.fspath(source)}: " if source is not None else ""
        if not isinstance(data, Mapping):
            raise FormatError(f"{where}expected a JSON object at top level")

        unknown = sorted(str(key) for key in data if key not in _KIND_FOR_SECTION)
        if unknown:
            raise FormatError(f"{where}unknown section(s): {', '.join(unknown)}")

        store = cls()
        for section, kind in _KIND_FOR_SECTION.items():
            raw_section = data.get(section, {})
            if not isinstance(raw_section, Mapping):
                raise FormatError(f"{where}{section!r} must map paths to descriptions")
            for raw_path, description in raw_section.items():
                if not isinstance(raw_path, str) or not os.path.isabs(os.path.expanduser(raw_path)):
                    raise FormatError(f"{where}{section!r} key {raw_path!r} is not an absolute path")
                if not isinstance(description, str):
                    raise FormatError(f"{where}{section!r} value for {raw_path!r} is not a string")
                try:
                    store.set(raw_path, description, kind)
                except PathError as exc:
                    raise FormatError(f"{where}{section!r} key {raw_path!r}: {exc}") from exc
        return store


def load_store(source: Path) -> Store:
    """Load a store from ``source``; a missing file yields an empty store."""
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("no store at %s, starting empty", source)
        return Store()
    except (OSError, UnicodeDecodeError) as exc:
        raise FormatError(f"cannot read {source}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"{source}: invalid JSON ({exc})") from exc

    store = Store.from_dict(data, source=source)
    logger.debug("loaded %d entries from %s", len(store), source)
    return store


def save_store(store: Store, sink: Path) -> None:
    """Persist ``store`` to ``sink``, replacing any previous content.

    The document is written to a sibling temporary file first and then moved
    over ``sink``, so an interrupted write leaves the previous file intact.
    """
    payload = json.dumps(store.to_dict(), indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    tmp_path = sink.with_name(f".{sink.name}.tmp")
    try:
        sink.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(sink)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise StoreWriteError(f"cannot write {sink}: {exc}") from exc
    logger.debug("saved %d entries to %s", len(store), sink)
