"""
Index reconciliation for append-only siva containers.

Every block of a container carries its own index. A reader scans the blocks
one by one and feeds their entries into an ``Index``:

    for block in blocks:
        for entry in block.entries:
            index.add_entry(entry)
        index.end_block()

Two strategies are available:

- ``CompleteIndex`` keeps every entry ever written, tombstones and duplicate
  names included, in ingestion order.
- ``FilteredIndex`` keeps only the latest live version of each name.

IMPORTANT: ``FilteredIndex`` relies on the caller feeding blocks from the
newest written block to the oldest. The first block that commits a name wins,
and a delete seen in any block hides that name for good. Feeding blocks
oldest-first silently resurrects deleted files and keeps stale versions.
``siva.ingest.build_index`` takes care of the ordering.

Ingestion is single-writer. Once finished, ``entries()`` and ``glob()`` only
read state and can be called from several threads.
"""

from __future__ import annotations

import abc
import enum
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .constants import DEFAULT_INDEX_KIND, INDEX_COMPLETE, INDEX_FILTERED
from .entry import IndexEntry
from .pathglob import compile_glob, normalize_name


class Index(abc.ABC):
    @abc.abstractmethod
    def entries(self) -> List[IndexEntry]:
        """Return the current view as a new list."""

    @abc.abstractmethod
    def add_entry(self, entry: IndexEntry) -> None:
        """Add an entry of the block being scanned, in the order it was read."""

    @abc.abstractmethod
    def end_block(self) -> None:
        """Called once after all entries of the current block were added."""

    def glob(self, pattern: str) -> List[IndexEntry]:
        """Return the entries whose name matches ``pattern``.

        Raises InvalidPatternError for malformed patterns; no match gives [].
        """
        regex = compile_glob(pattern)
        return [e for e in self.entries() if regex.fullmatch(normalize_name(e.name))]

    def __len__(self) -> int:
        return len(self.entries())

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.entries())


class CompleteIndex(Index):
    """Full history: every entry, in ingestion order, nothing hidden."""

    def __init__(self):
        self._entries: List[IndexEntry] = []

    def add_entry(self, entry: IndexEntry) -> None:
        self._entries.append(entry)

    def end_block(self) -> None:
        pass

    def entries(self) -> List[IndexEntry]:
        return list(self._entries)


class FilteredIndex(Index):
    """Latest live version per name, without tombstones.

    Blocks must be fed newest-first (see module docstring).
    """

    def __init__(self):
        self._committed: Dict[str, IndexEntry] = {}
        self._staged: Dict[str, IndexEntry] = {}
        # never cleared: a delete hides the name in every block processed later
        self._deleted: Set[str] = set()
        self._view: Optional[Tuple[IndexEntry, ...]] = ()

    def add_entry(self, entry: IndexEntry) -> None:
        name = entry.name
        if entry.is_deleted:
            self._deleted.add(name)
            self._staged.pop(name, None)
            return
        if name not in self._deleted:
            # last write within a block wins
            self._staged[name] = entry

    def end_block(self) -> None:
        for name, entry in self._staged.items():
            # first committed block wins
            self._committed.setdefault(name, entry)
        self._staged.clear()
        # sorted lazily by entries()
        self._view = None

    def entries(self) -> List[IndexEntry]:
        view = self._view
        if view is None:
            view = tuple(self._committed[name] for name in sorted(self._committed))
            self._view = view
        return list(view)

    @property
    def deleted_names(self) -> frozenset:
        return frozenset(self._deleted)


class IndexKind(str, enum.Enum):
    COMPLETE = INDEX_COMPLETE
    FILTERED = INDEX_FILTERED


_INDEX_TYPES = {
    IndexKind.COMPLETE: CompleteIndex,
    IndexKind.FILTERED: FilteredIndex,
}


def new_index(kind: str = DEFAULT_INDEX_KIND) -> Index:
    try:
        cls = _INDEX_TYPES[IndexKind(kind)]
    except ValueError:
        raise ValueError(f"Unknown index kind: {kind!r}") from None
    return cls()
