from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .constants import DEFAULT_INDEX_KIND
from .entry import IndexEntry
from .errors import EntryCountMismatch
from .footer import IndexFooter
from .index import Index, IndexKind, new_index


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    """Already-parsed block: its absolute offset, index entries and footer."""

    offset: int
    entries: Tuple[IndexEntry, ...] = ()
    footer: Optional[IndexFooter] = None


def check_block(block: Block) -> None:
    if block.footer is not None and not block.footer.matches(block.entries):
        raise EntryCountMismatch(block.offset, block.footer.entry_count, len(block.entries))


def newest_first(blocks: Iterable[Block]) -> List[Block]:
    # blocks are only ever appended, so a higher offset means a newer block
    return sorted(blocks, key=lambda b: b.offset, reverse=True)


def feed_block(index: Index, block: Block) -> None:
    check_block(block)
    for entry in block.entries:
        index.add_entry(entry)
    index.end_block()
    logger.debug("Ingested block at offset %d (%d entries)", block.offset, len(block.entries))


def build_index(blocks: Iterable[Block], kind: str = DEFAULT_INDEX_KIND) -> Index:
    """Build an index of ``kind`` from parsed blocks given in any order.

    The filtered strategy is fed newest-first as it requires; the complete
    strategy is fed in written order so its history reads oldest to newest.
    """
    index = new_index(kind)
    ordered = newest_first(blocks)
    if IndexKind(kind) is IndexKind.COMPLETE:
        ordered.reverse()
    for block in ordered:
        feed_block(index, block)
    logger.debug("Built %s index from %d block(s): %d entries", IndexKind(kind).value, len(ordered), len(index))
    return index
