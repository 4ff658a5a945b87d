from __future__ import annotations

from dataclasses import dataclass
from typing import Sized

from .constants import CRC32_MASK, FOOTER_SIZE


@dataclass(frozen=True)
class IndexFooter:
    """Trailer of a block's index section.

    Fields:
      - entry_count: number of index entries in the block
      - index_size: bytes of the encoded index section
      - block_size: bytes of the whole block, content and index included
      - crc32: checksum over the index bytes
    """

    entry_count: int
    index_size: int
    block_size: int
    crc32: int = 0

    def __post_init__(self):
        for field_name in ("entry_count", "index_size", "block_size"):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be >= 0")

    @property
    def checksum(self) -> int:
        return self.crc32 & CRC32_MASK

    def block_start(self, block_end: int) -> int:
        return block_end - self.block_size

    def index_start(self, block_end: int) -> int:
        # index section sits right before the footer
        return block_end - FOOTER_SIZE - self.index_size

    def matches(self, entries: Sized) -> bool:
        return len(entries) == self.entry_count
