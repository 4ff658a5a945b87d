from __future__ import annotations

import enum
import stat
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import FrozenSet, Optional, Tuple

from .constants import CRC32_MASK, FLAG_DELETE, FLAG_NORMAL


class Flag(enum.IntFlag):
    NORMAL = FLAG_NORMAL
    DELETE = FLAG_DELETE


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_PERMISSION_BITS = (
    ("owner_read", stat.S_IRUSR),
    ("owner_write", stat.S_IWUSR),
    ("owner_execute", stat.S_IXUSR),
    ("group_read", stat.S_IRGRP),
    ("group_write", stat.S_IWGRP),
    ("group_execute", stat.S_IXGRP),
    ("others_read", stat.S_IROTH),
    ("others_write", stat.S_IWOTH),
    ("others_execute", stat.S_IXOTH),
)


@dataclass(frozen=True)
class Header:
    """Metadata shared by every index record: name, mtime, mode and flag.

    Flags are bits; any value with the ``Flag.DELETE`` bit set is a tombstone.
    """

    name: str
    mtime_ns: int = 0
    mode: int = 0
    flag: int = Flag.NORMAL

    def __post_init__(self):
        if not self.name:
            raise ValueError("Entry name may not be empty")

    @property
    def is_deleted(self) -> bool:
        return bool(self.flag & Flag.DELETE)

    @property
    def mtime(self) -> datetime:
        """UTC modification time, truncated to microseconds.

        Raises OverflowError when the value falls outside the datetime range.
        """
        return _EPOCH + timedelta(microseconds=self.mtime_ns // 1000)

    @property
    def permissions(self) -> FrozenSet[str]:
        return frozenset(name for name, bit in _PERMISSION_BITS if self.mode & bit)


@dataclass(frozen=True)
class IndexEntry:
    """One file write or delete event recorded in a block's index.

    ``start`` is relative to the owning block, ``block_offset`` to the start of
    the container. ``crc32`` keeps the raw stored value; use ``checksum`` for
    the unsigned form. Tombstones carry no content, so ``checksum``,
    ``content_size`` and ``content_span()`` are None for them.
    """

    header: Header
    block_offset: int = 0
    start: int = 0
    size: int = 0
    crc32: int = 0

    def __post_init__(self):
        if self.block_offset < 0:
            raise ValueError("block_offset must be >= 0")
        if self.start < 0:
            raise ValueError("start must be >= 0")
        if self.size < 0:
            raise ValueError("size must be >= 0")

    @classmethod
    def create(
        cls,
        name: str,
        *,
        mtime_ns: int = 0,
        mode: int = 0,
        flag: int = Flag.NORMAL,
        block_offset: int = 0,
        start: int = 0,
        size: int = 0,
        crc32: int = 0,
    ) -> "IndexEntry":
        return cls(
            header=Header(name=name, mtime_ns=mtime_ns, mode=mode, flag=flag),
            block_offset=block_offset,
            start=start,
            size=size,
            crc32=crc32,
        )

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def flag(self) -> int:
        return self.header.flag

    @property
    def mtime_ns(self) -> int:
        return self.header.mtime_ns

    @property
    def mode(self) -> int:
        return self.header.mode

    @property
    def is_deleted(self) -> bool:
        return self.header.is_deleted

    @property
    def checksum(self) -> Optional[int]:
        if self.is_deleted:
            return None
        return self.crc32 & CRC32_MASK

    @property
    def content_size(self) -> Optional[int]:
        if self.is_deleted:
            return None
        return self.size

    def content_span(self) -> Optional[Tuple[int, int]]:
        """Absolute (begin, end) byte range of the content in the container."""
        if self.is_deleted:
            return None
        begin = self.block_offset + self.start
        return begin, begin + self.size
