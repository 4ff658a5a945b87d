"""
siva — index reconciliation for append-only siva containers.

A siva file is built from blocks that are only ever appended: each block holds
file contents followed by its own index and footer. A file can be written,
overwritten or deleted in later blocks, so readers reconcile the per-block
indexes into one view:

- CompleteIndex: every entry ever recorded, in ingestion order.
- FilteredIndex: the latest live version of each name (blocks fed newest-first).

Decoding the binary block layout and reading content are left to the caller;
this package works on already-parsed IndexEntry / IndexFooter records.
"""

__version__ = "0.1"

from .entry import Flag, Header, IndexEntry
from .errors import InvalidPatternError, SivaError
from .footer import IndexFooter
from .index import CompleteIndex, FilteredIndex, Index, IndexKind, new_index
from .ingest import Block, build_index

__all__ = [
    "Flag",
    "Header",
    "IndexEntry",
    "IndexFooter",
    "Index",
    "CompleteIndex",
    "FilteredIndex",
    "IndexKind",
    "new_index",
    "Block",
    "build_index",
    "InvalidPatternError",
    "SivaError",
]
