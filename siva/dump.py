"""
JSON block dumps.

A dump holds records that were already parsed out of a container, e.g.

    {"blocks": [{"offset": 0,
                 "footer": {"entry_count": 1, "index_size": 40, "block_size": 72, "crc32": 12345},
                 "entries": [{"name": "a.txt", "mtime_ns": 0, "mode": 420, "flag": 0,
                              "start": 0, "size": 8, "crc32": -1}]}]}

Entries inherit the block's offset unless they set ``block_offset``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from .entry import IndexEntry
from .errors import DumpFormatError
from .footer import IndexFooter
from .ingest import Block


_ENTRY_KEYS = ("mtime_ns", "mode", "flag", "start", "size", "crc32")
_FOOTER_KEYS = ("entry_count", "index_size", "block_size", "crc32")


def _int_field(obj: Dict[str, Any], key: str, default: int = 0) -> int:
    val = obj.get(key, default)
    if isinstance(val, bool) or not isinstance(val, int):
        raise DumpFormatError(f"Field {key!r} must be an integer, got {val!r}")
    return val


def entry_from_dict(obj: Dict[str, Any], block_offset: int = 0) -> IndexEntry:
    if not isinstance(obj, dict):
        raise DumpFormatError("Entry must be an object")
    name = obj.get("name")
    if not isinstance(name, str):
        raise DumpFormatError("Entry 'name' must be a string")
    fields = {k: _int_field(obj, k) for k in _ENTRY_KEYS}
    try:
        return IndexEntry.create(name, block_offset=_int_field(obj, "block_offset", block_offset), **fields)
    except ValueError as exc:
        raise DumpFormatError(f"Invalid entry {name!r}: {exc}") from exc


def footer_from_dict(obj: Dict[str, Any]) -> IndexFooter:
    if not isinstance(obj, dict):
        raise DumpFormatError("Footer must be an object")
    for k in _FOOTER_KEYS[:3]:
        if k not in obj:
            raise DumpFormatError(f"Footer is missing {k!r}")
    try:
        return IndexFooter(**{k: _int_field(obj, k) for k in _FOOTER_KEYS})
    except ValueError as exc:
        raise DumpFormatError(f"Invalid footer: {exc}") from exc


def blocks_from_dict(obj: Dict[str, Any]) -> List[Block]:
    if not isinstance(obj, dict) or not isinstance(obj.get("blocks"), list):
        raise DumpFormatError("Dump must be an object with a 'blocks' list")
    blocks: List[Block] = []
    for raw in obj["blocks"]:
        if not isinstance(raw, dict):
            raise DumpFormatError("Block must be an object")
        offset = _int_field(raw, "offset")
        if offset < 0:
            raise DumpFormatError("Block 'offset' must be >= 0")
        raw_entries = raw.get("entries", [])
        if not isinstance(raw_entries, list):
            raise DumpFormatError("Block 'entries' must be a list")
        footer = footer_from_dict(raw["footer"]) if raw.get("footer") is not None else None
        entries = tuple(entry_from_dict(e, offset) for e in raw_entries)
        blocks.append(Block(offset=offset, entries=entries, footer=footer))
    return blocks


def load_blocks(path: str) -> List[Block]:
    with open(path, "r", encoding="utf-8") as fh:
        try:
            obj = json.load(fh)
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError
            raise DumpFormatError(f"{path}: not a valid UTF-8 JSON dump ({exc})") from exc
    return blocks_from_dict(obj)
