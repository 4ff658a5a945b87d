from __future__ import annotations

import argparse
import logging
import stat
import sys
from typing import List, Optional

from siva.dump import load_blocks
from siva.entry import IndexEntry
from siva.errors import EntryCountMismatch, InvalidPatternError, SivaError
from siva.index import FilteredIndex, IndexKind
from siva.ingest import build_index


def _mode_string(mode: int) -> str:
    if not stat.S_IFMT(mode):
        mode |= stat.S_IFREG
    return stat.filemode(mode)


def _format_entry(e: IndexEntry) -> str:
    if e.is_deleted:
        return f"deleted\t-\t-\t{e.name}"
    return f"{_mode_string(e.mode)}\t{e.content_size}\t{e.checksum:08x}\t{e.name}"


def cmd_list(dump: str, *, show_all: bool = False, pattern: Optional[str] = None) -> bool:
    """List index entries of a block dump.

    Args:
        dump: Path to a JSON block dump.
        show_all: List the complete history instead of the live view.
        pattern: Only list entries whose name matches this glob.
    """
    kind = IndexKind.COMPLETE if show_all else IndexKind.FILTERED
    index = build_index(load_blocks(dump), kind)
    entries = index.glob(pattern) if pattern else index.entries()
    for e in entries:
        print(_format_entry(e))
    return True


def cmd_info(dump: str) -> bool:
    blocks = load_blocks(dump)
    complete = build_index(blocks, IndexKind.COMPLETE)
    live = build_index(blocks, IndexKind.FILTERED)
    print(f"Dump: {dump}")
    print(f"  Blocks: {len(blocks)}")
    print(f"  Entries: {len(complete)}")
    print(f"    Live files: {len(live)}")
    if isinstance(live, FilteredIndex):
        print(f"    Deleted names: {len(live.deleted_names)}")
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="siva-index",
        description="Inspect the reconciled index of parsed siva blocks",
        epilog="Input is a JSON block dump; see siva.dump for its layout.",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_list = sub.add_parser("list", help="List live entries (or the full history)")
    ap_list.add_argument("dump", help="JSON block dump path")
    ap_list.add_argument("--all", action="store_true", help="Show every recorded entry, tombstones included")
    ap_list.add_argument("--glob", help="Only entries whose name matches this glob pattern")

    ap_info = sub.add_parser("info", help="Show block and entry counts")
    ap_info.add_argument("dump", help="JSON block dump path")

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    try:
        if args.cmd == "list":
            cmd_list(args.dump, show_all=args.all, pattern=args.glob)
        elif args.cmd == "info":
            cmd_info(args.dump)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except InvalidPatternError as e:
        print(f"Error: invalid glob: {e}", file=sys.stderr)
        sys.exit(2)
    except EntryCountMismatch as e:
        print(f"Error: {e}\nHint: the block reader produced an inconsistent index.", file=sys.stderr)
        sys.exit(2)
    except (SivaError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
