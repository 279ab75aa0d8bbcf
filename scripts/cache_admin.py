"""
CLI utility for committed cache management.

Usage:
    python scripts/cache_admin.py --cache-dir tmp/cache --stats
    python scripts/cache_admin.py --cache-dir tmp/cache --delimiter=--- --list
    python scripts/cache_admin.py --cache-dir tmp/cache --read user:123
    python scripts/cache_admin.py --cache-dir tmp/cache --delete user:123
    python scripts/cache_admin.py --cache-dir tmp/cache --clear
"""

import argparse
import logging
import sys
from pathlib import Path

from committed_cache.config.settings import StoreSettings
from committed_cache.persist import FileStore


def format_bytes(bytes_val: float) -> str:
    """Format bytes as human-readable string."""
    for unit in ["B", "KB", "MB", "GB"]:
        if bytes_val < 1024:
            return f"{bytes_val:.1f} {unit}"
        bytes_val /= 1024
    return f"{bytes_val:.1f} TB"


def show_stats(store: FileStore) -> int:
    """Display cache statistics."""
    stats = store.stats()

    print(f"📊 Cache Statistics: {store.cache_path}\n")
    print(f"{'Mode':<15} {stats['mode']:>15}")
    print(f"{'Entries':<15} {stats['entries']:>15,}")
    print(f"{'Files':<15} {stats['files']:>15,}")
    print(f"{'Size':<15} {format_bytes(stats['total_bytes']):>15}")
    print()
    return 0


def list_keys(store: FileStore) -> int:
    """Print every stored key, one per line."""
    for key in store.keys():
        print(key)
    return 0


def read_key(store: FileStore, key: str) -> int:
    """Print the raw value stored for a key."""
    data = store.read(key)
    if data is None:
        print(f"❌ No entry for key: {key}")
        return 1

    sys.stdout.write(data.decode("utf-8", errors="replace"))
    sys.stdout.write("\n")
    return 0


def delete_key(store: FileStore, key: str) -> int:
    """Delete the entry for a key."""
    if store.delete(key):
        print(f"🗑️  Deleted: {key}")
        return 0

    print(f"❌ No entry for key: {key}")
    return 1


def clear_cache(store: FileStore) -> int:
    """Remove every entry under the cache root."""
    entries = store.stats()["entries"]
    store.clear()
    print(f"✅ Cleared {entries:,} entries from {store.cache_path}")
    return 0


# Options whose values may themselves start with "-" (e.g. a "---" delimiter)
VALUE_OPTIONS = ("--delimiter", "--read", "--delete")


def join_option_values(argv: list[str]) -> list[str]:
    """Rewrite `--opt VALUE` as `--opt=VALUE` so argparse accepts dash-led values."""
    joined = []
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in VALUE_OPTIONS and i + 1 < len(argv):
            joined.append(f"{token}={argv[i + 1]}")
            i += 2
            continue
        joined.append(token)
        i += 1
    return joined


def main(argv=None) -> int:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Manage a committed cache directory (stats, list, read, delete, clear)"
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=Path("tmp/cache"),
        help="Cache directory (default: tmp/cache)",
    )
    parser.add_argument(
        "--delimiter",
        type=str,
        default=None,
        help="Key segment delimiter for hierarchical caches",
    )
    parser.add_argument("--stats", action="store_true", help="Show cache statistics")
    parser.add_argument("--list", action="store_true", help="List stored keys")
    parser.add_argument("--read", type=str, metavar="KEY", help="Print the value stored for KEY")
    parser.add_argument("--delete", type=str, metavar="KEY", help="Delete the entry for KEY")
    parser.add_argument("--clear", action="store_true", help="Remove all entries")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(join_option_values(list(argv)))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Require at least one action
    if not (args.stats or args.list or args.clear or args.read is not None or args.delete is not None):
        parser.print_help()
        print("\n❌ Error: Must specify --stats, --list, --read, --delete or --clear")
        return 1

    if not args.cache_dir.is_dir():
        print(f"❌ Cache directory not found: {args.cache_dir}")
        return 1

    try:
        settings = StoreSettings(cache_path=args.cache_dir, addressing_delimiter=args.delimiter)
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    store = FileStore.from_settings(settings)

    exit_code = 0
    if args.stats:
        exit_code |= show_stats(store)
    if args.list:
        exit_code |= list_keys(store)
    if args.read is not None:
        exit_code |= read_key(store, args.read)
    if args.delete is not None:
        exit_code |= delete_key(store, args.delete)
    if args.clear:
        exit_code |= clear_cache(store)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
