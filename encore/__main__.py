"""
Encore - Entry Point

Run with: python -m encore scan [ROOTS...]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from encore import __version__
from encore.config import LibraryConfig, load_library_config
from encore.core.fingerprint import find_duplicate_files
from encore.core.library import MusicLibrary
from encore.core.library_db import LibraryDb
from encore.core.scanner import ScanResult


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="encore",
        description="Encore - import a music collection into a deduplicated catalog",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a library.toml (default: packaged defaults)",
    )

    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Catalog database file (overrides the configured path)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    scan = commands.add_parser("scan", help="Import library roots into the catalog")
    scan.add_argument(
        "roots",
        nargs="*",
        type=Path,
        help="Library roots to scan (default: configured library_roots)",
    )

    duplicates = commands.add_parser(
        "duplicates", help="List byte-identical audio files without importing anything"
    )
    duplicates.add_argument("roots", nargs="+", type=Path, help="Directories to inspect")

    return parser.parse_args(argv)


def print_scan_result(result: ScanResult) -> None:
    print(
        f"Added {result.tracks_added} tracks "
        f"({len(result.errors)} skipped) in {result.duration.total_seconds():.2f}s"
    )
    for error in result.errors:
        print(f"  skipped: {error}")


async def run_scan(config: LibraryConfig, roots: list[Path]) -> ScanResult:
    """Open the catalog, scan `roots` (or the configured roots) and close it again."""
    db = LibraryDb(config.database_path)
    await db.open()
    try:
        library = MusicLibrary(db=db)
        await library.initialize()
        return await library.scan_all_libraries(roots or config.library_roots)
    finally:
        await db.close()


def run_duplicates(roots: list[Path]) -> int:
    groups = find_duplicate_files(roots)
    for digest, paths in groups.items():
        print(digest)
        for path in paths:
            print(f"  {path}")
    print(f"{len(groups)} duplicate groups")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)

    try:
        if args.command == "duplicates":
            return run_duplicates(args.roots)

        config = load_library_config(args.config)
        if args.db is not None:
            config.database_path = args.db
        if not args.roots and not config.library_roots:
            logger.warning("No library roots given or configured; nothing to scan")

        result = asyncio.run(run_scan(config, args.roots))
    except KeyboardInterrupt:
        logger.info("Scan interrupted by user")
        return 1
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        return 1

    print_scan_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
