# src/main.py - v1
"""CLI entry point: import a directory and print or save its context.

Usage:
    foldercontext import <directory> [options]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from foldercontext.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args)
    except Exception as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="foldercontext",
        description=f"foldercontext v{__version__} - import a folder as conversation context",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_import = subparsers.add_parser(
        "import", help="Import a directory",
    )
    p_import.add_argument("directory", type=Path, help="Directory to import")
    p_import.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the result as JSON to this file",
    )
    p_import.add_argument(
        "--chunk-size", type=int, default=None,
        help="Files processed per batch (default: from settings)",
    )
    p_import.add_argument(
        "--max-total-size", type=int, default=None,
        help="Total byte budget for accepted files (default: from settings)",
    )
    p_import.add_argument(
        "--quiet", action="store_true",
        help="Do not print progress lines",
    )
    p_import.set_defaults(func=_cmd_import)

    return parser


def _load_settings(args: argparse.Namespace):
    from foldercontext.config.settings import load_settings

    overrides: dict[str, object] = {}
    if getattr(args, "chunk_size", None) is not None:
        overrides["chunk_size"] = args.chunk_size
    if getattr(args, "max_total_size", None) is not None:
        overrides["max_total_size"] = args.max_total_size
    return load_settings(**overrides)


async def _cmd_import(args: argparse.Namespace, settings) -> int:
    """Import a directory and report the result."""
    from foldercontext.api.facade import import_directory
    from foldercontext.ingest.errors import ImportProcessingError
    from foldercontext.ingest.progress import (
        CallbackProgressSink,
        NullProgressSink,
        ThrottledProgressSink,
    )

    directory: Path = args.directory
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    if args.quiet:
        sink = NullProgressSink()
    else:
        sink = ThrottledProgressSink(
            CallbackProgressSink(_print_progress),
            interval_s=settings.progress_debounce_ms / 1000,
        )

    try:
        result = await import_directory(directory, settings=settings, progress=sink)
    except ImportProcessingError as exc:
        print(f"Import failed: {exc}", file=sys.stderr)
        return 1

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(
            json.dumps(result.model_dump(mode="json"), indent=2),
            encoding="utf-8",
        )

    summary = result.summary
    print(f"\nImport complete: {result.folder_name}")
    print(f"  Files found:    {summary.total_files}")
    print(f"  Imported:       {summary.file_count}")
    print(f"  Skipped:        {summary.skipped_count}")
    for reason, count in sorted(summary.skipped.items()):
        print(f"    {reason:<12}  {count}")
    print(f"  Total size:     {summary.total_size:,} bytes")
    print(f"  Duration:       {summary.duration_seconds:.2f}s")
    if args.output:
        print(f"  Output:         {args.output}")
    return 0


def _print_progress(progress) -> None:
    print(progress.describe(), file=sys.stderr)


def _setup_logging(settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from foldercontext.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
