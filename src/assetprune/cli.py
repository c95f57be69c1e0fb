from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from assetprune import __version__
from assetprune.aliases import DEFAULT_CONFIG_NAME, resolve_aliases
from assetprune.analyzer import STATUS_UNUSED, analyze, render_json, render_listing
from assetprune.models import CandidateFile, ScanConfig

EXIT_CLEAN = 0
EXIT_UNUSED_FOUND = 1
EXIT_SCAN_FAILED = 2

RED_BOLD = "\x1b[31m\x1b[1m"
GREEN = "\x1b[32m"
RESET = "\x1b[0m"


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="assetprune",
        description=(
            "Find component and image files that no .ts or .svelte source "
            "mentions by name. Exits 1 when unused files are found, 2 when the "
            "scan fails."
        ),
    )
    parser.add_argument("--path", default="src", help="Directory to scan (default: src)")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_NAME,
        help="tsconfig-style file holding compilerOptions.paths aliases",
    )
    parser.add_argument(
        "--exclude-dir",
        action="append",
        default=[],
        help="Skip directories whose path contains this text (repeatable)",
    )
    parser.add_argument(
        "--ignore-prefix",
        action="append",
        default=[],
        help="Skip components whose name starts with this text (repeatable)",
    )
    parser.add_argument(
        "--ignore-contains",
        action="append",
        default=[],
        help="Skip components whose name contains this text (repeatable)",
    )
    parser.add_argument(
        "--indexed",
        action="store_true",
        help="Read every source file once instead of re-walking per candidate",
    )
    parser.add_argument("--format", choices=["text", "json"], default="text")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.path)
    if not root.exists() or not root.is_dir():
        raise SystemExit(f"Path does not exist or is not a directory: {root.resolve()}")

    config = ScanConfig().with_overrides(
        ignore_dirs=args.exclude_dir,
        ignore_prefixes=args.ignore_prefix,
        ignore_substrings=args.ignore_contains,
    )
    progress = None
    if args.format == "text":
        progress = _progress_printer(color=not args.no_color)

    try:
        result = analyze(
            root=str(root),
            config=config,
            aliases=resolve_aliases(args.config),
            indexed=args.indexed,
            progress=progress,
        )
    except OSError as exc:
        print(f"Scan aborted: {exc}", file=sys.stderr)
        return EXIT_SCAN_FAILED

    if args.format == "json":
        print(render_json(result), end="")
    else:
        print()
        print(render_listing(result), end="")
    return EXIT_UNUSED_FOUND if result.unused else EXIT_CLEAN


def _progress_printer(color: bool):
    def emit(candidate: CandidateFile, status: str) -> None:
        if status == STATUS_UNUSED:
            text = _paint("x", RED_BOLD, color)
        else:
            text = _paint("•", GREEN, color)
        print(text, end="", flush=True)

    return emit


def _paint(text: str, code: str, color: bool) -> str:
    if not color:
        return text
    return f"{code}{text}{RESET}"


if __name__ == "__main__":
    raise SystemExit(main())
