# snapcat/cli.py

"""Command-line interface: ``snapcat [root] [options]``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from snapcat import __version__
from snapcat.engine import SnapcatStream, snapcat
from snapcat.errors import SnapcatError
from snapcat.models import SnapcatResult
from snapcat.options import BinaryDetection, ExecutionMode, SnapcatBuilder, SnapcatOptions
from snapcat.output import OutputFormat, format_entry_json, format_result

FORMATS = ("json", "tree", "paths", "markdown", "text")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapcat",
        description="Snapshot a directory: tree plus file contents.",
    )
    parser.add_argument("root", nargs="?", default=".", type=Path, help="Root directory (default: current dir)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    out = parser.add_argument_group("Output")
    out.add_argument("--format", choices=FORMATS, default="json", help="Output format (default: json)")
    out.add_argument("-p", "--pretty", action="store_true", help="Indented JSON output")
    out.add_argument("--include-size", action="store_true", help="Report each file's size in bytes")

    filt = parser.add_argument_group("Filtering")
    filt.add_argument(
        "-I",
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        dest="ignore_patterns",
        help="Glob pattern to exclude (repeatable)",
    )
    filt.add_argument("--max-depth", type=int, metavar="N", help="Max directory depth (unlimited if not set)")
    filt.add_argument("--hidden", action="store_true", help="Include hidden files")
    filt.add_argument("--follow-links", action="store_true", help="Follow symbolic links")
    filt.add_argument("--no-gitignore", action="store_true", help="Disable .gitignore handling")

    content = parser.add_argument_group("Content")
    content.add_argument(
        "--binary-detection",
        choices=[m.value for m in BinaryDetection],
        default=BinaryDetection.SIMPLE.value,
        help="Binary detection strategy (default: simple)",
    )
    content.add_argument(
        "--file-size-limit",
        type=int,
        metavar="BYTES",
        help="Files larger than this get a placeholder instead of content",
    )

    run = parser.add_argument_group("Execution")
    run.add_argument(
        "--mode",
        choices=[m.value for m in ExecutionMode],
        default=ExecutionMode.SEQUENTIAL.value,
        help="Capture strategy (default: sequential)",
    )
    run.add_argument("--workers", type=int, metavar="N", help="Worker threads for --mode parallel")
    run.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def options_from_args(args: argparse.Namespace) -> SnapcatOptions:
    builder = (
        SnapcatBuilder(args.root)
        .respect_gitignore(not args.no_gitignore)
        .include_hidden(args.hidden)
        .follow_links(args.follow_links)
        .ignore_patterns(args.ignore_patterns)
        .file_size_limit(args.file_size_limit)
        .binary_detection(args.binary_detection)
        .include_file_size(args.include_size)
        .execution(args.mode)
        .max_workers(args.workers)
    )
    if args.max_depth is not None:
        builder = builder.max_depth(args.max_depth)
    return builder.build()


def write_result(result: SnapcatResult, fmt: str, pretty: bool, out: TextIO) -> None:
    if fmt == "tree":
        out.write(result.tree + "\n")
    elif fmt == "paths":
        for file in result.files:
            out.write(f"{file.path}\n")
    else:
        out.write(format_result(result, OutputFormat(fmt), pretty))
        if fmt == "json":
            out.write("\n")


def run_streaming(options: SnapcatOptions, pretty: bool, out: TextIO) -> int:
    for item in SnapcatStream(options):
        if isinstance(item, SnapcatError):
            print(f"Error: {item}", file=sys.stderr)
            return 1
        out.write(format_entry_json(item, pretty) + "\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = options_from_args(args)
    except ValueError as err:
        parser.error(str(err))

    try:
        if options.execution is ExecutionMode.STREAMING:
            return run_streaming(options, args.pretty, sys.stdout)
        write_result(snapcat(options), args.format, args.pretty, sys.stdout)
    except SnapcatError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
