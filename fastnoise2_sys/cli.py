# SPDX-License-Identifier: MIT
"""Command-line interface for fastnoise2_sys."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from fastnoise2_sys.acquire import BuildResult, acquire
from fastnoise2_sys.configure.environment import (
    JOBS_KEY,
    OUT_DIR_KEY,
    read_environment,
)
from fastnoise2_sys.core.errors import FastNoiseBuildError

logger = logging.getLogger("fastnoise2_sys")

LOG_FORMAT = "%(levelname)s: %(message)s"
DEBUG_LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route strategy and tool messages to stderr.

    Warnings are always shown, since strategy selection reports through
    them. ``--verbose`` adds progress messages and ``--debug`` adds the
    logger name and every external command.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format=DEBUG_LOG_FORMAT)
    else:
        level = logging.INFO if verbose else logging.WARNING
        logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Split environment overrides from other positional arguments.

    ``FASTNOISE2_LIB_DIR=/opt/lib`` becomes an override; anything without
    a key, or starting with ``-``, is returned unparsed.
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        key, sep, value = arg.partition("=")
        if sep and key and not arg.startswith("-"):
            variables[key] = value
        else:
            remaining.append(arg)

    return variables, remaining


def build_environ(args: argparse.Namespace) -> dict[str, str]:
    """Merge the process environment with command-line overrides.

    Precedence (highest to lowest):
        1. Options such as --out-dir and --jobs
        2. KEY=value arguments
        3. The process environment
    """
    environ = dict(os.environ)
    variables, _ = parse_variables(args.variables)
    environ.update(variables)
    if args.out_dir:
        environ[OUT_DIR_KEY] = args.out_dir
    if args.jobs:
        environ[JOBS_KEY] = str(args.jobs)
    return environ


def format_result(result: BuildResult, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(result.to_dict(), indent=2)
    lines = result.directives.as_lines()
    lines.append(f"bindings={result.bindings.path}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the fastnoise2-sys CLI."""
    parser = argparse.ArgumentParser(
        prog="fastnoise2-sys",
        description="Obtain the FastNoise2 native library and its cffi bindings.",
        epilog="The target triple is read from FASTNOISE2_TARGET_ARCH, "
        "FASTNOISE2_TARGET_OS and FASTNOISE2_TARGET_ENV.",
    )
    from fastnoise2_sys import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument(
        "-B",
        "--out-dir",
        help="Output directory (default: $FASTNOISE2_OUT_DIR or build/fastnoise2)",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, help="Number of parallel jobs for source builds"
    )
    parser.add_argument(
        "--format",
        choices=("lines", "json"),
        default="lines",
        help="Output format (default: lines)",
    )
    parser.add_argument(
        "variables",
        nargs="*",
        help="Environment overrides (KEY=value)",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)

    _, remaining = parse_variables(args.variables)
    if remaining:
        parser.error(f"expected KEY=value, got: {' '.join(remaining)}")

    try:
        target, config = read_environment(build_environ(args))
        result = acquire(target, config)
    except FastNoiseBuildError as e:
        logger.error("%s", e)
        return 1

    print(format_result(result, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
