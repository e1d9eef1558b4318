"""Documentation generator for Kubernetes API types.

Reads Go files declaring API structs and writes their reference
documentation as JSON or Markdown:

    k8s-api-docgen -t md -o docs/api.md api/v1/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import DocgenConfig, load_config
from .errors import DocgenError, UnsupportedOutputFormatError
from .extractors import extract_from_paths
from .generators import get_generator
from .validators import compute_coverage, validate_docs

log = logging.getLogger(__name__)

DEFAULT_PATTERN = "*types.go"


def _parse_args(argv: list[str] | None) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(
        prog="k8s-api-docgen",
        description="Generate reference documentation from Go API type declarations.",
    )
    parser.add_argument(
        "-t",
        "--format",
        default="json",
        help='Output format: "json" (default) or "md"',
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write output to the given file instead of stdout",
    )
    parser.add_argument("-c", "--config", type=Path, help="YAML configuration file")
    parser.add_argument(
        "--pattern",
        default=DEFAULT_PATTERN,
        help=f"Files to read from directory arguments (default: {DEFAULT_PATTERN})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a structure or field has no description",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("paths", nargs="+", metavar="PATH", help="Go files or directories")
    return parser, parser.parse_args(argv)


def collect_paths(paths: list[str], pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """Expand directories into their matching files, keeping argument order."""
    collected: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            matches = sorted(p for p in path.glob(pattern) if p.is_file())
            if not matches:
                log.warning("No files matching %s in %s", pattern, path)
            collected.extend(matches)
        else:
            collected.append(path)
    return collected


def write_output(content: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    output.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
    log.info("Wrote %s", output)


def main(argv: list[str] | None = None) -> int:
    """Generate documentation; returns the process exit code."""
    parser, args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Reject unknown formats before doing any work
    try:
        generator = get_generator(args.format)
    except UnsupportedOutputFormatError as e:
        log.error("%s", e)
        parser.print_usage(sys.stderr)
        return 2

    try:
        config = load_config(args.config) if args.config else DocgenConfig()
        paths = collect_paths(args.paths, args.pattern)
        structures = extract_from_paths(paths, config)
    except DocgenError as e:
        log.error("%s", e)
        return 1

    validation = validate_docs(structures, strict=args.strict)
    for warning in validation.warnings:
        log.debug("%s", warning)
    if validation.errors:
        for err in validation.errors:
            log.error("%s", err)
        return 1

    coverage = compute_coverage(structures)
    log.info(
        "Coverage: structures %.0f%%, fields %.0f%%",
        coverage["structures"] * 100,
        coverage["fields"] * 100,
    )

    try:
        content = generator(structures, config)
    except DocgenError as e:
        log.error("%s", e)
        return 1

    try:
        write_output(content, args.output)
    except OSError as e:
        log.error("Cannot write output to %s: %s", args.output, e)
        return 1
    return 0
