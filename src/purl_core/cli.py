"""
Command line interface for parsing, canonicalizing and validating purls.

Usage:
    purl parse pkg:maven/org.apache.commons/io@1.3.4
    purl canonicalize --coordinates < purls.txt
    purl validate pkg:pypi/Django_package@1.0
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Iterator, Optional, Sequence, TextIO

from purl_core.api.models import PurlComponentsModel
from purl_core.config import get_config
from purl_core.errors import PurlError
from purl_core.normalization import PackageIdentifier, parse

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    config = get_config()
    parser = argparse.ArgumentParser(
        prog="purl",
        description="Parse, canonicalize and validate package URLs (purls).",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help="Logging level (defaults to config).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser(
        "parse", help="Print the components of each purl as JSON (one object per line)."
    )
    parse_cmd.add_argument("purls", nargs="*", help="purls to parse (default: stdin).")

    canonical_cmd = subparsers.add_parser(
        "canonicalize", help="Print the canonical form of each purl."
    )
    canonical_cmd.add_argument(
        "--coordinates",
        action="store_true",
        help="Print only type/namespace/name/version.",
    )
    canonical_cmd.add_argument("purls", nargs="*", help="purls to canonicalize (default: stdin).")

    validate_cmd = subparsers.add_parser(
        "validate", help="Report whether each purl is valid."
    )
    validate_cmd.add_argument("purls", nargs="*", help="purls to validate (default: stdin).")

    return parser


def iter_inputs(purls: Sequence[str], stdin: TextIO) -> Iterator[str]:
    """
    Yield purls from arguments, or from stdin when none are given.

    Blank lines and lines starting with '#' are skipped.
    """
    lines: Iterable[str] = purls if purls else stdin
    for raw_line in lines:
        entry = raw_line.strip()
        if not entry or entry.startswith("#"):
            continue
        yield entry


def _format(command: str, identifier: PackageIdentifier, coordinates: bool) -> str:
    if command == "parse":
        return PurlComponentsModel.from_identifier(identifier).model_dump_json()
    if command == "validate":
        return f"OK {identifier.canonical}"
    return identifier.coordinates if coordinates else identifier.canonical


def run(
    args: argparse.Namespace,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Execute a parsed command.

    Returns:
        Exit status: 1 if any purl was invalid, otherwise 0
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    failures = 0
    coordinates = getattr(args, "coordinates", False)

    for entry in iter_inputs(args.purls, stdin):
        try:
            identifier = parse(entry)
        except PurlError as e:
            failures += 1
            logger.warning("Rejected purl '%s': %s", entry, e)
            if args.command == "validate":
                print(f"INVALID {entry}: {e}", file=stdout)
            continue

        print(_format(args.command, identifier, coordinates), file=stdout)

    if failures:
        logger.info("%d purl(s) failed validation", failures)
    return 1 if failures else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
