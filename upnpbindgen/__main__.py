"""
upnpbindgen command line

Usage:
    python -m upnpbindgen
    python -m upnpbindgen --address http://192.168.178.1:49000 -o ./bindings
    python -m upnpbindgen --document tr64desc.xml:tr064 --collect-errors
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .codegen.traversal import generate
from .errors import BindgenError
from .settings import ErrorPolicy, RootDocument, Settings

logger = logging.getLogger("upnpbindgen")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="upnpbindgen",
        description="Generate typed request/response bindings from a device's UPnP descriptions",
    )
    parser.add_argument("--address", help="Device base url (default: http://fritz.box:49000)")
    parser.add_argument(
        "-o", "--output", type=Path, help="Output directory (default: ./output)"
    )
    parser.add_argument(
        "--document",
        action="append",
        type=RootDocument.parse,
        metavar="PATH[:PREFIX]",
        help="Root description to generate from, may be repeated",
    )
    parser.add_argument(
        "--collect-errors",
        action="store_true",
        help="Report every schema error instead of stopping at the first one",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.address:
        overrides["address"] = args.address
    if args.output:
        overrides["output_path"] = args.output
    if args.document:
        overrides["documents"] = args.document
    if args.collect_errors:
        overrides["error_policy"] = ErrorPolicy.COLLECT
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        settings = load_settings(args)
    except ValidationError as exc:
        logger.error("invalid settings: %s", exc)
        return 1

    try:
        results = asyncio.run(generate(settings))
    except BindgenError as exc:
        logger.error("generation failed, nothing written: %s", exc)
        return 1

    for result in results:
        logger.info(
            "%s: %d services, %d files",
            result.document.path,
            len(result.bindings.services),
            len(result.artifacts),
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
