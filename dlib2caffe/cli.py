# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Command line entry point: convert dlib net_to_xml() files into Caffe scripts."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from .config import load_config
from .errors import ConversionError
from .layers import get_replacement_suggestion, get_supported_input_types, get_supported_layer_types
from .pipeline import convert_file

logger = logging.getLogger(__name__)

USAGE_TEXT = (
    "Give this program an xml file generated by dlib::net_to_xml() and it will\n"
    "convert it into a python file that outputs a caffe model containing the dlib model."
)

ERROR_BANNER = "*************** ERROR CONVERTING TO CAFFE ***************"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dlib2caffe",
        description=USAGE_TEXT,
    )
    parser.add_argument("xml_files", nargs="*", help="dlib network XML files to convert.")
    parser.add_argument("--config", type=str, default=None, help="Optional YAML file with converter settings.")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a converter setting, e.g. --set float_precision=7 (repeatable).",
    )
    parser.add_argument("--output-dir", type=str, default=None, help="Write generated scripts into this directory.")
    parser.add_argument(
        "--list-supported-types",
        action="store_true",
        help="Print convertible dlib layer names and exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _print_supported_types() -> None:
    print("Supported dlib input layers:")
    for name in get_supported_input_types():
        print(f"  - {name}")
    print("Supported dlib computational layers:")
    for name in get_supported_layer_types():
        print(f"  - {name}")
    for name in ("bn_con", "bn_fc"):
        print(f"Unsupported: {name}. {get_replacement_suggestion(name)}")


def convert_files(paths: Sequence[str], config) -> List[str]:
    """Convert every path independently; return the paths that failed."""
    failed: List[str] = []
    for path in paths:
        try:
            convert_file(path, config)
        except (ConversionError, OSError) as exc:
            logger.debug("Conversion of %s failed", path, exc_info=True)
            print(f"\n\n{ERROR_BANNER}\n{path}: {exc}")
            failed.append(path)
        except Exception as exc:
            logger.exception("Unexpected error while converting %s", path)
            print(f"\n\n{ERROR_BANNER}\n{path}: {type(exc).__name__}: {exc}")
            failed.append(path)
    return failed


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    if args.list_supported_types:
        _print_supported_types()
        return 0

    if not args.xml_files:
        print(USAGE_TEXT)
        return 0

    overrides = list(args.overrides)
    if args.output_dir:
        overrides.append(f"output_dir={args.output_dir}")
    try:
        config = load_config(args.config, overrides)
    except ConversionError as exc:
        print(f"ERROR: {exc}")
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else str(config.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    failed = convert_files(args.xml_files, config)
    if failed:
        print(f"\n{len(failed)} of {len(args.xml_files)} file(s) failed to convert.")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
