# kernel_wire/cli.py
# SPDX-License-Identifier: Apache-2.0
"""
kernel-wire CLI

Validate captured wire payloads from the command line, and list or export the
JSON Schema documents derived from the validators.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from kernel_wire.errors import ValidationFailure
from kernel_wire.messages import validate_kernel_message
from kernel_wire.models import (
    validate_checkpoint_model,
    validate_contents_model,
    validate_kernel_id,
    validate_kernel_spec,
    validate_session_id,
)
from kernel_wire.schema_registry import export_schemas, list_schemas

logger = logging.getLogger(__name__)

VALIDATORS: Dict[str, Callable[[Any], None]] = {
    "message": validate_kernel_message,
    "kernel-id": validate_kernel_id,
    "session-id": validate_session_id,
    "kernel-spec": validate_kernel_spec,
    "contents": validate_contents_model,
    "checkpoint": validate_checkpoint_model,
}

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


# --------------------------------------------------------------------------- #
# Internal helpers
# --------------------------------------------------------------------------- #

def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _cmd_validate(args: argparse.Namespace) -> int:
    try:
        candidate = _load_json(args.json_file)
    except (OSError, ValueError, RecursionError) as e:
        print(f"error: cannot read {args.json_file}: {e}", file=sys.stderr)
        return EXIT_UNREADABLE

    validator = VALIDATORS[args.kind]
    try:
        if args.kind == "message" and args.strict_channels:
            validate_kernel_message(candidate, strict_channels=True)
        else:
            validator(candidate)
    except ValidationFailure as e:
        logger.warning(f"{args.json_file}: invalid {args.kind}")
        print(f"invalid {args.kind}: {e}", file=sys.stderr)
        return EXIT_INVALID

    if not args.quiet:
        print(f"{args.json_file}: valid {args.kind}")
    return EXIT_OK


def _cmd_schemas(args: argparse.Namespace) -> int:
    if args.export:
        written = export_schemas(Path(args.export))
        if not args.quiet:
            print(f"Exported {len(written)} schemas to {args.export}")
        return EXIT_OK

    for name, sid in sorted(list_schemas().items()):
        print(f"{name}\t{sid}")
    return EXIT_OK


# --------------------------------------------------------------------------- #
# main
# --------------------------------------------------------------------------- #

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kernel-wire",
        description="kernel-wire - structural validation for kernel protocol payloads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kernel-wire validate message captured_msg.json
  kernel-wire validate kernel-spec python3.json
  cat session.json | kernel-wire validate session-id -
  kernel-wire schemas --export build/schemas

Configuration (environment variables):
  KERNEL_WIRE_STRICT_CHANNELS=true       Reject unknown channel names
  KERNEL_WIRE_SCHEMA_BASE_URL=<url>      $id prefix for exported schemas
        """.strip(),
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Only report failures",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="command to execute",
        metavar="COMMAND",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a JSON payload",
    )
    validate_parser.add_argument("kind", choices=sorted(VALIDATORS), help="Record kind")
    validate_parser.add_argument("json_file", help="Path to JSON document, or - for stdin")
    validate_parser.add_argument(
        "--strict-channels", action="store_true",
        help="Reject messages on unknown channels (message kind only)",
    )
    validate_parser.set_defaults(handler=_cmd_validate)

    schemas_parser = subparsers.add_parser(
        "schemas",
        help="List or export the JSON Schema documents",
    )
    schemas_parser.add_argument(
        "--export", metavar="DIR",
        help="Write every schema to DIR instead of listing them",
    )
    schemas_parser.set_defaults(handler=_cmd_schemas)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
