"""Generate remapping-processor configs from schema, event and mapping sources."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .errors import IndexforgeError, UnmappedItemsError
from .events import load_event_definitions_from_dir
from .mapping import ensure_events_exist_from_mapping, load_event_table_mappings_from_csv
from .processor import (
    Network,
    format_warnings,
    generate_processor_config,
    load_processor_config_yaml,
    save_processor_config_yaml,
)
from .schema import load_db_schema_from_csv, load_db_schema_into_custom
from .settings import ResolutionPolicy, get_generate_settings

logger = logging.getLogger(__name__)


def _version_number(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def cmd_generate(args: argparse.Namespace) -> int:
    policy = ResolutionPolicy(strict=args.strict, malformed_overrides=args.malformed_overrides)
    db_schema = load_db_schema_from_csv(args.db_schema)
    event_definitions = load_event_definitions_from_dir(args.events_dir)
    event_mapping = load_event_table_mappings_from_csv(args.event_mapping)

    try:
        result = generate_processor_config(
            args.network,
            args.starting_version,
            event_definitions,
            db_schema,
            event_mapping,
            policy=policy,
        )
    except UnmappedItemsError as exc:
        print(format_warnings(exc, header=f"Processor config not generated (strict mode): {exc}"))
        return 1

    save_processor_config_yaml(args.output_file, result.config)
    warnings = format_warnings(result)
    if warnings:
        print(warnings)
    print(f"Processor config generated successfully at {args.output_file}")
    return 0


def cmd_backfill(args: argparse.Namespace) -> int:
    cfg = load_processor_config_yaml(args.config)
    if args.db_schema is not None:
        load_db_schema_into_custom(cfg.custom_config, args.db_schema)
    mapping = load_event_table_mappings_from_csv(args.event_mapping)
    added = ensure_events_exist_from_mapping(cfg.custom_config, mapping)

    output = args.output_file or args.config
    save_processor_config_yaml(output, cfg)
    print(f"Added {len(added)} event placeholder(s) to {output}")
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    print(f"indexforge {__version__}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_generate_settings()

    parser = argparse.ArgumentParser(prog="indexforge", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    generate_parser = sub.add_parser("generate", help="Generate a processor config YAML")
    generate_parser.add_argument(
        "-n",
        "--network",
        type=Network.parse,
        default=settings.network,
        help="target network (mainnet, testnet, devnet, local, custom)",
    )
    generate_parser.add_argument(
        "-s", "--starting-version", type=_version_number, required=True, help="first version to index"
    )
    generate_parser.add_argument(
        "--events-dir", type=Path, default=settings.events_dir, help="directory of *.json event documents"
    )
    generate_parser.add_argument(
        "--db-schema", type=Path, default=settings.db_schema, help="table schema CSV"
    )
    generate_parser.add_argument(
        "--event-mapping", type=Path, default=settings.event_mapping, help="event -> table mapping CSV"
    )
    generate_parser.add_argument(
        "--output-file", type=Path, default=settings.output_file, help="output YAML path"
    )
    generate_parser.add_argument(
        "--strict",
        action="store_true",
        default=settings.strict,
        help="fail instead of warning when anything is left unmapped",
    )
    generate_parser.add_argument(
        "--malformed-overrides",
        choices=["drop", "error"],
        default="drop",
        help="handling of field overrides not written as table::column",
    )
    generate_parser.set_defaults(func=cmd_generate)

    backfill_parser = sub.add_parser(
        "backfill", help="Add empty event entries for mapping keys missing from a config"
    )
    backfill_parser.add_argument("--config", type=Path, required=True, help="processor config YAML")
    backfill_parser.add_argument(
        "--event-mapping", type=Path, default=settings.event_mapping, help="event -> table mapping CSV"
    )
    backfill_parser.add_argument(
        "--db-schema", type=Path, default=None, help="reload db_schema from this CSV"
    )
    backfill_parser.add_argument(
        "--output-file", type=Path, default=None, help="write here instead of overwriting --config"
    )
    backfill_parser.set_defaults(func=cmd_backfill)

    version_parser = sub.add_parser("version", help="Print the indexforge version")
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.func(args))
    except IndexforgeError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
