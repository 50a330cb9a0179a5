"""Preview a CSV import from the command line.

Usage:
    importbox-preview FILE --entity ENTITY [--existing JSON] [--mapping JSON]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from importbox.config import settings
from importbox.schemas.import_schemas import EntityType
from importbox.services.import_service import decode_csv_bytes, preview_import

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Send log output to stderr so stdout stays valid JSON."""
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_json_file(path: Path) -> Any:
    """Read and decode a JSON file."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Preview a CSV import: column mapping, parsed records and duplicates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s statement.csv                           Preview bank transactions
  %(prog)s leads.csv -e lead --existing leads.json Check leads against stored ones
  %(prog)s deals.csv -e opportunity --mapping m.json
        """,
    )
    parser.add_argument("file", type=Path, help="CSV file to preview")
    parser.add_argument(
        "--entity", "-e",
        choices=[entity.value for entity in EntityType],
        default=EntityType.TRANSACTION.value,
        help="Record type the rows describe (default: transaction)",
    )
    parser.add_argument(
        "--existing",
        type=Path,
        help="JSON list of stored records (transactions or leads) to check against",
    )
    parser.add_argument(
        "--mapping",
        type=Path,
        help="JSON object of field -> header to use instead of auto-detection",
    )
    parser.add_argument(
        "--max-rows",
        type=int,
        help="Row cap (default: import.max_rows from config)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indent (default: 2)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger.debug("Previewing %s as %s", args.file, args.entity)

    try:
        text = decode_csv_bytes(args.file.read_bytes())
        existing = load_json_file(args.existing) if args.existing else []
        mapping = load_json_file(args.mapping) if args.mapping else None
    except OSError as e:
        print(f"Error: cannot read input file: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: invalid JSON: {e}", file=sys.stderr)
        return 1

    if not isinstance(existing, list):
        print("Error: --existing must contain a JSON list", file=sys.stderr)
        return 1
    if mapping is not None and not isinstance(mapping, dict):
        print("Error: --mapping must contain a JSON object", file=sys.stderr)
        return 1

    try:
        preview = preview_import(
            text,
            args.entity,
            existing=existing,
            mapping=mapping,
            max_rows=args.max_rows,
        )
    except ValidationError as e:
        print(f"Error: invalid existing records: {e}", file=sys.stderr)
        return 1
    print(preview.model_dump_json(indent=args.indent))

    if not preview.mapping_valid:
        for error in preview.mapping_errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
