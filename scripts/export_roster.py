#!/usr/bin/env python3
"""
export_roster.py - Export the device's student roster.

Reads the local storage file used by the app and writes either the full
JSON export (same format as the Admin tab) or a CSV progress summary.

Usage:
  python scripts/export_roster.py --output roster.json
  python scripts/export_roster.py --format csv --output roster.csv --db ~/.regtracker/tracker.db
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from regtracker.config import LOG_FORMAT, get_settings
from regtracker.viewer import students_to_frame
from regtracker.workflow import LocalStorage, StudentStore

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT
)
logger = logging.getLogger(__name__)


def export_roster(db_path: Path, output: Path, fmt: str) -> int:
    """
    Write the roster stored at db_path to output.

    Returns:
        Number of students exported
    """
    store = StudentStore(LocalStorage(db_path))
    output.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "csv":
        students_to_frame(store.students).to_csv(output, index=False)
    else:
        output.write_text(store.export_json(), encoding="utf-8")

    return len(store)


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Export the registration tracker roster",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=settings.db_path,
        help="Path to the tracker storage file"
    )
    parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Output file path"
    )
    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Export format (default: json)"
    )

    args = parser.parse_args()

    if not args.db.exists():
        logger.error(f"Storage file not found: {args.db}")
        sys.exit(1)

    count = export_roster(args.db, args.output, args.format)
    logger.info(f"Exported {count} students to {args.output}")


if __name__ == "__main__":
    main()
