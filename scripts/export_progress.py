#!/usr/bin/env python3
"""
export_progress.py - Export a learner's merged progress as JSON.

Folds every stored progress document of the user against the current
course content, the same structure the account page receives.

Usage:
  python scripts/export_progress.py USER_ID
  python scripts/export_progress.py USER_ID --db ~/.platypus/progress.db --output progress.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from platypus.classroom import ContentStore, ProgressStore, merge_account
from platypus.config import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def export_progress(content_dir: Path, db_path: Path, user_id: str, default_locale: str = "en") -> dict:
    """Merge every stored progress document of a user against current content."""
    store = ContentStore(content_dir, default_locale=default_locale)
    progress_store = ProgressStore(db_path)

    documents = progress_store.find_all_progress(user_id)
    logger.info(f"Found {len(documents)} progress documents for {user_id}")

    return merge_account(documents, store.load_content_shape)


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Export merged account progress for one user",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("user_id", help="User whose progress to export")
    parser.add_argument(
        "--content",
        type=Path,
        default=settings.content_dir,
        help="Path to content directory"
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=settings.progress_db,
        help="Path to progress database"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)"
    )

    args = parser.parse_args()

    progress = export_progress(args.content, args.db, args.user_id, settings.default_locale)
    output = json.dumps(progress, ensure_ascii=False, indent=2)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info(f"Saved progress to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
