#!/usr/bin/env python3
"""
check_content.py - Validate course content against the table of contents.

Loads every course in every locale and reports:
- Files that fail schema validation
- Learning-path successors and TOC chapter entries naming unknown sections
- Glossary terms referenced without a definition

Usage:
  python scripts/check_content.py
  python scripts/check_content.py --content content --lookups content --locale en
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from platypus.classroom import (
    ContentStore,
    CourseValidationError,
    aggregate,
    classify,
    find_broken_links,
)
from platypus.config import load_settings
from platypus.utils import load_lookups

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def check_course(store: ContentStore, lookups, course_id: str, locale: str) -> int:
    """Check one course in one locale. Returns the number of problems found."""
    try:
        course = store.get_course(course_id, locale)
    except CourseValidationError as e:
        logger.error(f"  {course_id} [{locale}]: {e}")
        return 1
    if course is None or course.locale != locale:
        return 0  # missing translation, checked under the default locale

    problems = 0
    for source, target in find_broken_links(course):
        logger.warning(f"  {course_id} [{course.locale}]: {source} -> unknown section {target!r}")
        problems += 1

    referenced = {term for s in course.sections for term in s.glossary}
    defined = aggregate(course, lookups.glossary_for(course.locale))
    for term in sorted(referenced - set(defined)):
        logger.warning(f"  {course_id} [{course.locale}]: glossary term {term!r} has no definition")
        problems += 1

    logger.info(
        f"  {course_id} [{course.locale}]: {len(course.sections)} sections, "
        f"{classify(course).value}, {len(defined)} glossary terms"
    )
    return problems


def check_content(content_dir: Path, lookups_root: Path, locales=None, default_locale: str = "en") -> int:
    """Check every course under content_dir. Returns the number of problems found."""
    toc_path = lookups_root / "toc.yaml"
    if not toc_path.exists():
        logger.error(f"Table of contents not found: {toc_path}")
        return 1

    logger.info(f"Loading lookups from {lookups_root}...")
    lookups = load_lookups(lookups_root, locales)

    store = ContentStore(content_dir, toc=lookups.toc, default_locale=default_locale)
    locales = locales or sorted(lookups.glossary) or [default_locale]

    problems = 0
    for course_id in store.list_course_ids():
        logger.info(f"Checking {course_id}...")
        for locale in locales:
            problems += check_course(store, lookups, course_id, locale)
    return problems


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Validate course content, TOC and glossary references",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--content",
        type=Path,
        default=settings.content_dir,
        help="Path to content directory"
    )
    parser.add_argument(
        "--lookups",
        type=Path,
        default=None,
        help="Path to directory with toc.yaml and translations/ (default: content directory)"
    )
    parser.add_argument(
        "--locale",
        action="append",
        default=None,
        help="Locale to check (repeatable; default: every locale found)"
    )

    args = parser.parse_args()
    lookups_root = args.lookups or args.content

    problems = check_content(args.content, lookups_root, args.locale, settings.default_locale)
    if problems:
        logger.error(f"Found {problems} problem(s)")
        sys.exit(1)
    logger.info("Content OK")


if __name__ == "__main__":
    main()
