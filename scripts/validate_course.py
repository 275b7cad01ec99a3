#!/usr/bin/env python3
"""
validate_course.py - Check a course YAML file before shipping it.

Loads the course through ContentCatalog (schema validation, duplicate ids and
positions) and then reports authoring issues such as options missing the
correct answer or gaps in lesson numbering.

Usage:
  python scripts/validate_course.py
  python scripts/validate_course.py --course path/to/course.yaml --strict
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from kudzidza.classroom import ContentCatalog
from kudzidza.config import get_settings, setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate a Kudzidza course file",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--course",
        type=Path,
        default=None,
        help="Course YAML file (default: KUDZIDZA_COURSE or bundled course)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when authoring issues are found"
    )
    args = parser.parse_args(argv)

    setup_logging()
    course_path = args.course or get_settings().course_path

    logger.info(f"Loading course from {course_path}...")
    try:
        catalog = ContentCatalog.from_yaml(course_path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Course failed to load: {e}")
        return 2

    units = catalog.get_units()
    logger.info(f"  Units: {len(units)}")
    for unit in units:
        lessons = catalog.get_lessons_for_unit(unit)
        total_xp = sum(lesson.xp_reward for lesson in lessons)
        logger.info(f"  Unit {unit}: {len(lessons)} lessons, {total_xp} XP")

    logger.info("Running integrity checks...")
    issues = catalog.find_content_issues()
    if issues:
        logger.warning(f"Found {len(issues)} integrity issues:")
        for issue in issues:
            logger.warning(f"  - {issue}")
        return 1 if args.strict else 0

    logger.info("  All integrity checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
