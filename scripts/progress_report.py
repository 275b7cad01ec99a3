#!/usr/bin/env python3
"""
progress_report.py - Print the saved learner progress.

Reads the progress blob from the configured SQLite store and prints the
course tree with availability, XP, streaks and achievements. Read-only.

Usage:
  python scripts/progress_report.py
  python scripts/progress_report.py --db ~/.kudzidza/progress.db --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from kudzidza.classroom import (
    ContentCatalog,
    Navigator,
    ProgressTracker,
    SqliteProgressStore,
)
from kudzidza.config import get_settings, setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Show saved Kudzidza progress")
    parser.add_argument("--db", type=Path, default=settings.progress_db, help="Progress database path")
    parser.add_argument("--course", type=Path, default=settings.course_path, help="Course YAML file")
    parser.add_argument("--key", default=settings.progress_key, help="Store key of the progress record")
    parser.add_argument("--json", action="store_true", help="Print the raw progress record as JSON")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)

    if not args.db.exists():
        logger.error(f"Progress database not found: {args.db}")
        return 1

    catalog = ContentCatalog.from_yaml(args.course)
    tracker = ProgressTracker(catalog, SqliteProgressStore(args.db), key=args.key)

    if args.json:
        print(json.dumps(tracker.progress.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return 0

    nav = Navigator(tracker)
    stats = nav.get_progress_summary()

    print(f"Course:     {catalog.title}")
    print(f"Completed:  {stats['completed']}/{stats['total_lessons']} lessons ({stats['completion_percent']}%)")
    print(f"Total XP:   {stats['total_xp']}")
    print(f"Streak:     {stats['current_streak']} (longest {stats['longest_streak']})")
    print(f"Last study: {stats['last_study_date'] or 'never'}")
    print()

    for nav_unit in nav.get_navigation_tree():
        print(f"{nav_unit.title} ({nav_unit.completed_count}/{nav_unit.total_count})")
        for nav_lesson in nav_unit.lessons:
            lesson = nav_lesson.lesson
            marker = " <- next" if nav_lesson.is_recommended else ""
            print(f"  {nav.get_status_indicator(lesson)} {lesson.lesson_number}. {lesson.title}{marker}")
    print()

    achievements = tracker.progress.achievements
    print(f"Achievements ({len(achievements)}):")
    for achievement in achievements:
        print(f"  - {achievement.title}: {achievement.description}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
