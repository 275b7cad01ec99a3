"""Kudzidza utilities."""

from .content_loader import (
    DATA_DIR,
    DEFAULT_COURSE_PATH,
    load_yaml_file,
    get_available_courses,
)

__all__ = ["DATA_DIR", "DEFAULT_COURSE_PATH", "load_yaml_file", "get_available_courses"]
