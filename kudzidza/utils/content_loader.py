"""
Content loader utility for Kudzidza.

Loads YAML course files from the bundled data/ directory or a custom path.
"""

from pathlib import Path
from typing import Any
import yaml


# Bundled course content (inside the package)
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_COURSE_PATH = DATA_DIR / "course.yaml"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML document that must be a mapping at the top level.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML document

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the document root is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Course file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if not isinstance(document, dict):
        raise ValueError(f"Course file root must be a mapping: {path}")
    return document


def get_available_courses(data_dir: Path | None = None) -> list[str]:
    """
    List all course files in a directory.

    Args:
        data_dir: Optional custom data directory

    Returns:
        List of course names (without .yaml extension)
    """
    dir_path = data_dir or DATA_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))
