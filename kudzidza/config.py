"""
Runtime configuration for Kudzidza.

Values come from environment variables, optionally seeded from a .env file
in the project root:

    KUDZIDZA_HOME           data directory (default: ~/.kudzidza)
    KUDZIDZA_PROGRESS_DB    progress database (default: $KUDZIDZA_HOME/progress.db)
    KUDZIDZA_COURSE         course YAML file (default: bundled course.yaml)
    KUDZIDZA_PROGRESS_KEY   store key for the progress blob (default: userProgress)
    KUDZIDZA_LOG_LEVEL      logging level name (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from kudzidza.classroom.store import DEFAULT_PROGRESS_KEY
from kudzidza.utils.content_loader import DEFAULT_COURSE_PATH


PROJECT_ROOT = Path(__file__).parent.parent
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    home: Path
    progress_db: Path
    course_path: Path
    progress_key: str
    log_level: str

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> "Settings":
        """Build settings from a mapping (default: os.environ)."""
        env = os.environ if env is None else env
        home = Path(env.get("KUDZIDZA_HOME") or Path.home() / ".kudzidza").expanduser()
        progress_db = Path(env.get("KUDZIDZA_PROGRESS_DB") or home / "progress.db").expanduser()
        course_path = Path(env.get("KUDZIDZA_COURSE") or DEFAULT_COURSE_PATH).expanduser()
        return cls(
            home=home,
            progress_db=progress_db,
            course_path=course_path,
            progress_key=env.get("KUDZIDZA_PROGRESS_KEY") or DEFAULT_PROGRESS_KEY,
            log_level=(env.get("KUDZIDZA_LOG_LEVEL") or "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    """Load .env once and return settings from the environment."""
    load_dotenv(PROJECT_ROOT / ".env")
    return Settings.from_env()


def setup_logging(level: str | None = None):
    """Configure root logging for scripts and the app."""
    logging.basicConfig(
        level=getattr(logging, (level or get_settings().log_level), logging.INFO),
        format=LOG_FORMAT,
    )
