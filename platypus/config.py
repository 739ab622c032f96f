"""
Runtime configuration for Platypus.

Settings come from environment variables (optionally via a .env file at the
project root), with defaults matching a local checkout.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_CONTENT_DIR = PROJECT_ROOT / "content"
DEFAULT_PROGRESS_DIR = Path.home() / ".platypus"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
DEFAULT_BASE_PATH = "/course"
SUMMER_SCHOOL_BASE_PATH = "/summer-school"
DEFAULT_TEXTBOOK_HOME = "/textbook"


class Settings(BaseModel):
    content_dir: Path = DEFAULT_CONTENT_DIR
    progress_db: Path = DEFAULT_PROGRESS_DB
    default_locale: str = "en"
    analytics_enabled: bool = True


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        env_file: Optional .env file (default: PROJECT_ROOT/.env)
    """
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    return Settings(
        content_dir=Path(os.getenv("PLATYPUS_CONTENT_DIR", str(DEFAULT_CONTENT_DIR))).expanduser(),
        progress_db=Path(os.getenv("PLATYPUS_PROGRESS_DB", str(DEFAULT_PROGRESS_DB))).expanduser(),
        default_locale=os.getenv("PLATYPUS_DEFAULT_LOCALE", "en"),
        analytics_enabled=_env_flag(os.getenv("PLATYPUS_ANALYTICS"), True),
    )
