"""
Runtime settings for the registration tracker.

Values come from environment variables, optionally loaded from a .env file
in the project root.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from regtracker.workflow.staff import DEFAULT_STAFF_PIN
from regtracker.workflow.store import DEFAULT_STORAGE_DB


PROJECT_ROOT = Path(__file__).parent.parent

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    db_path: Path
    default_pin: str
    log_level: str


def get_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from the environment (after reading .env, if present)."""
    load_dotenv(env_file or PROJECT_ROOT / ".env", override=False)

    db_path = os.environ.get("REGTRACKER_DB_PATH", "").strip()
    return Settings(
        db_path=Path(db_path).expanduser() if db_path else DEFAULT_STORAGE_DB,
        default_pin=os.environ.get("REGTRACKER_DEFAULT_PIN", "").strip() or DEFAULT_STAFF_PIN,
        log_level=os.environ.get("REGTRACKER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def setup_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
    )
