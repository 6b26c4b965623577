from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field


APP_NAME = "RoutinePlanner"

DATA_DIR_ENV = "ROUTINE_PLANNER_DATA_DIR"
REMOTE_URL_ENV = "ROUTINE_PLANNER_REMOTE_URL"
REMOTE_TIMEOUT_ENV = "ROUTINE_PLANNER_REMOTE_TIMEOUT"
LOG_LEVEL_ENV = "ROUTINE_PLANNER_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    data_dir: Path
    remote_url: Optional[str] = None
    remote_timeout: float = Field(default=5.0, gt=0)
    log_level: str = "INFO"


def default_data_dir() -> Path:
    """
    Per-OS user data location, used when no override is set.
    """
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_NAME
    if sys.platform.startswith("win"):
        roaming = os.environ.get("APPDATA")
        return Path(roaming) / APP_NAME if roaming else home / "AppData" / "Roaming" / APP_NAME
    return home / ".local" / "share" / "routine-planner"


def load_config() -> AppConfig:
    """Build the app configuration from environment variables."""
    override = os.environ.get(DATA_DIR_ENV, "").strip()
    data_dir = Path(override).expanduser() if override else default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)

    remote_url = os.environ.get(REMOTE_URL_ENV, "").strip().rstrip("/") or None
    timeout_raw = os.environ.get(REMOTE_TIMEOUT_ENV, "").strip()
    log_level = os.environ.get(LOG_LEVEL_ENV, "").strip().upper() or "INFO"

    return AppConfig(
        data_dir=data_dir,
        remote_url=remote_url,
        remote_timeout=float(timeout_raw) if timeout_raw else 5.0,
        log_level=log_level,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
