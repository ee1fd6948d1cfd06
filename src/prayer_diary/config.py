"""Prayer Diary configuration.

Settings come from environment variables, with an optional ``config.toml``
as fallback for values that may also live in the settings table.
"""

import os
import tomllib
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.orm import Session

from prayer_diary.models import Setting


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "prayer-diary")
    ENV: str = os.getenv("PRAYER_DIARY_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    PRINT_CARDS_PER_PAGE: int = int(os.getenv("PRINT_CARDS_PER_PAGE", "4"))
    PRINT_MAX_DAYS: int = int(os.getenv("PRINT_MAX_DAYS", "366"))

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def data_dir(self) -> Path:
        # Production keeps config and data under /data, development uses PWD
        return Path("/data") if self.is_production else Path.cwd()


settings = Settings()


def load_config_file() -> dict:
    """Load config.toml from the data directory, or {} when there is none."""
    config_path = settings.data_dir / "config.toml"
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}


def get_local_timezone(db: Session) -> ZoneInfo:
    """Resolve the local timezone: DB setting > config.toml > UTC.

    "Today" for the daily selection is the date in this timezone, so a
    congregation in Australia does not see yesterday's subjects until noon.
    """
    row = db.query(Setting).filter(Setting.key == "local_timezone").first()
    if row and row.value:
        tz_name = row.value
    else:
        tz_name = load_config_file().get("local_timezone", "UTC")

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")
