"""Configuration management for sitelog."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

SITELOG_HOME = Path(os.environ.get("SITELOG_HOME", Path.home() / "sitelog"))
CONFIG_FILE = SITELOG_HOME / "config" / "sitelog.conf"
DATA_DIR = SITELOG_HOME / "data"

WEEK_ENDING_DAYS = ("Sunday", "Saturday", "Friday", "Thursday", "Wednesday", "Tuesday", "Monday")


@dataclass
class Config:
    """sitelog configuration."""

    backend_url: str = ""
    backend_key: str = ""
    access_token: str = ""
    timezone: str = "Pacific/Auckland"
    company_name: str = ""
    # Timesheet settings
    week_ending_day: str = "Sunday"
    timesheet_period: int = 1
    lunch_default_minutes: int = 30
    rounding_minutes: int = 15
    timesheet_dir: str = ""
    # Telegram bot settings
    telegram_bot_token: str = ""
    telegram_allowed_users: list[int] = field(default_factory=list)
    telegram_digest_time: str = "06:30"


def _parse_int(key: str, value: str, default: int, allowed: tuple[int, ...] | None = None) -> int:
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value {value!r}, using {default}")
        return default
    if allowed and parsed not in allowed:
        logger.warning(f"{key.upper()} must be one of {allowed}, got {parsed}; using {default}")
        return default
    return parsed


def load_config(path: Path | None = None) -> Config:
    """Load configuration from sitelog.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value.startswith('"') or value.startswith("'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "backend_url":
                config.backend_url = value.rstrip("/")
            case "backend_key":
                config.backend_key = value
            case "access_token":
                config.access_token = value
            case "timezone":
                config.timezone = value
            case "company_name":
                config.company_name = value
            case "week_ending_day":
                if value.capitalize() in WEEK_ENDING_DAYS:
                    config.week_ending_day = value.capitalize()
                else:
                    logger.warning(f"Invalid WEEK_ENDING_DAY {value!r}, using {config.week_ending_day}")
            case "timesheet_period":
                config.timesheet_period = _parse_int(key, value, config.timesheet_period, (1, 2))
            case "lunch_default_minutes":
                config.lunch_default_minutes = _parse_int(key, value, config.lunch_default_minutes, (30, 60))
            case "rounding_minutes":
                config.rounding_minutes = _parse_int(key, value, config.rounding_minutes)
            case "timesheet_dir":
                config.timesheet_dir = value
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_allowed_users":
                config.telegram_allowed_users = [int(u.strip()) for u in value.split(",") if u.strip()]
            case "telegram_digest_time":
                config.telegram_digest_time = value

    return config
