"""
Configuration management for DrinkTender.

Reads configuration from .env file and environment variables with sensible defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Default .env file location
DEFAULT_ENV_FILE = Path("~/.config/drinktender/drinktender.env").expanduser()
DEFAULT_STATE_PATH = Path("~/.local/share/drinktender/state.json").expanduser()

# Timer defaults
DEFAULT_DELAY_MINUTES = 60
DELAY_PRESETS_MINUTES = (15, 30, 45, 60, 90, 120, 180, 240)

# Notification content
NOTIFICATION_ID = "DrinkTimerNotification"
NOTIFICATION_TITLE = "Drink Timer"
NOTIFICATION_BODY = "Ready for your next drink! 🥤"

NOTIFIER_MODES = ("null", "log", "timer")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")

logger = logging.getLogger(__name__)


def _load_env_file():
    """Load environment variables from .env file if it exists."""
    env_file = os.getenv("DRINKTENDER_ENV_FILE", str(DEFAULT_ENV_FILE))
    env_path = Path(env_file).expanduser()

    if env_path.exists():
        load_dotenv(env_path, override=False)  # Don't override existing env vars


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid {name}: {value} (must be one of {', '.join(_TRUE_VALUES + _FALSE_VALUES)})")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid {name}: {value} (must be an integer)")


@dataclass
class DrinkTenderConfig:
    """DrinkTender configuration loaded from .env file and environment variables."""

    # Persisted store
    state_path: Path = DEFAULT_STATE_PATH

    # Notification capability
    notifier: str = "timer"
    permission_granted: bool = True

    # Surface refresh cadences
    main_refresh_seconds: int = 1
    widget_refresh_minutes: int = 1
    complication_refresh_minutes: int = 15

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @classmethod
    def load_config(cls) -> "DrinkTenderConfig":
        """
        Load configuration from environment variables.

        Returns:
            DrinkTenderConfig instance with loaded values

        Raises:
            ValueError: If configuration is invalid
        """
        # Load .env file first (if it exists)
        _load_env_file()

        state_path = Path(os.getenv("DRINKTENDER_STATE_PATH", str(DEFAULT_STATE_PATH))).expanduser()

        notifier = os.getenv("DRINKTENDER_NOTIFIER", "timer").strip().lower()
        permission_granted = _parse_bool(
            "DRINKTENDER_PERMISSION", os.getenv("DRINKTENDER_PERMISSION", "true")
        )

        main_refresh_seconds = _parse_int(
            "DRINKTENDER_MAIN_REFRESH_SEC", os.getenv("DRINKTENDER_MAIN_REFRESH_SEC", "1")
        )
        widget_refresh_minutes = _parse_int(
            "DRINKTENDER_WIDGET_REFRESH_MIN", os.getenv("DRINKTENDER_WIDGET_REFRESH_MIN", "1")
        )
        complication_refresh_minutes = _parse_int(
            "DRINKTENDER_COMPLICATION_REFRESH_MIN", os.getenv("DRINKTENDER_COMPLICATION_REFRESH_MIN", "15")
        )

        log_level = os.getenv("DRINKTENDER_LOG_LEVEL", "INFO")
        log_file_str = os.getenv("DRINKTENDER_LOG_FILE")
        log_file = Path(log_file_str).expanduser() if log_file_str else None

        config = cls(
            state_path=state_path,
            notifier=notifier,
            permission_granted=permission_granted,
            main_refresh_seconds=main_refresh_seconds,
            widget_refresh_minutes=widget_refresh_minutes,
            complication_refresh_minutes=complication_refresh_minutes,
            log_level=log_level,
            log_file=log_file,
        )

        # Validate configuration
        config.validate()

        return config

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.notifier not in NOTIFIER_MODES:
            raise ValueError(
                f"Invalid DRINKTENDER_NOTIFIER: {self.notifier} "
                f"(must be one of: {', '.join(NOTIFIER_MODES)})"
            )

        if self.main_refresh_seconds <= 0:
            raise ValueError(f"Invalid main refresh interval: {self.main_refresh_seconds} (must be > 0)")

        if self.widget_refresh_minutes <= 0:
            raise ValueError(f"Invalid widget refresh interval: {self.widget_refresh_minutes} (must be > 0)")

        if self.complication_refresh_minutes <= 0:
            raise ValueError(
                f"Invalid complication refresh interval: {self.complication_refresh_minutes} (must be > 0)"
            )

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(
                f"Invalid log level: {self.log_level} "
                f"(must be one of: {', '.join(valid_log_levels)})"
            )


def load_config() -> DrinkTenderConfig:
    """
    Load and validate DrinkTender configuration from environment variables.

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return DrinkTenderConfig.load_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        raise
