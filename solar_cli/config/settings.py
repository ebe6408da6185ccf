# solar_cli/config/settings.py

import logging
import re

import coloredlogs
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ANSI color codes
YELLOW = "\033[93m"
CYAN = "\033[96m"
RESET = "\033[0m"

# Transaction ids / block ids are 64 hex chars
HEX_ID_REGEX = re.compile(r"(\b[a-fA-F0-9]{64}\b)")
# Solar addresses: 34 base58 chars, mainnet starts with S, testnet with D
ADDRESS_REGEX = re.compile(r"(\b[SD][1-9A-HJ-NP-Za-km-z]{33}\b)")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class HighlightFormatter(coloredlogs.ColoredFormatter):
    """Formatter that highlights transaction ids and wallet addresses."""

    def format(self, record):
        formatted_message = super().format(record)
        formatted_message = HEX_ID_REGEX.sub(
            f"{YELLOW}\\1{RESET}", formatted_message
        )
        formatted_message = ADDRESS_REGEX.sub(f"{CYAN}\\1{RESET}", formatted_message)
        return formatted_message


class Settings(BaseSettings):
    """
    Ambient settings for the CLI, loaded from environment variables or a .env file.

    The relay node address and network are static package configuration
    (see config_loader.py) and are deliberately not part of these settings.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SOLARCLI_",
    )

    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    HTTP_CLIENT_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for each request to the relay node",
    )

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, value):
        normalized = str(value or "WARNING").upper().strip()
        if normalized not in LOG_LEVELS:
            return "WARNING"
        return normalized


settings = Settings()

# --- LOGGING CONFIGURATION ---
LOG_LEVEL_CONFIG = getattr(logging, settings.LOG_LEVEL)

DEFAULT_LEVEL_STYLES = {
    "debug": {"color": "green"},
    "info": {"color": "cyan"},
    "warning": {"color": "yellow"},
    "error": {"color": "red"},
    "critical": {"bold": True, "color": "red"},
}
DEFAULT_FIELD_STYLES = {
    "asctime": {"color": "magenta"},
    "levelname": {"bold": True, "color": "blue"},
    "name": {"color": "white"},
}
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

highlight_formatter = HighlightFormatter(
    fmt=DEFAULT_FMT,
    level_styles=DEFAULT_LEVEL_STYLES,
    field_styles=DEFAULT_FIELD_STYLES,
)

coloredlogs.install(level=LOG_LEVEL_CONFIG, fmt=DEFAULT_FMT, reconfigure=True)
for handler in logging.getLogger().handlers:
    handler.setFormatter(highlight_formatter)

logger = logging.getLogger("solar_cli")
logger.debug(
    f"Settings loaded. Log level set to {logging.getLevelName(LOG_LEVEL_CONFIG)}."
)
