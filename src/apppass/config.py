"""Configuration management for AppPass."""

import logging
import os
from typing import Optional


class Config:
    """Configuration settings for AppPass."""

    DEFAULT_SERVICE = "apppass"
    SERVICE_ENV = "APPPASS_SERVICE"
    LOG_LEVEL_ENV = "APPPASS_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"

    # Reserved keys inside the keyring namespace
    INDEX_KEY = "apppass_index"
    PASSWORD_LENGTH_KEY = "password_length"
    TYPE_SUFFIX = "_type"
    OTP_EXPIRY_SUFFIX = "_otp_expiry"
    INDEX_DELIMITER = ","

    # Generation constants
    DEFAULT_PASSWORD_LENGTH = 30
    MIN_PASSWORD_LENGTH = 8  # Range offered by the settings screen
    MAX_PASSWORD_LENGTH = 128

    # Timers (seconds)
    DEFAULT_OTP_TTL = 300
    DEFAULT_LOCK_TIMEOUT = 60
    CLIPBOARD_TIMEOUT_SECONDS = 30

    def __init__(self):
        """Initialize configuration with environment variable support."""
        self.service = self._get_service()
        self.log_level = self._get_log_level()

    def _get_service(self) -> str:
        """Get keyring service name from environment or use default."""
        env_service = os.getenv(self.SERVICE_ENV)
        if env_service:
            return env_service.strip()
        return self.DEFAULT_SERVICE

    def _get_log_level(self) -> str:
        """Get log level name from environment or use default."""
        env_level = os.getenv(self.LOG_LEVEL_ENV)
        if env_level:
            return env_level.strip().upper()
        return self.DEFAULT_LOG_LEVEL


config = Config()


def configure_logging(level: Optional[str] = None) -> None:
    """Send log records to stderr through rich, once per process."""
    from rich.console import Console
    from rich.logging import RichHandler

    root = logging.getLogger("apppass")
    resolved = (level or config.log_level).upper()
    root.setLevel(getattr(logging, resolved, logging.WARNING))

    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
