"""
settings.py — Application Configuration
=========================================
One cached `settings` instance read from the environment and `.env` files.

    from settings import settings, get_logger

Environment variables (all optional):
    DSAVIZ_ENV              dev | test | prod
    LOG_LEVEL               DEBUG | INFO | WARNING | ERROR | CRITICAL
    DSAVIZ_HOST / PORT      where `python main.py` binds
    DSAVIZ_DEBUG            Flask debug flag
    DSAVIZ_SECRET_KEY       session signing key (random per process when unset)
    DSAVIZ_DEFAULT_SPEED    playback preset for new sessions
    DSAVIZ_MIN_INTERVAL_MS  fastest allowed playback interval
    DSAVIZ_MAX_INTERVAL_MS  slowest allowed playback interval
    DSAVIZ_MAX_INPUT_LEN    upper bound on input sequence length
    DSAVIZ_MAX_SESSIONS     live session contexts kept before the oldest is dropped
    DSAVIZ_SESSION_IDLE_S   seconds a session context may sit unused

Tests rebuild the cached instance with `load_settings.cache_clear()` after
mutating `os.environ`.
"""

import logging
import os
import secrets
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName      = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
SpeedName    = Literal["slow", "medium", "fast", "turbo"]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class Settings(BaseSettings):
    """Typed configuration loaded from env and `.env` files."""

    environment:     EnvName      = Field(default="dev", alias="DSAVIZ_ENV")
    log_level:       LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    host:            str          = Field(default="127.0.0.1", alias="DSAVIZ_HOST")
    port:            int          = Field(default=5000, ge=1, le=65535, alias="DSAVIZ_PORT")
    debug:           bool         = Field(default=False, alias="DSAVIZ_DEBUG")
    secret_key:      str          = Field(default_factory=lambda: secrets.token_hex(32),
                                          alias="DSAVIZ_SECRET_KEY")
    default_speed:   SpeedName    = Field(default="medium", alias="DSAVIZ_DEFAULT_SPEED")
    min_interval_ms: int          = Field(default=20, ge=1, alias="DSAVIZ_MIN_INTERVAL_MS")
    max_interval_ms: int          = Field(default=5000, ge=1, alias="DSAVIZ_MAX_INTERVAL_MS")
    max_input_len:   int          = Field(default=20, ge=2, le=64, alias="DSAVIZ_MAX_INPUT_LEN")
    max_sessions:    int          = Field(default=256, ge=1, alias="DSAVIZ_MAX_SESSIONS")
    session_idle_s:  float        = Field(default=1800.0, gt=0, alias="DSAVIZ_SESSION_IDLE_S")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level for `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance."""
    os.environ.setdefault("DSAVIZ_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger configured once with a stream handler and LOG_LEVEL.

    Library modules log through `logging.getLogger(__name__)`. The entry
    point calls `get_logger()` with no name, which configures the root
    logger so every module's records reach the same handler.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    if name is not None:
        logger.propagate = False
    return logger
