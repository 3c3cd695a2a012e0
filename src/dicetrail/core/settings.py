"""Runtime configuration and logging for dicetrail (Pydantic Settings v2).

Values come from real environment variables first, then from ``.env`` files in
the working directory (``.env``, ``.env.local`` and the per-environment files
``.env.dev``/``.env.test``/``.env.prod``).

Building and walking explanation trees needs no configuration. These settings
steer the surfaces around the core: which record order the CLI and HTTP API use
when the caller does not pick one, how deeply nested a JSON payload may be, and
how chatty the loggers are.

>>> load_settings().default_order in ("breadth", "depth")
True
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
TraversalOrder = Literal["breadth", "depth"]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class Settings(BaseSettings):
    """Typed dicetrail configuration.

    Attributes
    ----------
    environment : EnvName
        Deployment flavour, read from `DICETRAIL_ENV`. The API server only
        auto-reloads in ``dev``.
    log_level : LogLevelName
        Threshold applied by :func:`get_logger`, read from `LOG_LEVEL`.
    default_order : TraversalOrder
        Record order for CLI table/JSON output and ``POST /explain`` when the
        caller leaves it out, read from `DICETRAIL_ORDER`.
    max_tree_depth : int
        Nesting limit enforced while decoding JSON trees, read from
        `DICETRAIL_MAX_DEPTH`.
    """

    environment: EnvName = Field(default="dev", alias="DICETRAIL_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    default_order: TraversalOrder = Field(default="breadth", alias="DICETRAIL_ORDER")
    max_tree_depth: int = Field(default=32, ge=1, alias="DICETRAIL_MAX_DEPTH")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Map `log_level` onto the ``logging`` module's integer levels."""
        return logging.getLevelNamesMapping().get(self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Build the `Settings` once and reuse it.

    Call `load_settings.cache_clear()` to pick up changes to ``os.environ``.
    """
    os.environ.setdefault("DICETRAIL_ENV", "dev")
    return Settings()


# Read once at import so misconfiguration fails fast.
settings: Settings = load_settings()


def get_logger(name: str = "dicetrail") -> logging.Logger:
    """Return logger ``name`` writing to stderr at the configured `LOG_LEVEL`.

    A handler is attached only the first time a name is requested; the level
    is refreshed on every call.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(load_settings().log_level_numeric())
    return logger


__all__ = ["LOG_FORMAT", "Settings", "get_logger", "load_settings", "settings"]
