"""
Runtime configuration.

Read once from the environment::

    CKCPOKER_LOG_LEVEL          package log level (default WARNING)
    CKCPOKER_EAGER_TABLES       build the lookup tables at import time
    CKCPOKER_TABLE_PATH         load tables from a pre-generated .npz archive
    CKCPOKER_MAX_DISPLACEMENT   bound on the perfect hash displacement search
"""

import logging
import os
import threading
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "CKCPOKER_"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EvaluatorConfig(BaseModel):
    """Configuration for table construction and logging."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    log_level: str = "WARNING"
    eager_tables: bool = False
    table_path: Optional[str] = None
    max_displacement: int = 1_000_000

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}, got {value!r}")
        return value

    @field_validator("max_displacement")
    @classmethod
    def _check_displacement(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"max_displacement must be positive, got {value}")
        return value

    @classmethod
    def from_env(cls, environ=None) -> "EvaluatorConfig":
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)


_config: Optional[EvaluatorConfig] = None
_lock = threading.Lock()


def get_config() -> EvaluatorConfig:
    global _config
    if _config is None:
        with _lock:
            if _config is None:
                _config = EvaluatorConfig.from_env()
    return _config


def configure(**overrides) -> EvaluatorConfig:
    """
    Replace the process-wide configuration.

    Fields not given keep their current value. Lookup tables that were
    already built are not rebuilt.
    """
    global _config
    with _lock:
        current = _config if _config is not None else EvaluatorConfig.from_env()
        _config = EvaluatorConfig(**{**current.model_dump(), **overrides})
    logging.getLogger("ckcpoker").setLevel(_config.log_level)
    return _config
