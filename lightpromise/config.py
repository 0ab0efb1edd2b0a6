from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field

from lightpromise.scheduling import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)

TIMEOUT_ENV_VAR = 'LIGHTPROMISE_TIMEOUT_MS'


def timeout_from_env() -> float | None:
    raw = os.environ.get(TIMEOUT_ENV_VAR)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f'{TIMEOUT_ENV_VAR} must be a number, got {raw!r}') from exc
    if value < 0:
        raise ValueError(f'{TIMEOUT_ENV_VAR} must not be negative, got {raw!r}')
    return value


@dataclass(frozen=True)
class Config:
    # Delay primitive used by Promise.timeout unless a promise carries its own.
    scheduler: Scheduler = field(default_factory=AsyncioScheduler)
    # Used by Promise.timeout() when no duration is given; falls back to
    # LIGHTPROMISE_TIMEOUT_MS, read when a timeout needs it.
    default_timeout_ms: float | None = None


_config = Config()


def get_config() -> Config:
    return _config


def configure(**changes) -> Config:
    """Replace fields of the process-wide config and return the new one.

    Unknown field names raise TypeError.
    """
    global _config
    _config = dataclasses.replace(_config, **changes)
    logger.debug('configured %r', _config)
    return _config


def default_timeout() -> float | None:
    if _config.default_timeout_ms is not None:
        return _config.default_timeout_ms
    return timeout_from_env()


def reset_config() -> Config:
    global _config
    _config = Config()
    return _config
