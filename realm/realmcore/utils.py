import logging
import functools
import os

from .constants import (LOGGER_NAME, PASSWORD_MASK, LOG_LEVEL_ENV_VARS, DEFAULT_LOG_LEVEL,
                        LOG_FORMAT, DEBUG_LOG_FORMAT)

def env_log_level() -> int:
    """Level named by REALM_LOG_LEVEL, else LOG_LEVEL, else INFO.
    Unknown names fall back to INFO rather than failing at import time."""
    for var in LOG_LEVEL_ENV_VARS:
        name = os.getenv(var)
        if name:
            level = logging.getLevelName(name.strip().upper())
            if isinstance(level, int):
                return level
    return getattr(logging, DEFAULT_LOG_LEVEL)

@functools.cache
def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler

@functools.cache
def _app_logger() -> logging.Logger:
    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(env_log_level())
    if _stderr_handler() not in app_logger.handlers:
        app_logger.addHandler(_stderr_handler())
    # realm messages go to stderr once, never again via the root logger
    app_logger.propagate = False
    return app_logger

def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the 'realm' namespace (e.g., realm.scanner)."""
    app_logger = _app_logger()
    return app_logger.getChild(name) if name else app_logger

def set_debug():
    """Turn on debug output for the whole realm namespace, with source locations."""
    _app_logger().setLevel(logging.DEBUG)
    _stderr_handler().setFormatter(logging.Formatter(DEBUG_LOG_FORMAT))

def mask(value: str | None) -> str:
    """Hide a secret for display. Absent values display as '<unset>'."""
    if value is None:
        return "<unset>"
    return PASSWORD_MASK
