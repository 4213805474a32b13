"""
Logging setup for gedcom-transform.

Every module asks ``get_logger`` for its logger. Those are plain children of
a single base logger, ``gedcom_transform``, which carries only a
``NullHandler`` until an application calls ``configure_logging``. Importing
or parsing never touches the filesystem; the CLI configures logging once at
startup from the ``logging`` section of ``config/gedcom_transform.yml``:

    logging:
      level: INFO                  # file handler level
      file: gedcom_transform.log   # master log under paths.logs_dir
      rotate: false                # RotatingFileHandler, 5 x 5 MB
      per_module_files: false      # extra logs/<module>.log per logger

The console handler writes to stderr at WARNING, so command output on stdout
is never interleaved with log lines. ``debug: true`` in the config (or the
CLI's ``--debug``) drops everything to DEBUG.
"""

from __future__ import annotations

import logging
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List

from gedcom_transform.config import get_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "gedcom_transform"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROTATE_MAX_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5

_logger_cache: Dict[str, Logger] = {}
_settings: Dict[str, object] = {}

logging.getLogger(BASE_LOGGER_NAME).addHandler(logging.NullHandler())


def _load_settings() -> Dict[str, object]:
    cfg = get_config()

    log_dir = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = PROJECT_ROOT / log_dir

    level_name = str(cfg.logging.get("level", "INFO")).upper()
    return {
        "log_dir": log_dir,
        "file": cfg.logging.get("file", "gedcom_transform.log"),
        "rotate": bool(cfg.logging.get("rotate", False)),
        "per_module_files": bool(cfg.logging.get("per_module_files", False)),
        "base_level": getattr(logging, level_name, logging.INFO),
        "debug": bool(cfg.debug),
    }


def _file_level() -> int:
    return logging.DEBUG if _settings["debug"] else _settings["base_level"]


def _console_level() -> int:
    return logging.DEBUG if _settings["debug"] else logging.WARNING


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    if _settings["rotate"]:
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=ROTATE_MAX_BYTES, backupCount=ROTATE_BACKUPS, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(_file_level())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _attach_module_file(logger: Logger) -> None:
    filename = f"{logger.name.replace('.', '_')}.log"
    logger.addHandler(_file_handler(_settings["log_dir"] / filename))


def configure_logging() -> Logger:
    """
    Attach the file and console handlers to the base logger.

    Safe to call more than once; only the first call does any work.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    if _settings:
        return base

    _settings.update(_load_settings())

    base.setLevel(_file_level())
    base.propagate = False
    base.addHandler(_file_handler(_settings["log_dir"] / _settings["file"]))

    console = StreamHandler()
    console.setLevel(_console_level())
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base.addHandler(console)

    for logger in _logger_cache.values():
        if logger is not base and _settings["per_module_files"]:
            _attach_module_file(logger)
    return base


def _qualified(name: str) -> str:
    # "cli" -> "gedcom_transform.cli"
    if name == BASE_LOGGER_NAME or name.startswith(BASE_LOGGER_NAME + "."):
        return name
    return f"{BASE_LOGGER_NAME}.{name}"


def get_logger(name: str | None = None) -> Logger:
    """
    Logger named `name` under the project's base logger.

    Module loggers inherit their level from the base logger and propagate to
    its handlers; once logging is configured with ``per_module_files`` they
    also get ``logs/<module>.log``.
    """
    logger_name = _qualified(name or BASE_LOGGER_NAME)
    if logger_name in _logger_cache:
        return _logger_cache[logger_name]

    logger = logging.getLogger(logger_name)
    if logger_name != BASE_LOGGER_NAME and _settings.get("per_module_files"):
        _attach_module_file(logger)

    _logger_cache[logger_name] = logger
    return logger


def set_debug(enabled: bool) -> None:
    """Switch the base logger and every handler we own to DEBUG, or back to configured levels."""
    base = configure_logging()
    _settings["debug"] = bool(enabled)
    get_config().debug = bool(enabled)

    for handler in base.handlers:
        # FileHandler subclasses StreamHandler, so test it first
        if isinstance(handler, logging.FileHandler):
            handler.setLevel(_file_level())
        elif isinstance(handler, StreamHandler):
            handler.setLevel(_console_level())

    base.setLevel(_file_level())
    for logger in _logger_cache.values():
        if logger is base:
            continue
        for handler in logger.handlers:
            handler.setLevel(_file_level())


def list_active_loggers() -> List[str]:
    """Names handed out so far; handy when a test needs to inspect levels."""
    return list(_logger_cache.keys())
