"""
Logging configuration shared by the entry points.

The console screen, the development API and ``run.py`` (which may start
both in one process) call ``setup_logging``.  Handlers installed here
are tagged, so a second call is a no‑op while handlers added by other
tools (uvicorn, pytest's capture) do not count as "already configured".
Library modules only create module‑level loggers.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third‑party loggers capped at WARNING unless DEBUG is asked for.
NOISY_LOGGERS = ("urllib3", "uvicorn.access")

_MARKER = "_person_registry_handler"


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _MARKER, True)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers = [_tagged(logging.StreamHandler())]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_tagged(logging.FileHandler(log_path, encoding="utf-8")))
    return handlers


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    *,
    logger_name: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """Attach console (and optional file) handlers to a logger.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive; unknown names mean ``INFO``.
    logfile : Optional[str]
        File to log to as well; parent directories are created.
    logger_name : Optional[str]
        Logger to configure; the root logger by default.
    quiet : Iterable[str]
        Loggers raised to at least ``WARNING``.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    target = logging.getLogger(logger_name)
    if any(getattr(handler, _MARKER, False) for handler in target.handlers):
        return target

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    target.setLevel(numeric_level)
    for handler in _build_handlers(logfile):
        target.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
    return target
