# site_intel/logger.py
"""Logging setup for SiteIntel.

All modules log under the ``SiteIntel`` logger: the engine through the
ready-made :data:`logger`, crawl components through children from
:func:`get_logger` (``SiteIntel.crawler``, ``SiteIntel.renderer`` …).
One :func:`configure` call sets level and handlers for the whole tree::

    from site_intel.logger import configure
    configure(level="DEBUG", log_file="crawl.log")

Levels used by the crawl: DEBUG for per-URL skips, INFO for budget and
fallback decisions, WARNING for proxy and extractor failures.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SiteIntel"
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

# aiohttp's own loggers are chatty at DEBUG; they follow our level but never go below INFO
_THIRD_PARTY: Final[tuple[str, ...]] = ("aiohttp.client", "aiohttp.access")

_LevelT = Union[int, str]


def _build_handlers(log_file: str | Path | None, fmt: str) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=_MAX_LOG_BYTES,
                backupCount=_LOG_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the ``SiteIntel`` logger tree.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Optional rotating logfile in addition to stdout.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* drops handlers installed by a previous call.
    """
    root = logging.getLogger(_LOGGER_NAME)
    root.setLevel(level)
    if replace_handlers:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
    for handler in _build_handlers(log_file, log_format):
        root.addHandler(handler)
    root.propagate = False

    floor = max(root.getEffectiveLevel(), logging.INFO)
    for name in _THIRD_PARTY:
        logging.getLogger(name).setLevel(floor)
    return root


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """CLI entry: positional level, always replaces handlers."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


def get_logger(component: str) -> logging.Logger:
    """Child logger ``SiteIntel.<component>``; configured through its parent."""
    return logging.getLogger(f"{_LOGGER_NAME}.{component}")


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "init_logging", "get_logger"]
