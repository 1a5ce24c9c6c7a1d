"""Logging configuration for dagweave using Loguru.

Graphs report their diagnostics (new root, removed edge, missing vertex, ...)
through loggers obtained here. Nothing is configured at import time; the first
call to :func:`get_logger` installs a default sink driven by the
``DAGWEAVE_LOG_LEVEL`` and ``DAGWEAVE_LOG_FORMAT`` environment variables.

Examples
--------
>>> from dagweave.core.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Loaded graph", vertices=8)

Configure logging explicitly::

    from dagweave.core.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger
from rich.logging import RichHandler

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []
_LOGURU_DEFAULT_HANDLER_ID = 0


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Configure global logging for dagweave.

    Calling it again with the same arguments is a no-op; only the sinks
    installed by this function are replaced, sinks added elsewhere (pytest,
    applications) are left alone. Loguru's own default stderr sink is removed
    so that ``level`` decides what reaches the console.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": plain single-line output
        - "json": one JSON object per record
        - "structured": colored Loguru format with source location
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file that additionally receives JSON records
    use_color : bool, default=True
        Use ANSI colors in structured format (ignored for non-TTY stderr)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Reinstall sinks even if the configuration is unchanged
    """
    global _CURRENT_CONFIG

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # Loguru's built-in DEBUG sink would print every diagnostic regardless of level
    with suppress(ValueError):
        logger.remove(_LOGURU_DEFAULT_HANDLER_ID)

    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=True,
        )
        handler_id = logger.add(sink=rich_handler, level=level, format="{message}")

    elif format == "json":
        handler_id = logger.add(sink=sys.stderr, level=level, serialize=True)

    elif format == "structured":
        colorize = use_color and sys.stderr.isatty()
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        color_level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
        )
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=structured_format,
            colorize=colorize,
        )

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=f"{timestamp_fmt}{{level: <8}} | {{name}} | {{message}}",
            colorize=False,
        )
    _HANDLER_IDS.append(handler_id)

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        handler_id = logger.add(sink=output_path, level=level, serialize=True)
        _HANDLER_IDS.append(handler_id)

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Get a logger bound to ``name`` (cached).

    Parameters
    ----------
    name : str
        Logger name, typically ``__name__`` of the calling module

    Returns
    -------
    loguru.Logger
        Logger bound with ``module=name``
    """
    _ensure_configured()
    return logger.bind(module=name)


def reset_logging() -> None:
    """Remove the sinks installed by :func:`configure_logging`."""
    global _CURRENT_CONFIG

    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()
    _CURRENT_CONFIG = None


def _ensure_configured() -> None:
    """Install default sinks on first use."""
    if _CURRENT_CONFIG is None:
        level = os.getenv("DAGWEAVE_LOG_LEVEL", "INFO").upper()
        format_type = os.getenv("DAGWEAVE_LOG_FORMAT", "structured").lower()
        configure_logging(level=level, format=format_type)  # type: ignore[arg-type]
