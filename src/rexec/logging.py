"""
Logging helpers for rexec SDK.

Library modules obtain loggers with get_logger(__name__). Handlers are only
installed when an application calls setup_logging() (the CLI does).
"""

from __future__ import annotations

import logging

from rexec.config import get_settings

ROOT_LOGGER = "rexec"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the rexec namespace."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str | None = None, rich: bool | None = None) -> logging.Logger:
    """
    Install a single handler on the rexec logger.

    Args:
        level: Log level name, defaults to settings.log_level.
        rich: Use rich's RichHandler, defaults to settings.log_rich.

    Returns:
        The configured rexec logger.
    """
    settings = get_settings()
    level = level or settings.log_level
    use_rich = settings.log_rich if rich is None else rich

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger


__all__ = ["get_logger", "setup_logging"]
