"""Logging setup for tsclassgen.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach a handler to the package logger.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "tsclassgen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        The logger instance.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    use_rich: bool = True,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level name or number.
        use_rich: Use a rich handler instead of a plain stream handler.
        console: Console for the rich handler (stderr by default).

    Returns:
        The configured package logger.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not _configured:
        if use_rich:
            handler: logging.Handler = RichHandler(
                console=console or Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("%(levelname)s %(name)s: %(message)s")
            )
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger
