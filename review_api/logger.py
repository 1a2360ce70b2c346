"""Loguru setup shared by the API process."""

import logging
import sys
from pathlib import Path

from loguru import logger

from .core import Settings

FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Redirect standard ``logging`` records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # uvicorn access lines duplicate the router logs
        if record.name == "uvicorn.access":
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(settings: Settings) -> None:
    """Install the console sink, the optional file sink and the stdlib bridge.

    Args:
        settings (Settings): Application settings holding the ``LOG_*`` values.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if settings.LOG_FILE:
        path = Path(settings.LOG_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=settings.LOG_LEVEL,
            format="{message}" if settings.LOG_SERIALIZE else FORMAT,
            serialize=settings.LOG_SERIALIZE,
            rotation="10 MB",
            retention=5,
            compression="zip",
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logger.info(
        "Logging configured (level={}, file={})",
        settings.LOG_LEVEL,
        settings.LOG_FILE,
    )
