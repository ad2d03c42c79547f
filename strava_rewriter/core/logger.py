"""Logging setup for strava-rewriter.

One colourised stderr sink, plus a plain UTF-8 file sink when a log file is
configured. Rotation and retention come from LOG_ROTATION / LOG_RETENTION.
"""

import sys
from pathlib import Path

from loguru import logger

from strava_rewriter.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str = "INFO",
    log_file: str | Path | None = None,
    *,
    rotation: str | None = None,
    retention: str | None = None,
) -> None:
    """Replace all loguru sinks with the strava-rewriter ones.

    Args:
        level: Minimum level for every sink
        log_file: Where to also write the log; stderr only when None
        rotation: Overrides settings.log_rotation for the file sink
        retention: Overrides settings.log_retention for the file sink
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation or settings.log_rotation,
            retention=retention or settings.log_retention,
            encoding="utf-8",  # activity titles are Cyrillic
        )

    logger.debug(f"[LOG] level={level} file={log_file or '-'}")
