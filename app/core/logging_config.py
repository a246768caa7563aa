# app/core/logging_config.py
from loguru import logger
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application-wide logging using loguru.

    Replaces loguru's default stderr handler with a single stdout sink,
    so calling it again (e.g. with a new level) never duplicates output.
    """
    # Remove default handler added by loguru
    logger.remove()

    logger.add(
        sys.stdout,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        backtrace=True,
        diagnose=False,
    )
