"""Настройка loguru для продакшена."""

from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "INFO", serialize: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stdout,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}",
        level=level,
        colorize=not serialize,
        serialize=serialize,
        backtrace=False,
        enqueue=True,
    )


__all__ = ["setup_logging"]
