"""Entry point for DeepTrader monitor."""

from __future__ import annotations

import asyncio

from loguru import logger

from config.settings import get_settings
from .loader import build_runtime, on_shutdown, on_startup
from .logging_config import setup_logging


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.serialize)
    runtime = build_runtime(settings)
    await on_startup(runtime)
    try:
        logger.info("Запуск aiogram polling...")
        await runtime.dp.start_polling(runtime.bot, handle_signals=True)
    finally:
        await on_shutdown(runtime)
    logger.info("Polling завершён (dp.start_polling вернул управление)")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
