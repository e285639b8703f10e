"""Создаёт таблицы tokens и security_checks без запуска мониторинга."""

from __future__ import annotations

import asyncio

from loguru import logger

from config.settings import get_settings
from deeptrader.logging_config import setup_logging
from deeptrader.middlewares.db import get_engine, init_db


async def _create_tables() -> None:
    settings = get_settings()
    engine = get_engine(settings.database)
    try:
        await init_db(engine)
    finally:
        await engine.dispose()
    logger.info("Схема БД готова: {url}", url=engine.url.render_as_string(hide_password=True))


def main() -> None:
    setup_logging(get_settings().logging.level)
    asyncio.run(_create_tables())


if __name__ == "__main__":
    main()
