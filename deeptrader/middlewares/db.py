"""Движок БД, фабрика сессий и middleware для хендлеров."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config.settings import DatabaseSettings, get_settings
from deeptrader import models  # noqa: F401  импортируем модели для регистрации метаданных

_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


def get_engine(settings: DatabaseSettings | None = None) -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = settings or get_settings().database
        _engine = create_async_engine(settings.dsn, echo=settings.echo, poolclass=NullPool)
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    global _session_maker
    if _session_maker is None:
        _session_maker = build_session_maker(get_engine())
    return _session_maker


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Создаёт таблицы, если их ещё нет."""

    engine = engine or get_engine()
    url = engine.url
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


class DatabaseMiddleware(BaseMiddleware):
    """Создаёт AsyncSession на время обработки апдейта."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        async with self._session_maker() as session:
            data["session"] = session
            return await handler(event, data)


__all__ = [
    "DatabaseMiddleware",
    "build_session_maker",
    "get_engine",
    "get_session_maker",
    "init_db",
]
