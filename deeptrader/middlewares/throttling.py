"""Антиспам для команд бота."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

THROTTLED_TEXT = "⏳ Too many requests, slow down a bit."


class ThrottlingMiddleware(BaseMiddleware):
    """Интервал считается для пары (пользователь, команда).

    /info без сохранённой проверки запускает живой анализ через RPC и rugcheck,
    поэтому для отдельных команд можно задать свой интервал в ``overrides``.
    """

    def __init__(self, rate_limit: float = 1.0, overrides: dict[str, float] | None = None) -> None:
        self.rate_limit = rate_limit
        self.overrides = dict(overrides or {})
        self._last_seen: dict[tuple[int, str], float] = {}
        self._lock = asyncio.Lock()

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if not isinstance(event, Message) or event.from_user is None:
            return await handler(event, data)

        command = command_name(event.text)
        key = (event.from_user.id, command)
        limit = self.overrides.get(command, self.rate_limit)
        async with self._lock:
            now = time.monotonic()
            last = self._last_seen.get(key)
            if last is not None and now - last < limit:
                await event.answer(THROTTLED_TEXT)
                return None
            self._last_seen[key] = now

        return await handler(event, data)


def command_name(text: str | None) -> str:
    """``/Info@DeepBot abc`` → ``info``; не команда → пустая строка."""

    if not text or not text.startswith("/"):
        return ""
    return text.split(maxsplit=1)[0][1:].split("@", 1)[0].lower()


__all__ = ["THROTTLED_TEXT", "ThrottlingMiddleware", "command_name"]
