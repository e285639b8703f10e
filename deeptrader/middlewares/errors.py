"""Перехват ошибок в хендлерах команд."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject
from loguru import logger

ERROR_TEXT = "⚠️ Something went wrong, please try again later."


class ErrorsMiddleware(BaseMiddleware):
    """Ошибка команды не должна ронять polling: пишем стек в лог и отвечаем общим текстом."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        try:
            return await handler(event, data)
        except Exception as exc:  # noqa: BLE001
            if not isinstance(event, Message):
                raise
            logger.opt(exception=exc).error(
                "Команда {command!r} от {user} упала: {error}",
                command=event.text,
                user=event.from_user.id if event.from_user else None,
                error=exc,
            )
            await event.answer(ERROR_TEXT)
            return None


__all__ = ["ERROR_TEXT", "ErrorsMiddleware"]
