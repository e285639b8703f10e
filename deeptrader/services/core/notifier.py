"""Доставка алертов в Telegram-канал."""

from __future__ import annotations

from aiogram import Bot
from aiogram.enums import ParseMode

from deeptrader.keyboards.inline import build_token_keyboard


class NotifierError(RuntimeError):
    """Алерт не может быть доставлен (например, не задан канал)."""


class TelegramNotifier:
    def __init__(self, bot: Bot, channel_id: str) -> None:
        self._bot = bot
        self._channel_id = channel_id

    async def send_alert(self, message: str, *, address: str | None = None) -> None:
        """Одна попытка отправки; ошибки пробрасываются вызывающему."""

        if not self._channel_id:
            raise NotifierError("TELEGRAM__CHANNEL_ID не задан")
        await self._bot.send_message(
            chat_id=self._channel_id,
            text=message,
            parse_mode=ParseMode.HTML,
            reply_markup=build_token_keyboard(address) if address else None,
        )


__all__ = ["NotifierError", "TelegramNotifier"]
