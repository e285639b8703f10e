"""Фид мигрировавших токенов pump.fun."""

from __future__ import annotations

from typing import Any

import aiohttp
from loguru import logger

from config.settings import PumpFunSettings, get_settings
from ..monitor.types import TokenCandidate


class FeedError(RuntimeError):
    """Фид недоступен или ответил мусором."""


class PumpFunFeedClient:
    """GET {api_url}/migrations: токены, мигрировавшие с момента прошлого опроса."""

    def __init__(self, settings: PumpFunSettings | None = None) -> None:
        settings = settings or get_settings().pumpfun
        self._url = f"{str(settings.api_url).rstrip('/')}/migrations"
        self._api_key = settings.api_key.get_secret_value()
        self._timeout = settings.request_timeout
        self._session: aiohttp.ClientSession | None = None

    async def start(self) -> None:
        if self._session is None or self._session.closed:
            headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else None
            self._session = aiohttp.ClientSession(
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_new_candidates(self) -> list[TokenCandidate]:
        if self._session is None or self._session.closed:
            raise FeedError("HTTP-сессия не инициализирована, вызовите start()")
        async with self._session.get(self._url) as resp:
            if resp.status != 200:
                raise FeedError(f"Фид ответил HTTP {resp.status}")
            payload = await resp.json()
        return parse_migrations(payload)


def parse_migrations(payload: Any) -> list[TokenCandidate]:
    items = payload.get("data") if isinstance(payload, dict) else None
    if items is None:
        return []
    if not isinstance(items, list):
        raise FeedError("Поле data в ответе фида не список")
    candidates = []
    for raw in items:
        if not isinstance(raw, dict):
            logger.debug("Пропускаем строку фида неизвестного формата: {raw}", raw=raw)
            continue
        try:
            candidates.append(TokenCandidate.from_feed(raw))
        except Exception as exc:  # noqa: BLE001
            # битая строка не должна стоить остальных токенов батча
            logger.warning(
                "Пропускаем строку фида {addr}: {error}",
                addr=raw.get("contractAddress"),
                error=exc,
            )
    return candidates


__all__ = ["FeedError", "PumpFunFeedClient", "parse_migrations"]
