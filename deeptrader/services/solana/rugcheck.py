"""Клиент rugcheck: внешний safety score токена 0–100."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import aiohttp

from config.settings import RugcheckSettings, get_settings


class RugcheckError(RuntimeError):
    """rugcheck недоступен или вернул ошибку."""


class RugcheckClient:
    def __init__(self, settings: RugcheckSettings | None = None) -> None:
        settings = settings or get_settings().rugcheck
        self._base_url = str(settings.api_url).rstrip("/")
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

    async def fetch_safety_score(self, address: str) -> int:
        if self._session is None or self._session.closed:
            raise RugcheckError("HTTP-сессия не инициализирована, вызовите start()")
        url = f"{self._base_url}/tokens/{quote(address, safe='')}/report/summary"
        async with self._session.get(url) as resp:
            if resp.status != 200:
                raise RugcheckError(f"rugcheck {address}: HTTP {resp.status}")
            data = await resp.json()
        return extract_score(data)


def extract_score(data: Any) -> int:
    """Нормализованный score, затем сырой; без score будет 0. Результат в 0..100."""

    if not isinstance(data, dict):
        raise RugcheckError("rugcheck вернул неожиданный ответ")
    raw = data.get("score_normalised")
    if raw is None:
        raw = data.get("score")
    try:
        score = int(float(raw or 0))
    except (TypeError, ValueError):
        score = 0
    return max(0, min(score, 100))


__all__ = ["RugcheckClient", "RugcheckError", "extract_score"]
