"""Тонкий JSON-RPC клиент Solana поверх aiohttp.

Нужен ядру только для трёх вещей: крупнейшие держатели минта, токен-аккаунты
минта (getProgramAccounts) и владельцы этих аккаунтов (getAccountInfo
или пачкой через getMultipleAccounts).
"""

from __future__ import annotations

import itertools
from typing import Any

import aiohttp
from loguru import logger

from config.settings import SolanaSettings, get_settings


class SolanaRpcError(RuntimeError):
    """Ошибка HTTP/JSON-RPC при обращении к ноде Solana."""


class SolanaRpcClient:
    """Реализует ChainInspector через публичный HTTP RPC."""

    def __init__(self, settings: SolanaSettings | None = None) -> None:
        settings = settings or get_settings().solana
        self._endpoint = str(settings.rpc_endpoint)
        self._commitment = settings.commitment
        self._timeout = settings.request_timeout
        self._session: aiohttp.ClientSession | None = None
        self._ids = itertools.count(1)

    async def start(self) -> None:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )
            logger.info("SolanaRpcClient готов: RPC {rpc}", rpc=self._endpoint)

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def rpc_call(self, method: str, params: list[Any] | None = None) -> Any:
        """Выполняет JSON-RPC вызов и возвращает поле result."""

        if self._session is None or self._session.closed:
            raise SolanaRpcError("HTTP-сессия не инициализирована, вызовите start()")
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []}
        async with self._session.post(self._endpoint, json=payload) as resp:
            if resp.status >= 400:
                text = await resp.text()
                raise SolanaRpcError(f"RPC {method} завершился с HTTP {resp.status}: {text}")
            data = await resp.json()
        if "error" in data:
            raise SolanaRpcError(f"RPC ошибка {method}: {data['error']}")
        return data.get("result")

    async def fetch_holder_distribution(self, address: str) -> list[tuple[str, int]]:
        result = await self.rpc_call(
            "getTokenLargestAccounts",
            [address, {"commitment": self._commitment}],
        )
        return parse_largest_accounts(result)

    async def fetch_program_accounts(
        self,
        mint: str,
        data_size: int,
        owner_program: str,
    ) -> list[str]:
        """Токен-аккаунты минта: размер данных + memcmp по mint (offset 0)."""

        result = await self.rpc_call(
            "getProgramAccounts",
            [
                owner_program,
                {
                    "commitment": self._commitment,
                    "encoding": "base64",
                    "dataSlice": {"offset": 0, "length": 0},
                    "filters": [
                        {"dataSize": data_size},
                        {"memcmp": {"offset": 0, "bytes": mint}},
                    ],
                },
            ],
        )
        return [item["pubkey"] for item in result or [] if item.get("pubkey")]

    async def fetch_account_owner(self, account: str) -> str | None:
        result = await self.rpc_call(
            "getAccountInfo",
            [account, {"commitment": self._commitment, "encoding": "jsonParsed"}],
        )
        return parse_account_owner(result)

    async def fetch_account_owners(self, accounts: list[str]) -> list[str | None]:
        """Владельцы сразу нескольких аккаунтов одним getMultipleAccounts (до 100 ключей)."""

        if not accounts:
            return []
        result = await self.rpc_call(
            "getMultipleAccounts",
            [list(accounts), {"commitment": self._commitment, "encoding": "jsonParsed"}],
        )
        return parse_account_owners(result, len(accounts))


def parse_largest_accounts(result: Any) -> list[tuple[str, int]]:
    """getTokenLargestAccounts → [(аккаунт, amount в минимальных единицах)]."""

    items = result.get("value") if isinstance(result, dict) else None
    if not isinstance(items, list):
        raise SolanaRpcError("getTokenLargestAccounts вернул неожиданный ответ")
    holders: list[tuple[str, int]] = []
    for item in items:
        address = item.get("address")
        try:
            amount = int(item.get("amount") or 0)
        except (TypeError, ValueError):
            amount = 0
        if address:
            holders.append((address, amount))
    return holders


def parse_account_owner(result: Any) -> str | None:
    """Для токен-аккаунта его authority (jsonParsed), иначе программа-владелец."""

    value = result.get("value") if isinstance(result, dict) else None
    return _owner_of(value)


def parse_account_owners(result: Any, expected: int) -> list[str | None]:
    values = result.get("value") if isinstance(result, dict) else None
    if not isinstance(values, list) or len(values) != expected:
        raise SolanaRpcError("getMultipleAccounts вернул неожиданный ответ")
    return [_owner_of(value) for value in values]


def _owner_of(value: Any) -> str | None:
    if not isinstance(value, dict):
        return None
    data = value.get("data")
    if isinstance(data, dict):
        info = data.get("parsed", {}).get("info", {})
        if isinstance(info, dict) and info.get("owner"):
            return info["owner"]
    return value.get("owner")


__all__ = [
    "SolanaRpcClient",
    "SolanaRpcError",
    "parse_account_owner",
    "parse_account_owners",
    "parse_largest_accounts",
]
