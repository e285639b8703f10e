"""Проверка блокировки ликвидности через известные timelock-программы.

Ищем токен-аккаунты минта (getProgramAccounts по SPL Token с фильтром размера
165 байт) и проверяем, распоряжается ли хоть одним из них программа из
allow-list. Владельцев запрашиваем пачками, а число проверяемых аккаунтов
ограничено ``max_accounts``: у популярного минта их тысячи.
Список ведётся вручную: новые timelock-программы не распознаются, пока их не
добавят в ``solana.timelock_programs``.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from ..contracts import ChainInspector


class LiquidityLockChecker:
    def __init__(
        self,
        inspector: ChainInspector,
        *,
        timelock_programs: Iterable[str],
        token_program_id: str,
        account_size: int = 165,
        batch_size: int = 100,
        max_accounts: int = 500,
    ) -> None:
        self._inspector = inspector
        self._timelock_programs = frozenset(timelock_programs)
        self._token_program_id = token_program_id
        self._account_size = account_size
        self._batch_size = batch_size
        self._max_accounts = max_accounts

    def is_timelock_program(self, program_id: str | None) -> bool:
        return program_id is not None and program_id in self._timelock_programs

    async def is_locked(self, mint: str) -> bool:
        """True при первом совпадении; без аккаунтов False.

        Ошибка выборки аккаунтов пробрасывается (вызывающий трактует её как
        «не залочено»), ошибка по отдельной пачке лишь пропускает её.
        """

        accounts = await self._inspector.fetch_program_accounts(
            mint,
            self._account_size,
            self._token_program_id,
        )
        if not accounts:
            logger.debug("Mint {mint}: токен-аккаунтов не найдено", mint=mint)
            return False
        if len(accounts) > self._max_accounts:
            logger.debug(
                "Mint {mint}: {total} токен-аккаунтов, проверяем первые {limit}",
                mint=mint,
                total=len(accounts),
                limit=self._max_accounts,
            )
            accounts = accounts[: self._max_accounts]

        for start in range(0, len(accounts), self._batch_size):
            batch = accounts[start : start + self._batch_size]
            try:
                owners = await self._inspector.fetch_account_owners(batch)
            except Exception as exc:  # noqa: BLE001
                logger.debug(
                    "Mint {mint}: не удалось получить владельцев {count} аккаунтов: {error}",
                    mint=mint,
                    count=len(batch),
                    error=exc,
                )
                continue
            for account, owner in zip(batch, owners):
                if self.is_timelock_program(owner):
                    logger.debug(
                        "Mint {mint}: аккаунт {account} под timelock {owner}",
                        mint=mint,
                        account=account,
                        owner=owner,
                    )
                    return True
        return False


__all__ = ["LiquidityLockChecker"]
