"""Контракты внешних сервисов, которыми пользуется ядро мониторинга.

Ядро (цикл и конвейер оценки) импортирует только эти протоколы; конкретные
клиенты (pump.fun, Solana RPC, rugcheck, Telegram, SQL) подставляются в loader.
Любой метод может бросить исключение, ядро само решает, как деградировать.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .monitor.types import SecurityAssessment, TokenCandidate


class FeedClient(Protocol):
    async def fetch_new_candidates(self) -> list[TokenCandidate]: ...


class ChainInspector(Protocol):
    async def fetch_holder_distribution(self, address: str) -> list[tuple[str, int]]:
        """Крупнейшие держатели: (аккаунт, баланс в минимальных единицах)."""
        ...

    async def fetch_program_accounts(
        self,
        mint: str,
        data_size: int,
        owner_program: str,
    ) -> list[str]: ...

    async def fetch_account_owner(self, account: str) -> str | None:
        """Кто распоряжается аккаунтом.

        Для SPL токен-аккаунта это authority из jsonParsed-данных (кошелёк или
        PDA timelock-программы), а не программа-владелец аккаунта. Для
        остальных аккаунтов программа-владелец. None, если аккаунта нет.
        """
        ...

    async def fetch_account_owners(self, accounts: list[str]) -> list[str | None]:
        """То же для пачки аккаунтов; ответ в порядке ``accounts``."""
        ...


class SafetyScorer(Protocol):
    async def fetch_safety_score(self, address: str) -> int: ...


class Notifier(Protocol):
    async def send_alert(self, message: str, *, address: str | None = None) -> None: ...


class Store(Protocol):
    """Идемпотентное хранилище: повторная запись того же адреса ничего не меняет (False)."""

    async def upsert_token_candidate(self, candidate: TokenCandidate) -> bool: ...

    async def upsert_security_assessment(self, assessment: SecurityAssessment) -> bool: ...


__all__ = ["ChainInspector", "FeedClient", "Notifier", "SafetyScorer", "Store"]
