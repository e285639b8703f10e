"""Security-анализ токена.

Три независимые проверки (распределение держателей, лок ликвидности, внешний
safety score) выполняются параллельно. Упавшая проверка не прерывает анализ,
вместо её результата берётся самое консервативное значение.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Sequence

from loguru import logger

from config.settings import FilterSettings
from ..contracts import ChainInspector, SafetyScorer
from .liquidity_lock import LiquidityLockChecker
from .types import SecurityAssessment, utcnow

MAX_TOP_HOLDER_PERCENT = 100.0


@dataclass(slots=True, frozen=True)
class HolderSummary:
    top_holder_percent: float
    holder_count: int
    is_bundled: bool


def top_holder_percent(balances: Sequence[int | float]) -> float:
    """Доля крупнейшего держателя в сумме выборки, %.

    Пустая выборка или нулевая сумма дают 100% (максимальный риск).
    """

    total = sum(balances)
    if not balances or total <= 0:
        return MAX_TOP_HOLDER_PERCENT
    return max(balances) / total * 100


def summarize_holders(
    holders: Sequence[tuple[str, int]],
    bundled_threshold: int,
) -> HolderSummary:
    distinct = {holder for holder, _ in holders}
    return HolderSummary(
        top_holder_percent=top_holder_percent([balance for _, balance in holders]),
        holder_count=len(distinct),
        is_bundled=len(distinct) < bundled_threshold,
    )


class SecurityAnalyzer:
    """Собирает SecurityAssessment из трёх независимых проверок."""

    def __init__(
        self,
        inspector: ChainInspector,
        scorer: SafetyScorer,
        lock_checker: LiquidityLockChecker,
        settings: FilterSettings,
    ) -> None:
        self._inspector = inspector
        self._scorer = scorer
        self._lock_checker = lock_checker
        self._settings = settings

    async def analyze(self, address: str) -> SecurityAssessment:
        results = await asyncio.gather(
            self._holder_summary(address),
            self._lock_checker.is_locked(address),
            self._safety_score(address),
            return_exceptions=True,
        )
        reasons: list[str] = []

        holders = self._unwrap(results[0], None, address, "holders")
        if holders is None:
            # сбой выборки отличаем от «мало держателей»
            reasons.append("список держателей недоступен")
            top_percent, is_bundled = MAX_TOP_HOLDER_PERCENT, True
        else:
            top_percent, is_bundled = holders.top_holder_percent, holders.is_bundled

        locked = self._unwrap(results[1], None, address, "liquidity_lock")
        if locked is None:
            reasons.append("статус лока неизвестен")
            locked = False

        score = self._unwrap(results[2], None, address, "safety_score")
        if score is None:
            reasons.append("safety score недоступен")
            score = 0

        return SecurityAssessment(
            contract_address=address,
            safety_score=score,
            top_holder_percent=top_percent,
            is_bundled=is_bundled,
            liquidity_locked=bool(locked),
            checked_at=utcnow(),
            reasons=tuple(reasons),
            safe_threshold=self._settings.safe_verdict_score,
        )

    async def _holder_summary(self, address: str) -> HolderSummary:
        holders = await self._inspector.fetch_holder_distribution(address)
        return summarize_holders(holders, self._settings.bundled_holder_threshold)

    async def _safety_score(self, address: str) -> int:
        score = await self._scorer.fetch_safety_score(address)
        return max(0, min(int(score), 100))

    @staticmethod
    def _unwrap(value: Any, fallback: Any, address: str, check: str) -> Any:
        if isinstance(value, Exception):
            logger.warning(
                "Проверка {check} для {addr} упала, берём консервативное значение: {error}",
                check=check,
                addr=address,
                error=value,
            )
            return fallback
        return value


__all__ = ["HolderSummary", "SecurityAnalyzer", "summarize_holders", "top_holder_percent"]
