"""Статистика для чат-команд.

Бот читает её через StatsService, а не через общие синглтоны с циклом.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from deeptrader.repositories import StoreStats
from deeptrader.utils.cache import cached_call
from ..monitor.loop import LoopController
from .store import SqlStore

STATS_CACHE_KEY = "stats:store"


@dataclass(slots=True, frozen=True)
class StatsSummary:
    store: StoreStats
    loop_state: str
    cycles: int
    failed_cycles: int
    candidates_seen: int
    last_cycle_at: datetime | None


class StatsService:
    def __init__(
        self,
        store: SqlStore,
        controller: LoopController,
        *,
        cache_ttl: int = 0,
    ) -> None:
        self._store = store
        self._controller = controller
        self._cache_ttl = cache_ttl

    async def summary(self) -> StatsSummary:
        if self._cache_ttl > 0:
            store_stats = await cached_call(STATS_CACHE_KEY, self._cache_ttl, self._store.stats)
        else:
            store_stats = await self._store.stats()
        controller = self._controller
        return StatsSummary(
            store=store_stats,
            loop_state=controller.state.value,
            cycles=controller.cycles,
            failed_cycles=controller.failed_cycles,
            candidates_seen=controller.candidates_seen,
            last_cycle_at=controller.last_cycle_at,
        )


__all__ = ["STATS_CACHE_KEY", "StatsService", "StatsSummary"]
