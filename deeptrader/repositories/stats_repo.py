"""Агрегаты для команды /stats."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from deeptrader.models import SecurityCheck, Token
from deeptrader.services.monitor.types import SAFE_VERDICT


@dataclass(slots=True, frozen=True)
class StoreStats:
    tokens_stored: int
    checks_stored: int
    safe_checks: int
    avg_score: float
    last_check_at: datetime | None

    @property
    def safe_percent(self) -> float:
        if not self.checks_stored:
            return 0.0
        return self.safe_checks / self.checks_stored * 100


async def get_store_stats(session: AsyncSession) -> StoreStats:
    tokens = (await session.exec(select(func.count(Token.id)))).one()
    checks, avg_score, last_check = (
        await session.exec(
            select(
                func.count(SecurityCheck.id),
                func.avg(SecurityCheck.rugcheck_score),
                func.max(SecurityCheck.check_time),
            )
        )
    ).one()
    safe = (
        await session.exec(
            select(func.count(SecurityCheck.id)).where(
                SecurityCheck.rugcheck_verdict == SAFE_VERDICT
            )
        )
    ).one()
    return StoreStats(
        tokens_stored=int(tokens or 0),
        checks_stored=int(checks or 0),
        safe_checks=int(safe or 0),
        avg_score=float(avg_score or 0.0),
        last_check_at=last_check,
    )


__all__ = ["StoreStats", "get_store_stats"]
