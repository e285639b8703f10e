"""Работа с таблицей security_checks."""

from __future__ import annotations

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from deeptrader.models import SecurityCheck
from deeptrader.services.monitor.types import SecurityAssessment
from ._upsert import insert_ignore


async def insert_security_check_if_absent(
    session: AsyncSession,
    assessment: SecurityAssessment,
) -> bool:
    return await insert_ignore(
        session,
        SecurityCheck,
        {
            "contract_address": assessment.contract_address,
            "rugcheck_score": assessment.safety_score,
            "rugcheck_verdict": assessment.verdict,
            "top_holder_percent": round(assessment.top_holder_percent, 2),
            "is_bundled": assessment.is_bundled,
            "liquidity_locked": assessment.liquidity_locked,
            "check_time": assessment.checked_at,
        },
        conflict_column="contract_address",
    )


async def get_security_check(session: AsyncSession, address: str) -> SecurityCheck | None:
    stmt = select(SecurityCheck).where(SecurityCheck.contract_address == address)
    return (await session.exec(stmt)).one_or_none()


__all__ = ["get_security_check", "insert_security_check_if_absent"]
