"""Работа с таблицей tokens."""

from __future__ import annotations

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from deeptrader.models import Token
from deeptrader.services.monitor.types import TokenCandidate
from ._upsert import insert_ignore


async def insert_token_if_absent(session: AsyncSession, candidate: TokenCandidate) -> bool:
    return await insert_ignore(
        session,
        Token,
        {
            "contract_address": candidate.address,
            "name": candidate.name or "",
            "symbol": candidate.symbol,
            "creator_wallet": candidate.creator or "",
            "migration_time": candidate.migration_time,
            "initial_liquidity": candidate.initial_liquidity,
            "creator_fee": candidate.creator_fee,
            "holders": candidate.holder_count,
        },
        conflict_column="contract_address",
    )


async def get_token(session: AsyncSession, address: str) -> Token | None:
    stmt = select(Token).where(Token.contract_address == address)
    return (await session.exec(stmt)).one_or_none()


__all__ = ["get_token", "insert_token_if_absent"]
