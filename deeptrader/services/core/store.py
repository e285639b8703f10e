"""SQL-реализация хранилища для конвейера оценки.

Каждый вызов открывает собственную сессию: запись токена и его проверки
независимы и не откатываются вместе.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from deeptrader.repositories import (
    StoreStats,
    get_store_stats,
    insert_security_check_if_absent,
    insert_token_if_absent,
)
from ..monitor.types import SecurityAssessment, TokenCandidate


class SqlStore:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def upsert_token_candidate(self, candidate: TokenCandidate) -> bool:
        async with self._session_maker() as session:
            inserted = await insert_token_if_absent(session, candidate)
        if not inserted:
            logger.debug("Токен {addr} уже в базе, запись пропущена", addr=candidate.address)
        return inserted

    async def upsert_security_assessment(self, assessment: SecurityAssessment) -> bool:
        async with self._session_maker() as session:
            inserted = await insert_security_check_if_absent(session, assessment)
        if not inserted:
            logger.debug(
                "Проверка {addr} уже в базе, запись пропущена",
                addr=assessment.contract_address,
            )
        return inserted

    async def stats(self) -> StoreStats:
        async with self._session_maker() as session:
            return await get_store_stats(session)


__all__ = ["SqlStore"]
