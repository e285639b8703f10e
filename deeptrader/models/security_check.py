"""Результаты security-анализа (одна запись на токен, первая побеждает)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from .base import CreatedAtModel


class SecurityCheck(CreatedAtModel, table=True):
    __tablename__ = "security_checks"

    id: Optional[int] = Field(default=None, primary_key=True)
    contract_address: str = Field(
        max_length=64,
        unique=True,
        index=True,
        foreign_key="tokens.contract_address",
    )
    rugcheck_score: int = Field(default=0, index=True)
    rugcheck_verdict: str = Field(default="Risky", max_length=16)
    top_holder_percent: float = Field(default=100.0)
    is_bundled: bool = Field(default=False)
    liquidity_locked: bool = Field(default=False)
    check_time: datetime = Field(index=True, sa_type=DateTime(timezone=True))


__all__ = ["SecurityCheck"]
