"""Мигрировавшие токены, прошедшие все фильтры."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from .base import CreatedAtModel


class Token(CreatedAtModel, table=True):
    __tablename__ = "tokens"

    id: Optional[int] = Field(default=None, primary_key=True)
    contract_address: str = Field(max_length=64, unique=True, index=True)
    name: str = Field(default="", max_length=128)
    symbol: str = Field(max_length=32, index=True)
    creator_wallet: str = Field(default="", max_length=64, index=True)
    migration_time: Optional[datetime] = Field(
        default=None, index=True, sa_type=DateTime(timezone=True)
    )
    initial_liquidity: Decimal = Field(default=Decimal(0), max_digits=20, decimal_places=8)
    creator_fee: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=2)
    holders: int = Field(default=0)


__all__ = ["Token"]
