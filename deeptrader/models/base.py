"""Базовые примеси для SQLModel моделей."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreatedAtModel(SQLModel, table=False):
    """Записи не редактируются после вставки, поэтому только created_at.

    Default продублирован на уровне колонки: insert-or-ignore идёт через Core.
    """

    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"default": utcnow},
    )


__all__ = ["CreatedAtModel", "utcnow"]
