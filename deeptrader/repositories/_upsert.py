"""INSERT ... ON CONFLICT DO NOTHING для PostgreSQL и SQLite."""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel.ext.asyncio.session import AsyncSession

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


async def insert_ignore(
    session: AsyncSession,
    model: Any,
    values: dict[str, Any],
    *,
    conflict_column: str,
) -> bool:
    """Вставляет строку, если ключа ещё нет. True, если строка вставлена."""

    dialect = session.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"insert-or-ignore не поддерживается для {dialect}")
    stmt = insert(model).values(**values).on_conflict_do_nothing(index_elements=[conflict_column])
    result = await session.execute(stmt)
    await session.commit()
    return result.rowcount == 1


__all__ = ["insert_ignore"]
