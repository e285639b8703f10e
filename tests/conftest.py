"""Общие фикстуры тестов DeepTrader."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from config.settings import AlertSettings, FilterSettings, MonitorSettings
from deeptrader.middlewares.db import build_session_maker, init_db
from deeptrader.services.monitor import (
    EvaluationPipeline,
    LiquidityLockChecker,
    SecurityAnalyzer,
    TokenCandidate,
)

TIMELOCK_PROGRAM = "Lock7DCXKqJakibJKf8GJwm3CYmknWbUVKbQYq9xUGaGg"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
MINT = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


def healthy_holders() -> list[tuple[str, int]]:
    """19 держателей, у крупнейшего ровно 10% выборки."""

    return [("holder-top", 10)] + [(f"holder-{i}", 5) for i in range(18)]


@pytest.fixture
def make_candidate() -> Callable[..., TokenCandidate]:
    def _make(**overrides: Any) -> TokenCandidate:
        fields: dict[str, Any] = {
            "address": MINT,
            "name": "Deep Token",
            "symbol": "DEEP",
            "creator": "CreatorWallet1111111111111111111111111111111",
            "migration_time": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            "initial_liquidity": Decimal("10"),
            "creator_fee": Decimal("2"),
            "holder_count": 50,
        }
        fields.update(overrides)
        return TokenCandidate(**fields)

    return _make


@pytest.fixture
def filter_settings() -> FilterSettings:
    return FilterSettings()


@pytest.fixture
def alert_settings() -> AlertSettings:
    return AlertSettings()


@pytest.fixture
def monitor_settings() -> MonitorSettings:
    return MonitorSettings(poll_interval_sec=60, fast_retry_interval_sec=5, shutdown_grace_sec=1)


@pytest.fixture
def inspector() -> AsyncMock:
    """ChainInspector, по умолчанию описывающий «здоровый» токен."""

    mock = AsyncMock()
    mock.fetch_holder_distribution.return_value = healthy_holders()
    mock.fetch_program_accounts.return_value = ["lp-account-1"]
    mock.fetch_account_owners.side_effect = lambda accounts: [TIMELOCK_PROGRAM] * len(accounts)
    return mock


@pytest.fixture
def scorer() -> AsyncMock:
    mock = AsyncMock()
    mock.fetch_safety_score.return_value = 85
    return mock


@pytest.fixture
def store() -> AsyncMock:
    mock = AsyncMock()
    mock.upsert_token_candidate.return_value = True
    mock.upsert_security_assessment.return_value = True
    return mock


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def lock_checker(inspector: AsyncMock) -> LiquidityLockChecker:
    return LiquidityLockChecker(
        inspector,
        timelock_programs=[TIMELOCK_PROGRAM],
        token_program_id=TOKEN_PROGRAM,
        account_size=165,
    )


@pytest.fixture
def analyzer(
    inspector: AsyncMock,
    scorer: AsyncMock,
    lock_checker: LiquidityLockChecker,
    filter_settings: FilterSettings,
) -> SecurityAnalyzer:
    return SecurityAnalyzer(inspector, scorer, lock_checker, filter_settings)


@pytest.fixture
def pipeline(
    analyzer: SecurityAnalyzer,
    store: AsyncMock,
    notifier: AsyncMock,
    filter_settings: FilterSettings,
    alert_settings: AlertSettings,
) -> EvaluationPipeline:
    return EvaluationPipeline(
        analyzer,
        store,
        notifier,
        filters=filter_settings,
        alerts=alert_settings,
    )


@pytest.fixture
async def session_maker():
    """In-memory SQLite, одно соединение на весь тест."""

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield build_session_maker(engine)
    await engine.dispose()
