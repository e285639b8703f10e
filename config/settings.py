"""Глобальные настройки DeepTrader.

Настройки разделены по доменам (Telegram, Solana RPC, фиды, фильтры, мониторинг),
чтобы пороги и эндпоинты менялись без правки кода.
Вся конфигурация загружается из переменных окружения через Pydantic Settings
(вложенные секции через разделитель ``__``, например ``FILTERS__MIN_LIQUIDITY=5``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    Field,
    NonNegativeFloat,
    PositiveFloat,
    PositiveInt,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent
ACCESSIBLE_ENV_FILE = BASE_DIR / "config" / "runtime.env"
DEFAULT_ENV_FILE = BASE_DIR / ".env"
ENV_FILE = ACCESSIBLE_ENV_FILE if ACCESSIBLE_ENV_FILE.exists() else DEFAULT_ENV_FILE

DEFAULT_TIMELOCK_PROGRAMS = [
    "Lock7DCXKqJakibJKf8GJwm3CYmknWbUVKbQYq9xUGaGg",  # Unicrypt
    "TPLock3XXXXXXXXXXXXXXXXXXXXXXXXXXXXXy1ZtX",  # Token timelock
]
SPL_TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


class TelegramSettings(BaseModel):
    """Конфигурация Telegram-бота и канала для алертов."""

    token: str = Field(..., description="Токен бота")
    channel_id: str = Field("", description="ID или @username канала для алертов")
    admins: list[int] = Field(default_factory=list, description="ID операторов/админов")

    @field_validator("channel_id", mode="before")
    @classmethod
    def _strip_channel(cls, value):
        if isinstance(value, str):
            return value.strip()
        return str(value)


class SolanaSettings(BaseModel):
    """Solana JSON-RPC и список известных timelock-программ."""

    rpc_endpoint: AnyHttpUrl = Field(
        "https://api.mainnet-beta.solana.com",
        description="HTTP RPC (getTokenLargestAccounts, getProgramAccounts, getMultipleAccounts)",
    )
    commitment: Literal["processed", "confirmed", "finalized"] = "confirmed"
    request_timeout: PositiveInt = 10
    token_program_id: str = SPL_TOKEN_PROGRAM_ID
    token_account_size: PositiveInt = 165
    owner_batch_size: int = Field(100, ge=1, le=100, description="Ключей в одном getMultipleAccounts")
    max_lock_accounts: PositiveInt = Field(
        500, description="Сколько токен-аккаунтов минта проверять на timelock"
    )
    timelock_programs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TIMELOCK_PROGRAMS),
        description="Программы, которые доказуемо блокируют вывод ликвидности",
    )


class PumpFunSettings(BaseModel):
    """Фид мигрировавших токенов pump.fun."""

    api_url: AnyHttpUrl = Field("https://frontend-api.pump.fun", description="База API фида")
    api_key: SecretStr = SecretStr("")
    request_timeout: PositiveInt = 10


class RugcheckSettings(BaseModel):
    """Внешний сервис оценки безопасности контракта (0–100)."""

    api_url: AnyHttpUrl = Field("https://api.rugcheck.xyz/v1", description="База API rugcheck")
    api_key: SecretStr = SecretStr("")
    request_timeout: PositiveInt = 10


class FilterSettings(BaseModel):
    """Пороги базовой валидации и security gate."""

    min_liquidity: NonNegativeFloat = 5.0
    max_creator_fee: NonNegativeFloat = 10.0
    min_holders: int = Field(25, ge=0)
    min_safety_score: int = Field(70, ge=0, le=100)
    max_top_holder_percent: float = Field(20.0, ge=0, le=100)
    bundled_holder_threshold: PositiveInt = 10
    safe_verdict_score: int = Field(70, ge=0, le=100)


class AlertSettings(BaseModel):
    """Строгий предикат алерта (должен быть не мягче security gate)."""

    enabled: bool = True
    min_safety_score: int = Field(80, ge=0, le=100)
    max_top_holder_percent: float = Field(15.0, ge=0, le=100)


class MonitorSettings(BaseModel):
    """Интервалы цикла мониторинга."""

    poll_interval_sec: PositiveFloat = 60.0
    fast_retry_interval_sec: PositiveFloat = 5.0
    shutdown_grace_sec: PositiveFloat = 10.0


class CacheSettings(BaseModel):
    """Настройки кешей (aiocache поддерживает memory / redis)."""

    backend: Literal["memory", "redis"] = "memory"
    ttl_seconds: int = 30
    redis_dsn: str | None = None


class DatabaseSettings(BaseModel):
    """SQLModel + aiosqlite (по умолчанию) и готовность к Postgres."""

    dsn: str = Field(
        "sqlite+aiosqlite:///./database/deeptrader.db",
        description="Строка подключения SQLAlchemy/SQLModel",
    )
    echo: bool = False


class LoggingSettings(BaseModel):
    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    serialize: bool = Field(False, description="JSON-строки вместо цветного вывода")


class AppSettings(BaseSettings):
    """Главный контейнер настроек DeepTrader."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["dev", "prod"] = "dev"
    telegram: TelegramSettings
    solana: SolanaSettings = SolanaSettings()
    pumpfun: PumpFunSettings = PumpFunSettings()
    rugcheck: RugcheckSettings = RugcheckSettings()
    filters: FilterSettings = FilterSettings()
    alerts: AlertSettings = AlertSettings()
    monitor: MonitorSettings = MonitorSettings()
    cache: CacheSettings = CacheSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()

    @model_validator(mode="after")
    def _alerts_not_looser_than_gate(self) -> "AppSettings":
        # алерт обязан подразумевать прохождение gate
        if self.alerts.min_safety_score < self.filters.min_safety_score:
            raise ValueError("alerts.min_safety_score не может быть ниже filters.min_safety_score")
        if self.alerts.max_top_holder_percent > self.filters.max_top_holder_percent:
            raise ValueError(
                "alerts.max_top_holder_percent не может превышать filters.max_top_holder_percent"
            )
        return self

    @property
    def is_production(self) -> bool:
        """True, если сервис запущен в продовой среде."""

        return self.environment == "prod"


# Ленивый синглтон (избегаем глобальных переменных в модулях).
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Возвращает единый экземпляр настроек.

    Значения кэшируются, поэтому чтение .env происходит ровно один раз за процесс.
    """

    global _settings
    if _settings is None:
        _settings = AppSettings()  # type: ignore[call-arg]
    return _settings


__all__ = [
    "AlertSettings",
    "AppSettings",
    "CacheSettings",
    "DatabaseSettings",
    "FilterSettings",
    "LoggingSettings",
    "MonitorSettings",
    "PumpFunSettings",
    "RugcheckSettings",
    "SolanaSettings",
    "TelegramSettings",
    "get_settings",
]
