"""Доменные структуры мониторинга миграций."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

SAFE_VERDICT = "Safe"
RISKY_VERDICT = "Risky"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return result if result.is_finite() else Decimal(0)


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_time(value: Any) -> datetime | None:
    """ISO-строка или unix-время (секунды/миллисекунды)."""

    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        try:
            ts = float(value)
            if ts > 1e12:
                ts /= 1000
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(slots=True, frozen=True)
class TokenCandidate:
    """Свежий токен из фида миграций (ещё не оценён)."""

    address: str | None
    name: str | None
    symbol: str | None
    creator: str | None
    migration_time: datetime | None
    initial_liquidity: Decimal
    creator_fee: Decimal
    holder_count: int

    @classmethod
    def from_feed(cls, raw: dict[str, Any]) -> "TokenCandidate":
        """Разбирает строку фида; битые поля превращаются в пустые значения,
        чтобы такой токен отсеялся на базовой валидации."""

        token = raw.get("token") if isinstance(raw.get("token"), dict) else {}
        return cls(
            address=_to_text(raw.get("contractAddress")),
            name=_to_text(token.get("name")),
            symbol=_to_text(token.get("symbol")),
            creator=_to_text(raw.get("creator")),
            migration_time=_parse_time(raw.get("migrationTime")),
            initial_liquidity=_to_decimal(raw.get("initialLiquidity")),
            creator_fee=_to_decimal(raw.get("feePercentage")),
            holder_count=_to_int(raw.get("holderCount")),
        )

    @property
    def label(self) -> str:
        return self.symbol or (self.address or "?")[-6:]


@dataclass(slots=True, frozen=True)
class SecurityAssessment:
    """Результат security-анализа одного токена."""

    contract_address: str
    safety_score: int
    top_holder_percent: float
    is_bundled: bool
    liquidity_locked: bool
    checked_at: datetime = field(default_factory=utcnow)
    reasons: tuple[str, ...] = ()
    safe_threshold: int = 70

    @property
    def verdict(self) -> str:
        return SAFE_VERDICT if self.safety_score > self.safe_threshold else RISKY_VERDICT


class EvaluationOutcome(str, enum.Enum):
    REJECTED_BASIC = "rejected_basic"
    REJECTED_SECURITY = "rejected_security"
    PERSISTED = "persisted"
    ALERTED = "alerted"


@dataclass(slots=True)
class EvaluationResult:
    """Какой путь прошёл токен по конвейеру."""

    candidate: TokenCandidate
    outcome: EvaluationOutcome
    reasons: tuple[str, ...] = ()
    assessment: SecurityAssessment | None = None
    token_inserted: bool = False
    assessment_inserted: bool = False

    @property
    def persisted(self) -> bool:
        return self.outcome in (EvaluationOutcome.PERSISTED, EvaluationOutcome.ALERTED)


__all__ = [
    "EvaluationOutcome",
    "EvaluationResult",
    "RISKY_VERDICT",
    "SAFE_VERDICT",
    "SecurityAssessment",
    "TokenCandidate",
    "utcnow",
]
