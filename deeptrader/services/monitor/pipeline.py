"""Конвейер оценки одного мигрировавшего токена.

Порядок стадий строгий, каждая может оборвать остальные:
базовая валидация → security-анализ → security gate → запись в БД → алерт.
Ошибка записи пробрасывается наружу (цикл мониторинга изолирует её на уровне
токена), ошибка алерта только логируется.
"""

from __future__ import annotations

from loguru import logger

from config.settings import AlertSettings, FilterSettings
from ..contracts import Notifier, Store
from .alerts import format_alert
from .analyzer import SecurityAnalyzer
from .filters import check_security_gate, should_alert, validate_basics
from .types import EvaluationOutcome, EvaluationResult, SecurityAssessment, TokenCandidate


class EvaluationPipeline:
    def __init__(
        self,
        analyzer: SecurityAnalyzer,
        store: Store,
        notifier: Notifier,
        *,
        filters: FilterSettings,
        alerts: AlertSettings,
    ) -> None:
        self._analyzer = analyzer
        self._store = store
        self._notifier = notifier
        self._filters = filters
        self._alerts = alerts

    async def evaluate(self, candidate: TokenCandidate) -> EvaluationResult:
        reasons = validate_basics(candidate, self._filters)
        if reasons:
            logger.debug(
                "Токен {addr} отклонён валидацией: {reasons}",
                addr=candidate.address,
                reasons="; ".join(reasons),
            )
            return EvaluationResult(candidate, EvaluationOutcome.REJECTED_BASIC, tuple(reasons))

        assert candidate.address is not None
        assessment = await self._analyzer.analyze(candidate.address)
        reasons = check_security_gate(assessment, self._filters)
        if reasons:
            logger.debug(
                "Токен {symbol} ({addr}) не прошёл security gate: {reasons}",
                symbol=candidate.label,
                addr=candidate.address,
                reasons="; ".join(reasons),
            )
            return EvaluationResult(
                candidate,
                EvaluationOutcome.REJECTED_SECURITY,
                tuple(reasons),
                assessment=assessment,
            )

        token_inserted = await self._store.upsert_token_candidate(candidate)
        assessment_inserted = await self._store.upsert_security_assessment(assessment)
        logger.info(
            "Токен {symbol} ({addr}) сохранён: score {score}, топ-холдер {top:.2f}%",
            symbol=candidate.label,
            addr=candidate.address,
            score=assessment.safety_score,
            top=assessment.top_holder_percent,
        )
        result = EvaluationResult(
            candidate,
            EvaluationOutcome.PERSISTED,
            assessment=assessment,
            token_inserted=token_inserted,
            assessment_inserted=assessment_inserted,
        )

        if self._alerts.enabled and should_alert(assessment, self._alerts):
            if await self._safe_alert(candidate, assessment):
                result.outcome = EvaluationOutcome.ALERTED
        return result

    async def _safe_alert(self, candidate: TokenCandidate, assessment: SecurityAssessment) -> bool:
        try:
            await self._notifier.send_alert(
                format_alert(candidate, assessment),
                address=assessment.contract_address,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Не удалось отправить алерт по {addr}: {error}",
                addr=assessment.contract_address,
                error=exc,
            )
            return False
        logger.info("Алерт по {symbol} отправлен", symbol=candidate.label)
        return True


__all__ = ["EvaluationPipeline"]
