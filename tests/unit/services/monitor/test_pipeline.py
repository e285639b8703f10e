"""Сценарии конвейера оценки: валидация, gate, запись, алерт."""

from __future__ import annotations

from decimal import Decimal

import pytest

from config.settings import AlertSettings, FilterSettings
from deeptrader.repositories import get_security_check
from deeptrader.services.core import NotifierError, SqlStore
from deeptrader.services.monitor import EvaluationOutcome, EvaluationPipeline
from deeptrader.services.monitor.types import RISKY_VERDICT


class TestEvaluationPipeline:
    @pytest.mark.asyncio
    async def test_healthy_token_is_persisted_and_alerted(self, pipeline, make_candidate, store, notifier):
        candidate = make_candidate()

        result = await pipeline.evaluate(candidate)

        assert result.outcome is EvaluationOutcome.ALERTED
        assert result.persisted
        store.upsert_token_candidate.assert_awaited_once_with(candidate)
        store.upsert_security_assessment.assert_awaited_once_with(result.assessment)
        notifier.send_alert.assert_awaited_once()
        message = notifier.send_alert.await_args.args[0]
        assert "New Token Alert!" in message
        assert "Analysis: Safe" in message
        assert notifier.send_alert.await_args.kwargs["address"] == candidate.address

    @pytest.mark.asyncio
    async def test_low_liquidity_skips_external_calls(
        self, pipeline, make_candidate, inspector, scorer, store, notifier
    ):
        result = await pipeline.evaluate(make_candidate(initial_liquidity=Decimal("3")))

        assert result.outcome is EvaluationOutcome.REJECTED_BASIC
        assert result.assessment is None
        inspector.fetch_holder_distribution.assert_not_awaited()
        inspector.fetch_program_accounts.assert_not_awaited()
        scorer.fetch_safety_score.assert_not_awaited()
        store.upsert_token_candidate.assert_not_awaited()
        notifier.send_alert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_scorer_failure_fails_gate(self, pipeline, make_candidate, scorer, store, notifier):
        scorer.fetch_safety_score.side_effect = TimeoutError("rugcheck down")

        result = await pipeline.evaluate(make_candidate())

        assert result.outcome is EvaluationOutcome.REJECTED_SECURITY
        assert result.assessment.safety_score == 0
        store.upsert_token_candidate.assert_not_awaited()
        store.upsert_security_assessment.assert_not_awaited()
        notifier.send_alert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_holder_list_fails_on_concentration(
        self, pipeline, make_candidate, inspector, store
    ):
        inspector.fetch_holder_distribution.return_value = []

        result = await pipeline.evaluate(make_candidate())

        assert result.outcome is EvaluationOutcome.REJECTED_SECURITY
        assert any(reason.startswith("топ-холдер") for reason in result.reasons)
        assert "bundled" in result.reasons
        store.upsert_token_candidate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_below_alert_threshold_is_persisted_silently(
        self, pipeline, make_candidate, scorer, store, notifier
    ):
        scorer.fetch_safety_score.return_value = 75

        result = await pipeline.evaluate(make_candidate())

        assert result.outcome is EvaluationOutcome.PERSISTED
        store.upsert_security_assessment.assert_awaited_once()
        notifier.send_alert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_alerts_disabled(
        self, analyzer, store, notifier, filter_settings, make_candidate
    ):
        pipeline = EvaluationPipeline(
            analyzer,
            store,
            notifier,
            filters=filter_settings,
            alerts=AlertSettings(enabled=False),
        )

        result = await pipeline.evaluate(make_candidate())

        assert result.outcome is EvaluationOutcome.PERSISTED
        notifier.send_alert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_alert_failure_does_not_undo_persistence(
        self, pipeline, make_candidate, store, notifier
    ):
        notifier.send_alert.side_effect = NotifierError("канал не задан")

        result = await pipeline.evaluate(make_candidate())

        assert result.outcome is EvaluationOutcome.PERSISTED
        store.upsert_security_assessment.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_persistence_error_propagates_without_alert(
        self, pipeline, make_candidate, store, notifier
    ):
        store.upsert_security_assessment.side_effect = RuntimeError("db is locked")

        with pytest.raises(RuntimeError, match="db is locked"):
            await pipeline.evaluate(make_candidate())

        notifier.send_alert.assert_not_awaited()


class TestPipelineWithSqlStore:
    @pytest.mark.asyncio
    async def test_repeated_evaluation_is_idempotent(
        self, analyzer, notifier, filter_settings, alert_settings, session_maker, make_candidate
    ):
        pipeline = EvaluationPipeline(
            analyzer,
            SqlStore(session_maker),
            notifier,
            filters=filter_settings,
            alerts=alert_settings,
        )
        candidate = make_candidate()

        first = await pipeline.evaluate(candidate)
        second = await pipeline.evaluate(candidate)

        assert first.token_inserted and first.assessment_inserted
        assert not second.token_inserted
        assert not second.assessment_inserted
        stats = await SqlStore(session_maker).stats()
        assert stats.tokens_stored == 1
        assert stats.checks_stored == 1

    @pytest.mark.asyncio
    async def test_unavailable_score_stored_as_zero_and_risky(
        self, analyzer, scorer, notifier, session_maker, make_candidate
    ):
        scorer.fetch_safety_score.side_effect = ConnectionError("rugcheck down")
        pipeline = EvaluationPipeline(
            analyzer,
            SqlStore(session_maker),
            notifier,
            filters=FilterSettings(min_safety_score=0),
            alerts=AlertSettings(),
        )
        candidate = make_candidate()

        result = await pipeline.evaluate(candidate)

        assert result.outcome is EvaluationOutcome.PERSISTED
        async with session_maker() as session:
            check = await get_security_check(session, candidate.address)
        assert check is not None
        assert check.rugcheck_score == 0
        assert check.rugcheck_verdict == RISKY_VERDICT
        notifier.send_alert.assert_not_awaited()
