"""Тесты разбора строки фида и вердикта."""

from datetime import datetime, timezone
from decimal import Decimal

from deeptrader.services.monitor.types import (
    RISKY_VERDICT,
    SAFE_VERDICT,
    SecurityAssessment,
    TokenCandidate,
)


class TestTokenCandidateFromFeed:
    def test_parses_full_row(self):
        candidate = TokenCandidate.from_feed(
            {
                "contractAddress": "Mint111",
                "token": {"name": "Deep", "symbol": "DEEP", "decimals": 6},
                "creator": "Creator111",
                "migrationTime": "2024-05-01T12:00:00Z",
                "initialLiquidity": 12.5,
                "feePercentage": "1.5",
                "holderCount": 42,
            }
        )

        assert candidate.address == "Mint111"
        assert candidate.symbol == "DEEP"
        assert candidate.name == "Deep"
        assert candidate.migration_time == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert candidate.initial_liquidity == Decimal("12.5")
        assert candidate.creator_fee == Decimal("1.5")
        assert candidate.holder_count == 42

    def test_epoch_millis_migration_time(self):
        candidate = TokenCandidate.from_feed({"migrationTime": 1714564800000})

        assert candidate.migration_time == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_malformed_row_degrades_to_empty_values(self):
        candidate = TokenCandidate.from_feed(
            {
                "contractAddress": "  ",
                "token": "not-a-dict",
                "initialLiquidity": "lots",
                "feePercentage": None,
                "holderCount": "many",
                "migrationTime": "yesterday",
            }
        )

        assert candidate.address is None
        assert candidate.symbol is None
        assert candidate.initial_liquidity == Decimal(0)
        assert candidate.creator_fee == Decimal(0)
        assert candidate.holder_count == 0
        assert candidate.migration_time is None


class TestSecurityAssessmentVerdict:
    def _assessment(self, score: int) -> SecurityAssessment:
        return SecurityAssessment(
            contract_address="Mint111",
            safety_score=score,
            top_holder_percent=10.0,
            is_bundled=False,
            liquidity_locked=True,
        )

    def test_safe_above_threshold(self):
        assert self._assessment(71).verdict == SAFE_VERDICT

    def test_threshold_itself_is_risky(self):
        assert self._assessment(70).verdict == RISKY_VERDICT

    def test_zero_is_risky(self):
        assert self._assessment(0).verdict == RISKY_VERDICT
