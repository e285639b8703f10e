"""Ядро мониторинга: цикл, конвейер оценки и security-анализ."""

from .analyzer import SecurityAnalyzer
from .liquidity_lock import LiquidityLockChecker
from .loop import LoopController, LoopState, MonitoringLoop
from .pipeline import EvaluationPipeline
from .types import (
    EvaluationOutcome,
    EvaluationResult,
    SecurityAssessment,
    TokenCandidate,
)

__all__ = [
    "EvaluationOutcome",
    "EvaluationPipeline",
    "EvaluationResult",
    "LiquidityLockChecker",
    "LoopController",
    "LoopState",
    "MonitoringLoop",
    "SecurityAnalyzer",
    "SecurityAssessment",
    "TokenCandidate",
]
