"""Пороговые фильтры конвейера: базовая валидация, security gate и предикат алерта.

Все функции чистые и возвращают список причин отказа (пустой список: токен прошёл).
"""

from __future__ import annotations

from config.settings import AlertSettings, FilterSettings
from .types import SecurityAssessment, TokenCandidate


def validate_basics(candidate: TokenCandidate, settings: FilterSettings) -> list[str]:
    """Локальная проверка без сетевых вызовов."""

    if not candidate.address or not candidate.symbol:
        return ["нет адреса или тикера"]
    reasons: list[str] = []
    if candidate.initial_liquidity < settings.min_liquidity:
        reasons.append(
            f"ликвидность {candidate.initial_liquidity} SOL < {settings.min_liquidity}"
        )
    if candidate.creator_fee > settings.max_creator_fee:
        reasons.append(f"комиссия создателя {candidate.creator_fee}% > {settings.max_creator_fee}%")
    if candidate.holder_count < settings.min_holders:
        reasons.append(f"держателей {candidate.holder_count} < {settings.min_holders}")
    return reasons


def check_security_gate(assessment: SecurityAssessment, settings: FilterSettings) -> list[str]:
    reasons: list[str] = []
    if assessment.safety_score < settings.min_safety_score:
        reasons.append(f"safety score {assessment.safety_score} < {settings.min_safety_score}")
    if assessment.top_holder_percent > settings.max_top_holder_percent:
        reasons.append(
            f"топ-холдер {assessment.top_holder_percent:.2f}% > {settings.max_top_holder_percent}%"
        )
    if assessment.is_bundled:
        reasons.append("bundled")
    if not assessment.liquidity_locked:
        reasons.append("ликвидность не залочена")
    return reasons


def should_alert(assessment: SecurityAssessment, settings: AlertSettings) -> bool:
    return (
        assessment.safety_score >= settings.min_safety_score
        and assessment.top_holder_percent <= settings.max_top_holder_percent
        and assessment.liquidity_locked
        and not assessment.is_bundled
    )


__all__ = ["check_security_gate", "should_alert", "validate_basics"]
