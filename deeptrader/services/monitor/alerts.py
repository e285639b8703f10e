"""Форматирование алерта для Telegram-канала (parse_mode=HTML)."""

from __future__ import annotations

from html import escape

from .types import SecurityAssessment, TokenCandidate


def format_alert(candidate: TokenCandidate, assessment: SecurityAssessment) -> str:
    name = escape(candidate.name or "Unknown")
    symbol = escape(candidate.symbol or "???")
    lines = [
        "🚨 <b>New Token Alert!</b>",
        "",
        f"Name: {name} ({symbol})",
        f"Address: <code>{escape(assessment.contract_address)}</code>",
        "",
        f"💧 Liquidity: {candidate.initial_liquidity} SOL",
        f"👥 Holders: {candidate.holder_count}",
        f"🔒 Liquidity Locked: {'Yes' if assessment.liquidity_locked else 'No'}",
        f"🛡️ Rugcheck Score: {assessment.safety_score}/100",
        "",
        f"🔍 Top Holder: {assessment.top_holder_percent:.2f}%",
        "",
        f"Analysis: {assessment.verdict}",
    ]
    return "\n".join(lines)


__all__ = ["format_alert"]
