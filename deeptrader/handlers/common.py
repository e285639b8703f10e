"""Чат-команды: /start, /stats, /info.

Зависимости (StatsService, SecurityAnalyzer) приходят из workflow data
диспетчера, сессия БД из DatabaseMiddleware.
"""

from __future__ import annotations

import re
from html import escape

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.filters.command import CommandObject
from aiogram.types import Message
from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from deeptrader.repositories import get_security_check, get_token
from deeptrader.services.core import StatsService
from deeptrader.services.monitor import SecurityAnalyzer

router = Router(name="core-common")

WELCOME_TEXT = (
    "🤖 Welcome to DeepTrader AI - Solana Trading Bot!\n\n"
    "We analyze newly migrated tokens on Solana for:\n"
    "• Liquidity Analysis\n"
    "• Holder Distribution\n"
    "• Rugcheck Integration\n"
    "• Liquidity Lock Detection\n\n"
    "Available commands:\n"
    "/stats - View current stats\n"
    "/info [token] - Get token info"
)
STATS_ERROR_TEXT = "Error fetching stats"
INFO_USAGE_TEXT = "Usage: /info &lt;token address&gt;"

# base58 без 0, O, I, l; публичный ключ Solana это 32-44 символа
SOLANA_ADDRESS_RE = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    await message.answer(WELCOME_TEXT)


@router.message(Command("stats"))
async def handle_stats(message: Message, stats_service: StatsService) -> None:
    try:
        summary = await stats_service.summary()
    except Exception as exc:  # noqa: BLE001
        logger.error("Ошибка получения статистики: {error}", error=exc)
        await message.answer(STATS_ERROR_TEXT)
        return
    store = summary.store
    last_cycle = (
        summary.last_cycle_at.strftime("%Y-%m-%d %H:%M:%S UTC") if summary.last_cycle_at else "-"
    )
    await message.answer(
        "📊 Current Stats:\n\n"
        f"Tokens Stored: {store.tokens_stored}\n"
        f"Security Checks: {store.checks_stored}\n"
        f"Safe Verdicts: {store.safe_percent:.1f}%\n"
        f"Avg Rugcheck Score: {store.avg_score:.1f}\n\n"
        f"Monitor: {summary.loop_state}\n"
        f"Cycles: {summary.cycles} (failed {summary.failed_cycles})\n"
        f"Candidates Seen: {summary.candidates_seen}\n"
        f"Last Cycle: {last_cycle}"
    )


@router.message(Command("info"))
async def handle_info(
    message: Message,
    command: CommandObject,
    analyzer: SecurityAnalyzer,
    session: AsyncSession | None = None,
) -> None:
    """Сохранённые данные по токену, иначе свежий анализ без записи в БД."""

    address = (command.args or "").strip()
    if not SOLANA_ADDRESS_RE.fullmatch(address):
        await message.answer(INFO_USAGE_TEXT)
        return

    token = check = None
    if session is not None:
        token = await get_token(session, address)
        check = await get_security_check(session, address)

    if check is not None:
        header = (
            f"{escape(token.name)} ({escape(token.symbol)})" if token is not None else "Stored check"
        )
        await message.answer(
            f"ℹ️ {header}\n"
            f"Address: <code>{escape(address)}</code>\n\n"
            f"🛡️ Rugcheck Score: {check.rugcheck_score}/100 ({check.rugcheck_verdict})\n"
            f"🔍 Top Holder: {check.top_holder_percent:.2f}%\n"
            f"🔒 Liquidity Locked: {'Yes' if check.liquidity_locked else 'No'}\n"
            f"📦 Bundled: {'Yes' if check.is_bundled else 'No'}\n"
            f"Checked: {check.check_time:%Y-%m-%d %H:%M}"
        )
        return

    assessment = await analyzer.analyze(address)
    notes = ", ".join(assessment.reasons) or "-"
    await message.answer(
        "ℹ️ Live check (not stored)\n"
        f"Address: <code>{escape(address)}</code>\n\n"
        f"🛡️ Rugcheck Score: {assessment.safety_score}/100 ({assessment.verdict})\n"
        f"🔍 Top Holder: {assessment.top_holder_percent:.2f}%\n"
        f"🔒 Liquidity Locked: {'Yes' if assessment.liquidity_locked else 'No'}\n"
        f"📦 Bundled: {'Yes' if assessment.is_bundled else 'No'}\n"
        f"Notes: {escape(notes)}"
    )


__all__ = ["router"]
