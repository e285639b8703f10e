"""Inline-клавиатура под алертом: ссылки на эксплореры."""

from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup


def build_token_keyboard(address: str) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="🔎 Solscan", url=f"https://solscan.io/token/{address}"),
                InlineKeyboardButton(text="🛡 Rugcheck", url=f"https://rugcheck.xyz/tokens/{address}"),
            ],
            [
                InlineKeyboardButton(
                    text="📈 DexScreener",
                    url=f"https://dexscreener.com/solana/{address}",
                ),
            ],
        ]
    )


__all__ = ["build_token_keyboard"]
