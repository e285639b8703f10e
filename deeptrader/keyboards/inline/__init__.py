"""Inline-клавиатуры."""

from .token import build_token_keyboard

__all__ = ["build_token_keyboard"]
