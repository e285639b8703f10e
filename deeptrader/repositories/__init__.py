"""Репозитории для работы с БД."""

from .security_check_repo import get_security_check, insert_security_check_if_absent
from .stats_repo import StoreStats, get_store_stats
from .token_repo import get_token, insert_token_if_absent

__all__ = [
    "StoreStats",
    "get_security_check",
    "get_store_stats",
    "get_token",
    "insert_security_check_if_absent",
    "insert_token_if_absent",
]
