"""Инфраструктурные сервисы: хранилище, уведомления, статистика."""

from .notifier import NotifierError, TelegramNotifier
from .stats import StatsService, StatsSummary
from .store import SqlStore

__all__ = [
    "NotifierError",
    "SqlStore",
    "StatsService",
    "StatsSummary",
    "TelegramNotifier",
]
