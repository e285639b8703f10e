"""Набор middleware для DeepTrader."""

from .db import DatabaseMiddleware, get_engine, get_session_maker, init_db
from .errors import ErrorsMiddleware
from .throttling import ThrottlingMiddleware

__all__ = [
    "DatabaseMiddleware",
    "ErrorsMiddleware",
    "ThrottlingMiddleware",
    "get_engine",
    "get_session_maker",
    "init_db",
]
