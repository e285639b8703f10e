"""SQLModel сущности DeepTrader."""

from .security_check import SecurityCheck  # noqa: F401
from .token import Token  # noqa: F401

__all__ = [
    "SecurityCheck",
    "Token",
]
