"""Клиенты внешних Solana-сервисов: RPC, фид pump.fun, rugcheck."""

from .pumpfun import FeedError, PumpFunFeedClient
from .rpc import SolanaRpcClient, SolanaRpcError
from .rugcheck import RugcheckClient, RugcheckError

__all__ = [
    "FeedError",
    "PumpFunFeedClient",
    "RugcheckClient",
    "RugcheckError",
    "SolanaRpcClient",
    "SolanaRpcError",
]
