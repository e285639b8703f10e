"""DeepTrader: мониторинг мигрировавших Solana-токенов."""

__version__ = "0.1.0"
