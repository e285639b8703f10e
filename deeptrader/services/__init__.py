"""Сервисы DeepTrader."""
