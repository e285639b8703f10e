"""Служебные скрипты."""
