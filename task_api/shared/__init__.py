"""Общие компоненты приложения (ошибки)."""
