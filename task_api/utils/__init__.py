"""Утилиты Task Manager API."""
