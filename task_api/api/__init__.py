"""API модуль Task Manager API."""
