"""Task Manager API.

REST API для управления задачами поверх документного хранилища (Redis).
"""

__version__ = "1.0.0"
