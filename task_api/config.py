"""Настройки приложения Task Manager API.

Конфигурация загружается из переменных окружения через pydantic-settings.
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from task_api.core.constants import (
    DEFAULT_APP_NAME,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REDIS_KEY_PREFIX,
    DEFAULT_REDIS_URL,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    MAX_PAGE_SIZE,
)


class Settings(BaseSettings):
    """Основные настройки приложения."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default=DEFAULT_APP_NAME, description="Название приложения")
    app_env: Literal["development", "production"] = Field(
        default="development",
        description="Окружение (development/production)",
    )
    debug: bool = Field(default=False, description="Режим отладки")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Уровень логирования",
    )

    server_host: str = Field(default=DEFAULT_SERVER_HOST, description="Хост сервера")
    server_port: int = Field(
        default=DEFAULT_SERVER_PORT,
        validation_alias=AliasChoices("server_port", "port"),
        description="Порт сервера (SERVER_PORT или PORT)",
    )

    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        validation_alias=AliasChoices("redis_url", "database_url"),
        description="Строка подключения к хранилищу (REDIS_URL или DATABASE_URL)",
    )
    redis_key_prefix: str = Field(
        default=DEFAULT_REDIS_KEY_PREFIX,
        description="Префикс ключей задач в Redis",
    )

    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, description="Размер страницы по умолчанию")
    max_page_size: int = Field(default=MAX_PAGE_SIZE, ge=1, description="Максимальный размер страницы")

    cors_allowed_origins: list[str] = Field(default=["*"], description="Разрешённые origins для CORS")

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        """Валидация порта.

        Args:
            value: Номер порта для проверки.

        Returns:
            Проверенное значение порта.

        Raises:
            ValueError: Если порт вне допустимого диапазона.

        """
        if not 1 <= value <= 65535:
            msg = f"Порт ({value}) должен быть в диапазоне 1-65535"
            raise ValueError(msg)
        return value


settings = Settings()
