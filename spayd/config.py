"""
Конфигурация генератора SPAYD-строк.

* Использует Pydantic-BaseSettings – значения берутся из переменных окружения
  с префиксом ``SPAYD_`` (или файла .env, если он есть).
* Функция `get_settings()` отдаёт *кешированный* объект – удобно импортировать
  где угодно, не опасаясь создать дубль.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --------------------------------------------------------------------------- #
# Основные настройки
# --------------------------------------------------------------------------- #


class Settings(BaseSettings):
    # ── Нормализация текста ──────────────────────────────────────────────────
    # Значение по умолчанию для RN / MSG / X-URL, если вызывающий код
    # не передал `transliterate` явно.
    transliterate: bool = Field(False, description="SPAYD_TRANSLITERATE")

    model_config = SettingsConfigDict(
        env_prefix="SPAYD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# --------------------------------------------------------------------------- #
# Public helper
# --------------------------------------------------------------------------- #


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # noqa: D401
    """Возвращает **singleton** объект Settings."""
    return Settings()

