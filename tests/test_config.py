# tests/test_config.py
import pytest

from spayd.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_cache():
    """Очищаем lru_cache, чтобы тесты были изолированы друг от друга."""
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    monkeypatch.delenv("SPAYD_TRANSLITERATE", raising=False)
    assert Settings().transliterate is False


@pytest.mark.parametrize("raw, expected", [("1", True), ("true", True), ("0", False), ("false", False)])
def test_transliterate_from_env(monkeypatch, raw: str, expected: bool):
    monkeypatch.setenv("SPAYD_TRANSLITERATE", raw)
    assert Settings().transliterate is expected


def test_get_settings_is_singleton():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
