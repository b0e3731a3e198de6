import pytest

from battleship.config import get_config
from battleship.matches import reset_registry

CONFIG_ENV = ("FLEET_RULES", "REQUIRE_FLEETS", "REJECT_REPEAT_SHOTS", "EXPOSE_FULL_STATE")


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    for name in CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    reset_registry()
    yield
    get_config.cache_clear()
    reset_registry()


@pytest.fixture
def configure(monkeypatch):
    """Переопределить переменные окружения и сбросить кэш конфигурации."""

    def _configure(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        get_config.cache_clear()

    return _configure
