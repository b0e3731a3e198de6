"""Конфигурация приложения."""
import os
from functools import lru_cache

from .constants import FLEET_RULE_KEYS


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@lru_cache
def get_config():
    fleet_rules = os.environ.get("FLEET_RULES", "free").lower()
    if fleet_rules not in FLEET_RULE_KEYS:
        raise ValueError(f"Unknown FLEET_RULES {fleet_rules!r}, expected one of {FLEET_RULE_KEYS}")
    return type("Config", (), {
        "debug": _flag("DEBUG", "0"),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "fleet_rules": fleet_rules,
        # Стрелять можно только когда оба флота расставлены
        "require_fleets": _flag("REQUIRE_FLEETS", "1"),
        # Повторный выстрел в уже открытую клетку — ошибка вместо промаха
        "reject_repeat_shots": _flag("REJECT_REPEAT_SHOTS", "0"),
        # Отдавать оба поля целиком, без скрытия кораблей соперника
        "expose_full_state": _flag("EXPOSE_FULL_STATE", "0"),
        "host": os.environ.get("HOST", "0.0.0.0"),
        "port": int(os.environ.get("PORT", "3000")),
    })()
