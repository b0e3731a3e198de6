"""Константы поля, состояний клеток и правил флота."""
from typing import TypedDict

BOARD_SIZE = 10
MAX_NAME_LENGTH = 32

# Состояния клетки
EMPTY = "empty"
SHIP = "ship"
HIT = "hit"
MISS = "miss"

# Результат выстрела
SHOT_HIT = "hit"
SHOT_MISS = "miss"

# Фазы партии
PHASE_AWAITING_PLAYERS = "awaiting_players"
PHASE_AWAITING_FLEETS = "awaiting_fleets"
PHASE_IN_PROGRESS = "in_progress"
PHASE_FINISHED = "finished"

MAX_PLAYERS = 2


class FleetRules(TypedDict):
    key: str
    ship_sizes: list[int]  # пустой список — размеры не проверяются


FLEET_RULES: list[FleetRules] = [
    {"key": "free", "ship_sizes": []},
    {"key": "classic", "ship_sizes": [5, 4, 3, 3, 2]},
]

FLEET_RULE_KEYS = [r["key"] for r in FLEET_RULES]
