"""
Операции над партией для HTTP-слоя: создание, вход, расстановка, выстрел, состояние.
"""
from .matches import (
    Match,
    create_match,
    fire,
    get_match,
    get_state,
    join,
    place_fleet,
    snapshot,
)

__all__ = [
    "Match",
    "create_match",
    "fire",
    "get_match",
    "get_state",
    "join",
    "place_fleet",
    "snapshot",
]
