"""
HTTP-обработчики партии: create-game, join-game, place-ships, fire, state.
Ошибки игровых правил поднимаются как GameError и превращаются в JSON в main.py.
"""
from fastapi import APIRouter
from pydantic import BaseModel, Field, StrictInt

from .game import create_match, fire, join, place_fleet, snapshot

router = APIRouter()


class Position(BaseModel):
    x: StrictInt
    y: StrictInt


class Ship(BaseModel):
    positions: list[Position] = Field(default_factory=list)


class JoinRequest(BaseModel):
    match_id: str
    player_name: str


class PlaceShipsRequest(BaseModel):
    match_id: str
    player_id: str
    ships: list[Ship]


class FireRequest(BaseModel):
    match_id: str
    player_id: str
    x: StrictInt
    y: StrictInt


@router.post("/create-game")
def create_game():
    return {"match_id": create_match()}


@router.post("/join-game")
def join_game(body: JoinRequest):
    return {"player_id": join(body.match_id, body.player_name)}


@router.post("/place-ships")
def place_ships(body: PlaceShipsRequest):
    ships = [[(p.x, p.y) for p in ship.positions] for ship in body.ships]
    place_fleet(body.match_id, body.player_id, ships)
    return {"success": True}


@router.post("/fire")
def fire_shot(body: FireRequest):
    return fire(body.match_id, body.player_id, body.x, body.y)


@router.get("/state/{match_id}")
def get_state(match_id: str, player_id: str | None = None):
    return snapshot(match_id, player_id)
