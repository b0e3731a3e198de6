"""Ошибки игровых операций. Все — ошибки клиента, повтор без исправления не поможет."""


class GameError(Exception):
    kind = "game_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def payload(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class MatchNotFound(GameError):
    kind = "not_found"
    status_code = 404

    def __init__(self, match_id: str):
        super().__init__("Game not found")
        self.match_id = match_id


class PlayerNotFound(GameError):
    kind = "player_not_found"
    status_code = 404

    def __init__(self, player_id: str):
        super().__init__("Player not found")
        self.player_id = player_id


class MatchFull(GameError):
    kind = "match_full"
    status_code = 409

    def __init__(self):
        super().__init__("Game already has 2 players")


class WrongTurn(GameError):
    kind = "wrong_turn"
    status_code = 409

    def __init__(self):
        super().__init__("Not your turn")


class MatchFinished(GameError):
    kind = "match_finished"
    status_code = 409

    def __init__(self):
        super().__init__("Game is already finished")


class OpponentMissing(GameError):
    kind = "opponent_missing"
    status_code = 409

    def __init__(self):
        super().__init__("Opponent has not joined yet")


class FleetsNotPlaced(GameError):
    kind = "fleets_not_placed"
    status_code = 409

    def __init__(self):
        super().__init__("Both fleets must be placed before firing")


class PlacementClosed(GameError):
    kind = "placement_closed"
    status_code = 409

    def __init__(self):
        super().__init__("Ships can no longer be moved")


class AlreadyFired(GameError):
    kind = "already_fired"
    status_code = 409

    def __init__(self, x: int, y: int):
        super().__init__(f"Cell ({x}, {y}) was already fired at")


class InvalidCoordinate(GameError):
    kind = "invalid_coordinate"

    def __init__(self, x, y):
        super().__init__(f"Coordinate ({x}, {y}) is outside the board")


class InvalidFleet(GameError):
    kind = "invalid_fleet"


class InvalidName(GameError):
    kind = "invalid_name"
