"""
Партии морского боя в памяти процесса: реестр, игроки, поля, выстрелы.
Каждая партия защищена своим замком, разные партии не блокируют друг друга.
"""
import logging
import threading
import uuid
from dataclasses import dataclass, field

from .config import get_config
from .constants import (
    BOARD_SIZE,
    EMPTY,
    FLEET_RULES,
    HIT,
    MAX_NAME_LENGTH,
    MAX_PLAYERS,
    MISS,
    PHASE_AWAITING_FLEETS,
    PHASE_AWAITING_PLAYERS,
    PHASE_FINISHED,
    PHASE_IN_PROGRESS,
    SHIP,
    SHOT_HIT,
    SHOT_MISS,
    FleetRules,
)
from .errors import (
    AlreadyFired,
    FleetsNotPlaced,
    InvalidCoordinate,
    InvalidFleet,
    InvalidName,
    MatchFinished,
    MatchFull,
    MatchNotFound,
    OpponentMissing,
    PlacementClosed,
    PlayerNotFound,
    WrongTurn,
)

logger = logging.getLogger(__name__)

Coord = tuple[int, int]


def empty_board() -> list[list[str]]:
    return [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def in_bounds(x, y) -> bool:
    """Координата — целые x (строка) и y (столбец) в пределах поля."""
    for v in (x, y):
        if not isinstance(v, int) or isinstance(v, bool):
            return False
        if not 0 <= v < BOARD_SIZE:
            return False
    return True


@dataclass
class Player:
    id: str
    name: str
    board: list[list[str]] = field(default_factory=empty_board)
    guesses: list[list[str]] = field(default_factory=empty_board)  # что игрок знает о поле соперника
    ships: list[list[Coord]] = field(default_factory=list)
    ships_placed: bool = False

    def ship_cells(self) -> list[Coord]:
        return [cell for ship in self.ships for cell in ship]

    def fleet_destroyed(self) -> bool:
        return all(self.board[x][y] == HIT for x, y in self.ship_cells())


@dataclass
class Match:
    id: str
    players: dict[str, Player] = field(default_factory=dict)  # порядок вставки = порядок входа
    turn: str | None = None
    finished: bool = False
    winner: str | None = None
    shots_fired: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def phase(self) -> str:
        if self.finished:
            return PHASE_FINISHED
        if len(self.players) < MAX_PLAYERS:
            return PHASE_AWAITING_PLAYERS
        if not all(p.ships_placed for p in self.players.values()):
            return PHASE_AWAITING_FLEETS
        return PHASE_IN_PROGRESS

    def get_player(self, player_id: str) -> Player:
        player = self.players.get(player_id)
        if player is None:
            raise PlayerNotFound(player_id)
        return player

    def opponent_of(self, player_id: str) -> Player | None:
        for pid, p in self.players.items():
            if pid != player_id:
                return p
        return None


# Глобальное состояние (in-memory), живёт до перезапуска процесса
_matches: dict[str, Match] = {}
_registry_lock = threading.Lock()


def create_match() -> str:
    match = Match(id=str(uuid.uuid4()))
    with _registry_lock:
        _matches[match.id] = match
    logger.info("Match %s created", match.id)
    return match.id


def get_match(match_id: str) -> Match:
    match = _matches.get(match_id)
    if match is None:
        raise MatchNotFound(match_id)
    return match


def get_state(match_id: str) -> Match:
    return get_match(match_id)


def reset_registry() -> None:
    """Удалить все партии (тесты и остановка процесса)."""
    with _registry_lock:
        _matches.clear()


def join(match_id: str, player_name: str) -> str:
    """
    Добавить игрока в партию. Первый вошедший ходит первым.
    Возвращает id игрока.
    """
    match = get_match(match_id)
    name = (player_name or "").strip()[:MAX_NAME_LENGTH]
    if not name:
        raise InvalidName("Player name must not be empty")
    with match.lock:
        if len(match.players) >= MAX_PLAYERS:
            raise MatchFull()
        player = Player(id=str(uuid.uuid4()), name=name)
        match.players[player.id] = player
        if match.turn is None:
            match.turn = player.id
    logger.info("Match %s: player %s (%s) joined", match_id, player.id, name)
    return player.id


def _fleet_rules() -> FleetRules:
    key = get_config().fleet_rules
    for rules in FLEET_RULES:
        if rules["key"] == key:
            return rules
    return FLEET_RULES[0]


def _is_straight_line(cells: list[Coord]) -> bool:
    xs = sorted(x for x, _ in cells)
    ys = sorted(y for _, y in cells)
    if len(set(xs)) == 1:
        return ys == list(range(ys[0], ys[0] + len(ys)))
    if len(set(ys)) == 1:
        return xs == list(range(xs[0], xs[0] + len(xs)))
    return False


def validate_fleet(ships: list[list[Coord]], rules: FleetRules) -> list[list[Coord]]:
    """Проверяет флот и возвращает его в виде списков кортежей (x, y)."""
    if not ships:
        raise InvalidFleet("Fleet must contain at least one ship")
    fleet: list[list[Coord]] = []
    seen: set[Coord] = set()
    for i, ship in enumerate(ships):
        if not ship:
            raise InvalidFleet(f"Ship #{i} has no positions")
        cells: list[Coord] = []
        for x, y in ship:
            if not in_bounds(x, y):
                raise InvalidFleet(f"Ship #{i} position ({x}, {y}) is outside the board")
            if (x, y) in seen:
                raise InvalidFleet(f"Ships overlap at ({x}, {y})")
            seen.add((x, y))
            cells.append((x, y))
        fleet.append(cells)
    sizes = rules["ship_sizes"]
    if sizes:
        if sorted(len(s) for s in fleet) != sorted(sizes):
            raise InvalidFleet(f"Fleet must consist of ships of sizes {sizes}")
        for i, cells in enumerate(fleet):
            if not _is_straight_line(cells):
                raise InvalidFleet(f"Ship #{i} must be a straight contiguous line")
    return fleet


def place_fleet(match_id: str, player_id: str, ships: list[list[Coord]]) -> None:
    """
    Расставить флот игрока. Поле строится заново, прежняя расстановка
    полностью заменяется. После первого выстрела расстановка закрыта.
    """
    match = get_match(match_id)
    with match.lock:
        player = match.get_player(player_id)
        if match.finished or match.shots_fired:
            raise PlacementClosed()
        fleet = validate_fleet(ships, _fleet_rules())
        board = empty_board()
        for ship in fleet:
            for x, y in ship:
                board[x][y] = SHIP
        player.board = board
        player.ships = fleet
        player.ships_placed = True
    logger.info("Match %s: player %s placed %d ships", match_id, player_id, len(fleet))


def fire(match_id: str, player_id: str, x: int, y: int) -> dict:
    """
    Выстрел по полю соперника. Все проверки выполняются до изменения партии.
    Ход переходит сопернику независимо от результата.
    Порядок проверок: партия, игрок (неизвестный id — PlayerNotFound, а не
    WrongTurn), конец партии, очередь, соперник, флоты, координата, повтор.
    Возвращает {"shot": "hit"|"miss"} и "winner" при победном выстреле.
    """
    config = get_config()
    match = get_match(match_id)
    with match.lock:
        shooter = match.get_player(player_id)
        if match.finished:
            raise MatchFinished()
        if match.turn != player_id:
            raise WrongTurn()
        opponent = match.opponent_of(player_id)
        if opponent is None:
            raise OpponentMissing()
        if config.require_fleets and not (shooter.ships_placed and opponent.ships_placed):
            raise FleetsNotPlaced()
        if not in_bounds(x, y):
            raise InvalidCoordinate(x, y)
        cell = opponent.board[x][y]
        if config.reject_repeat_shots and cell in (HIT, MISS):
            raise AlreadyFired(x, y)

        if cell == SHIP:
            opponent.board[x][y] = HIT
            shooter.guesses[x][y] = HIT
            shot = SHOT_HIT
        else:
            # уже открытая клетка остаётся как есть, выстрел считается промахом
            if cell == EMPTY:
                opponent.board[x][y] = MISS
                shooter.guesses[x][y] = MISS
            shot = SHOT_MISS

        match.turn = opponent.id
        match.shots_fired += 1
        result = {"shot": shot}
        if opponent.fleet_destroyed():
            match.finished = True
            match.winner = player_id
            result["winner"] = player_id
    logger.info("Match %s: %s fired at (%d, %d): %s", match_id, player_id, x, y, shot)
    if "winner" in result:
        logger.info("Match %s finished, winner %s", match_id, player_id)
    return result


def _ships_payload(ships: list[list[Coord]]) -> list[dict]:
    return [{"positions": [{"x": x, "y": y} for x, y in ship]} for ship in ships]


def _redacted_board(board: list[list[str]]) -> list[list[str]]:
    return [[EMPTY if c == SHIP else c for c in row] for row in board]


def _player_payload(p: Player, reveal: bool) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "board": [row[:] for row in p.board] if reveal else _redacted_board(p.board),
        "guesses": [row[:] for row in p.guesses],
        "ships": _ships_payload(p.ships) if reveal else [],
        "ships_placed": p.ships_placed,
    }


def state_payload(match: Match, viewer_id: str | None = None, full: bool = False) -> dict:
    """
    Снимок партии. Зритель видит своё поле целиком, у соперника — только
    попадания и промахи. Без зрителя скрыты оба флота, full=True раскрывает всё.
    """
    return {
        "id": match.id,
        "phase": match.phase,
        "players": {
            pid: _player_payload(p, full or pid == viewer_id)
            for pid, p in match.players.items()
        },
        "turn": match.turn,
        "finished": match.finished,
        "winner": match.winner,
    }


def snapshot(match_id: str, viewer_id: str | None = None) -> dict:
    """Снимок партии для клиента с учётом настройки expose_full_state."""
    match = get_state(match_id)
    with match.lock:
        if viewer_id is not None:
            match.get_player(viewer_id)
        return state_payload(match, viewer_id, full=get_config().expose_full_state)
