import pytest
from fastapi.testclient import TestClient

from battleship.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _create(client):
    r = client.post("/create-game")
    assert r.status_code == 200
    return r.json()["match_id"]


def _join(client, match_id, name):
    r = client.post("/join-game", json={"match_id": match_id, "player_name": name})
    assert r.status_code == 200
    return r.json()["player_id"]


def _place(client, match_id, player_id, cells):
    return client.post("/place-ships", json={
        "match_id": match_id,
        "player_id": player_id,
        "ships": [{"positions": [{"x": x, "y": y} for x, y in cells]}],
    })


def _fire(client, match_id, player_id, x, y):
    return client.post("/fire", json={"match_id": match_id, "player_id": player_id, "x": x, "y": y})


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_full_game(client):
    match_id = _create(client)
    a = _join(client, match_id, "Alice")
    b = _join(client, match_id, "Bob")
    assert _place(client, match_id, a, [(0, 0)]).json() == {"success": True}
    assert _place(client, match_id, b, [(5, 5)]).json() == {"success": True}

    r = _fire(client, match_id, a, 5, 5)
    assert r.status_code == 200
    assert r.json() == {"shot": "hit", "winner": a}

    state = client.get(f"/state/{match_id}", params={"player_id": a}).json()
    assert state["finished"] is True
    assert state["winner"] == a
    assert state["phase"] == "finished"
    assert list(state["players"]) == [a, b]


def test_third_join_conflict(client):
    match_id = _create(client)
    _join(client, match_id, "Alice")
    _join(client, match_id, "Bob")
    r = client.post("/join-game", json={"match_id": match_id, "player_name": "Carol"})
    assert r.status_code == 409
    assert r.json() == {"error": "Game already has 2 players", "kind": "match_full"}


def test_wrong_turn_leaves_state(client):
    match_id = _create(client)
    a = _join(client, match_id, "Alice")
    b = _join(client, match_id, "Bob")
    _place(client, match_id, a, [(0, 0)])
    _place(client, match_id, b, [(5, 5)])
    before = client.get(f"/state/{match_id}").json()

    r = _fire(client, match_id, b, 0, 0)
    assert r.status_code == 409
    assert r.json()["kind"] == "wrong_turn"
    assert client.get(f"/state/{match_id}").json() == before
    assert before["turn"] == a


@pytest.mark.parametrize("path, body", [
    ("/join-game", {"match_id": "missing", "player_name": "Alice"}),
    ("/place-ships", {"match_id": "missing", "player_id": "p", "ships": []}),
    ("/fire", {"match_id": "missing", "player_id": "p", "x": 0, "y": 0}),
])
def test_unknown_match(client, path, body):
    r = client.post(path, json=body)
    assert r.status_code == 404
    assert r.json() == {"error": "Game not found", "kind": "not_found"}


def test_state_unknown_match(client):
    r = client.get("/state/missing")
    assert r.status_code == 404
    assert r.json()["kind"] == "not_found"


def test_place_ships_unknown_player(client):
    match_id = _create(client)
    r = _place(client, match_id, "stranger", [(0, 0)])
    assert r.status_code == 404
    assert r.json()["kind"] == "player_not_found"


def test_invalid_fleet_and_coordinate(client):
    match_id = _create(client)
    a = _join(client, match_id, "Alice")
    b = _join(client, match_id, "Bob")
    r = _place(client, match_id, a, [(0, 0), (0, 12)])
    assert r.status_code == 400
    assert r.json()["kind"] == "invalid_fleet"

    _place(client, match_id, a, [(0, 0)])
    _place(client, match_id, b, [(5, 5)])
    r = _fire(client, match_id, a, 10, 0)
    assert r.status_code == 400
    assert r.json()["kind"] == "invalid_coordinate"


def test_malformed_body(client):
    match_id = _create(client)
    r = client.post("/fire", json={"match_id": match_id, "player_id": "p", "x": "a"})
    assert r.status_code == 422


def test_boolean_coordinates_rejected(client):
    match_id = _create(client)
    a = _join(client, match_id, "Alice")
    b = _join(client, match_id, "Bob")
    _place(client, match_id, a, [(0, 0)])
    _place(client, match_id, b, [(1, 1)])
    before = client.get(f"/state/{match_id}", params={"player_id": b}).json()

    r = client.post("/fire", json={"match_id": match_id, "player_id": a, "x": True, "y": True})
    assert r.status_code == 422
    r = client.post("/fire", json={"match_id": match_id, "player_id": a, "x": "1", "y": "1"})
    assert r.status_code == 422
    r = client.post("/place-ships", json={
        "match_id": match_id,
        "player_id": b,
        "ships": [{"positions": [{"x": True, "y": False}]}],
    })
    assert r.status_code == 422

    after = client.get(f"/state/{match_id}", params={"player_id": b}).json()
    assert after == before
    assert after["turn"] == a
    assert after["finished"] is False
    assert after["players"][b]["board"][1][1] == "ship"


def test_state_redacts_opponent(client):
    match_id = _create(client)
    a = _join(client, match_id, "Alice")
    b = _join(client, match_id, "Bob")
    _place(client, match_id, a, [(0, 0)])
    _place(client, match_id, b, [(5, 5), (5, 6)])

    view = client.get(f"/state/{match_id}", params={"player_id": a}).json()
    assert view["players"][a]["board"][0][0] == "ship"
    assert view["players"][b]["board"][5][5] == "empty"
    assert view["players"][b]["ships"] == []

    r = client.get(f"/state/{match_id}", params={"player_id": "stranger"})
    assert r.status_code == 404
