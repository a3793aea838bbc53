import httpx
import pytest

from fabcast.api.app import create_app
from fabcast.api.state import AppState

from tests.conftest import KEY_PREFIX, build_lookup
from tests.fakes import BrokenStore

JANE_STATE = {
    "player": {"id": "78449312", "name": "Jane Doe", "rating": 1970, "rank": 142, "countryCode": "US"},
    "visible": True,
}
EMPTY = {"player": None, "visible": False}


@pytest.mark.anyio
async def test_health(client: httpx.AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {"status": "ok", "store": "memory"}}


@pytest.mark.anyio
@pytest.mark.parametrize("slot", ["player1", "player2"])
async def test_read_before_any_write(client: httpx.AsyncClient, slot):
    resp = await client.get("/api/overlay-state", params={"slot": slot})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": EMPTY}


@pytest.mark.anyio
async def test_publish_scenario_round_trips_and_isolates(client: httpx.AsyncClient):
    resp = await client.post("/api/overlay-state", params={"slot": "player1"}, json=JANE_STATE)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": JANE_STATE}

    p1 = await client.get("/api/overlay-state", params={"slot": "player1"})
    p2 = await client.get("/api/overlay-state", params={"slot": "player2"})
    assert p1.json()["data"] == JANE_STATE
    assert p2.json()["data"] == EMPTY


@pytest.mark.anyio
async def test_missing_or_unknown_slot_uses_player1(client: httpx.AsyncClient, store):
    await client.post("/api/overlay-state", json=JANE_STATE)
    assert store.get(f"{KEY_PREFIX}player1") == JANE_STATE

    resp = await client.get("/api/overlay-state", params={"slot": "player7"})
    assert resp.json()["data"] == JANE_STATE


@pytest.mark.anyio
async def test_repeated_write_is_accepted(client: httpx.AsyncClient):
    for _ in range(2):
        resp = await client.post("/api/overlay-state", params={"slot": "player2"}, json=JANE_STATE)
        assert resp.status_code == 200
        assert resp.json()["success"] is True
    resp = await client.get("/api/overlay-state", params={"slot": "player2"})
    assert resp.json()["data"] == JANE_STATE


@pytest.mark.anyio
@pytest.mark.parametrize(
    "body",
    [
        '"visible"',
        "42",
        "[1, 2]",
        "null",
        "{not json",
        "",
        '{"player": null, "visible": false, "opacity": NaN}',
        '{"player": null, "visible": Infinity}',
    ],
)
async def test_non_object_body_is_rejected(client: httpx.AsyncClient, store, body):
    await client.post("/api/overlay-state", params={"slot": "player1"}, json=JANE_STATE)

    resp = await client.post(
        "/api/overlay-state",
        params={"slot": "player1"},
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Invalid state object in request body."}
    assert store.get(f"{KEY_PREFIX}player1") == JANE_STATE


@pytest.mark.anyio
async def test_unsupported_method_is_405_envelope(client: httpx.AsyncClient):
    resp = await client.delete("/api/overlay-state", params={"slot": "player1"})
    assert resp.status_code == 405
    assert resp.json() == {"success": False, "error": "Method not allowed"}

    resp = await client.post("/api/player-lookup", params={"id": "78449312"})
    assert resp.status_code == 405
    assert resp.json()["success"] is False


@pytest.mark.anyio
@pytest.mark.parametrize("path", ["/api/overlay-state", "/api/player-lookup"])
async def test_options_returns_empty_200(client: httpx.AsyncClient, path):
    resp = await client.options(path)
    assert resp.status_code == 200
    assert resp.content == b""


@pytest.mark.anyio
async def test_cors_preflight_allows_any_origin(client: httpx.AsyncClient):
    resp = await client.options(
        "/api/overlay-state",
        headers={
            "Origin": "https://obs.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.content == b""


@pytest.mark.anyio
async def test_simple_request_carries_cors_header(client: httpx.AsyncClient):
    resp = await client.get("/api/overlay-state", headers={"Origin": "https://control.example"})
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.anyio
async def test_player_lookup(client: httpx.AsyncClient):
    resp = await client.get("/api/player-lookup", params={"id": " 78449312 "})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "data": {"id": "78449312", "name": "Jane Doe", "rating": 1970, "rank": 142, "countryCode": "US"},
    }


@pytest.mark.anyio
@pytest.mark.parametrize("params", [{}, {"id": ""}, {"id": "   "}])
async def test_player_lookup_requires_id(client: httpx.AsyncClient, leaderboard, params):
    resp = await client.get("/api/player-lookup", params=params)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "A player ID is required."}
    assert leaderboard.requests == []


@pytest.mark.anyio
async def test_player_lookup_not_found_mentions_id(client: httpx.AsyncClient):
    resp = await client.get("/api/player-lookup", params={"id": "999999999"})
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert "999999999" in body["error"]


@pytest.mark.anyio
async def test_player_lookup_upstream_failures_are_distinct(client: httpx.AsyncClient, leaderboard):
    leaderboard.unreachable = True
    unreachable = (await client.get("/api/player-lookup", params={"id": "1"})).json()
    leaderboard.unreachable = False
    leaderboard.status_code = 429
    status = (await client.get("/api/player-lookup", params={"id": "2"})).json()
    leaderboard.status_code = 200
    leaderboard.raw_body = b"<html></html>"
    garbled = (await client.get("/api/player-lookup", params={"id": "3"})).json()

    errors = {unreachable["error"], status["error"], garbled["error"]}
    assert len(errors) == 3
    assert "429" in status["error"]
    assert "upstream says no" not in status["error"]


@pytest.mark.anyio
async def test_store_failure_is_generic_500(leaderboard, clock):
    app = create_app(AppState(BrokenStore(), build_lookup(leaderboard, clock), key_prefix=KEY_PREFIX))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        read = await client.get("/api/overlay-state", params={"slot": "player1"})
        write = await client.post("/api/overlay-state", params={"slot": "player1"}, json=JANE_STATE)

    assert read.status_code == 500
    assert read.json() == {"success": False, "error": "Could not read overlay state."}
    assert write.status_code == 500
    assert write.json() == {"success": False, "error": "Could not update overlay state."}
    assert "secret-host" not in read.text + write.text


@pytest.mark.anyio
async def test_unknown_path_uses_envelope(client: httpx.AsyncClient):
    resp = await client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not found"}


@pytest.mark.anyio
@pytest.mark.parametrize(
    "path, slot, side",
    [
        ("/overlay", "player1", "left"),
        ("/overlay/player1", "player1", "left"),
        ("/overlay/player2", "player2", "right"),
        ("/overlay/whatever", "player1", "left"),
    ],
)
async def test_overlay_page(client: httpx.AsyncClient, path, slot, side):
    resp = await client.get(path)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert f'const SLOT = "{slot}";' in resp.text
    assert f"side-{side}" in resp.text
    assert "const POLL_MS = 1000;" in resp.text
