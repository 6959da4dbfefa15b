def test_index(client):
    res = client.get("/")
    assert res.status_code == 200
    data = res.get_json()
    assert data["status"] == "ok"
    assert data["activeRooms"] == 0


def test_health_counts_rooms(client, registry):
    registry.create_room("host", "Alice")
    registry.create_room("host-2", "Bob")

    res = client.get("/health")
    assert res.status_code == 200
    data = res.get_json()
    assert data["status"] == "ok"
    assert data["activeRooms"] == 2
    assert "T" in data["timestamp"]


def test_room_lookup(client, registry):
    room = registry.create_room("host", "Alice")

    res = client.get(f"/api/rooms/{room.code.lower()}")
    assert res.status_code == 200
    data = res.get_json()
    assert data["roomCode"] == room.code
    assert data["gameStarted"] is False
    assert data["gameMode"] == "regular"
    assert data["players"] == [{"id": "host", "username": "Alice", "isHost": True}]


def test_room_lookup_missing(client):
    res = client.get("/api/rooms/QQQQ")
    assert res.status_code == 404
    assert res.get_json() == {"error": "room_not_found"}
