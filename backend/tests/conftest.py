import random
from collections import defaultdict

import pytest

from backend.bingo.game.registry import RoomRegistry
from backend.bingo.realtime.handlers import SessionCoordinator
from backend.bingo.server import create_app


class TestConfig:
    TESTING = True
    SECRET_KEY = "test-secret"
    CORS_ORIGINS = "*"
    TRUST_PROXY_HEADERS = False
    SOCKETIO_ASYNC_MODE = "threading"
    ROOM_IDLE_TIMEOUT_SEC = 1800


class ManualTimer:
    def __init__(self, delay_sec, callback):
        self.delay_sec = delay_sec
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


class ManualScheduler:
    """Collects expiry timers so tests decide when (and whether) they fire."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay_sec, callback):
        timer = ManualTimer(delay_sec, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled]

    def fire_pending(self):
        for timer in self.pending:
            timer.fire()


class FakeBroadcaster:
    """Records what each connection would have received."""

    def __init__(self):
        self.groups = defaultdict(set)
        self.inbox = defaultdict(list)

    def join(self, sid, room_code):
        self.groups[room_code].add(sid)

    def drop(self, sid):
        for members in self.groups.values():
            members.discard(sid)

    def to_connection(self, sid, event, payload):
        self.inbox[sid].append((event, payload))

    def to_room(self, room_code, event, payload):
        for sid in self.groups[room_code]:
            self.inbox[sid].append((event, payload))

    def to_room_except(self, room_code, sid, event, payload):
        for member in self.groups[room_code]:
            if member != sid:
                self.inbox[member].append((event, payload))

    def events(self, sid):
        return [name for name, _ in self.inbox[sid]]

    def last(self, sid, event):
        for name, payload in reversed(self.inbox[sid]):
            if name == event:
                return payload
        return None

    def clear(self):
        self.inbox.clear()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def registry(scheduler):
    return RoomRegistry(idle_timeout_sec=1800, scheduler=scheduler, rng=random.Random(1234))


@pytest.fixture()
def broadcaster():
    return FakeBroadcaster()


@pytest.fixture()
def coordinator(registry, broadcaster):
    return SessionCoordinator(registry, broadcaster)


@pytest.fixture()
def app_and_socketio(registry):
    return create_app(TestConfig, registry=registry)


@pytest.fixture()
def flask_app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(app_and_socketio):
    flask_app, socketio = app_and_socketio
    clients = []

    def _connect():
        sio_client = socketio.test_client(flask_app)
        sio_client.get_received()
        clients.append(sio_client)
        return sio_client

    yield _connect

    for sio_client in clients:
        if sio_client.is_connected():
            sio_client.disconnect()
