from __future__ import annotations

from typing import Protocol

from flask_socketio import SocketIO


class RoomBroadcaster(Protocol):
    def join(self, sid: str, room_code: str) -> None: ...

    def to_connection(self, sid: str, event: str, payload: dict) -> None: ...

    def to_room(self, room_code: str, event: str, payload: dict) -> None: ...

    def to_room_except(self, room_code: str, sid: str, event: str, payload: dict) -> None: ...


class SocketIOBroadcaster:
    """Delivers events through Flask-SocketIO rooms named after room codes."""

    def __init__(self, socketio: SocketIO, namespace: str = "/"):
        self.socketio = socketio
        self.namespace = namespace

    def join(self, sid: str, room_code: str) -> None:
        self.socketio.server.enter_room(sid, room_code, namespace=self.namespace)

    def to_connection(self, sid: str, event: str, payload: dict) -> None:
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)

    def to_room(self, room_code: str, event: str, payload: dict) -> None:
        self.socketio.emit(event, payload, to=room_code, namespace=self.namespace)

    def to_room_except(self, room_code: str, sid: str, event: str, payload: dict) -> None:
        self.socketio.emit(event, payload, to=room_code, skip_sid=sid, namespace=self.namespace)
