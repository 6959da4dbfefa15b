from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ..game.errors import InvalidPayload
from ..game.models import CARD_SIZE


@dataclass(frozen=True)
class CreateRoom:
    username: str


@dataclass(frozen=True)
class JoinRoom:
    room_code: str
    username: str


@dataclass(frozen=True)
class StartGame:
    room_code: str


@dataclass(frozen=True)
class MarkSquare:
    room_code: str
    index: int


@dataclass(frozen=True)
class NewRound:
    room_code: str


@dataclass(frozen=True)
class ContinueToBlackout:
    room_code: str


@dataclass(frozen=True)
class FinishGame:
    room_code: str


InboundMessage = Union[
    CreateRoom,
    JoinRoom,
    StartGame,
    MarkSquare,
    NewRound,
    ContinueToBlackout,
    FinishGame,
]


def _payload(data: Any) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidPayload()
    return data


def _username(payload: dict) -> str:
    raw = payload.get("username")
    return "" if raw is None else str(raw).strip()


def _room_code(payload: dict) -> str:
    raw = payload.get("roomCode")
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidPayload("Room code is required")
    return raw.strip().upper()


def _square_index(payload: dict) -> int:
    raw = payload.get("index")
    # bool is an int subclass; reject it explicitly.
    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw < CARD_SIZE:
        raise InvalidPayload(f"Square index must be between 0 and {CARD_SIZE - 1}")
    return raw


def parse_event(event: str, data: Any) -> InboundMessage:
    """Turn a raw Socket.IO event into one of the inbound message types."""
    payload = _payload(data)

    if event == "create-room":
        return CreateRoom(username=_username(payload))
    if event == "join-room":
        return JoinRoom(room_code=_room_code(payload), username=_username(payload))
    if event == "start-game":
        return StartGame(room_code=_room_code(payload))
    if event == "mark-square":
        return MarkSquare(room_code=_room_code(payload), index=_square_index(payload))
    if event == "new-round":
        return NewRound(room_code=_room_code(payload))
    if event == "continue-to-blackout":
        return ContinueToBlackout(room_code=_room_code(payload))
    if event == "finish-game":
        return FinishGame(room_code=_room_code(payload))

    raise InvalidPayload(f"Unknown event: {event}")
