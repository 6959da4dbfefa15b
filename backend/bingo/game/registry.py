from __future__ import annotations

import logging
import random
import string
import threading
from dataclasses import dataclass
from functools import partial
from threading import RLock
from typing import Callable, Protocol

from .models import Player, Room

logger = logging.getLogger(__name__)

ROOM_CODE_LENGTH = 4
ROOM_CODE_ALPHABET = string.ascii_uppercase
DEFAULT_IDLE_TIMEOUT_SEC = 30 * 60


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay_sec: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay_sec, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass
class Departure:
    """A player removed from a room because their connection dropped."""

    room: Room
    player: Player
    promoted: Player | None = None

    @property
    def room_empty(self) -> bool:
        return not self.room.players


class RoomRegistry:
    """In-memory authority over live rooms and their idle-expiry timers.

    Every mutation happens under ``lock``. Callers that need a multi-step
    change to look atomic (the session coordinator) hold the lock across the
    whole event; it is reentrant so the registry's own methods still work.
    """

    def __init__(
        self,
        idle_timeout_sec: float = DEFAULT_IDLE_TIMEOUT_SEC,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.idle_timeout_sec = idle_timeout_sec
        self.lock = RLock()
        self._schedule = scheduler or thread_timer
        self._rng = rng or random.Random()
        self._rooms: dict[str, Room] = {}
        # code -> (token, handle); the token identifies the current timer
        self._timers: dict[str, tuple[object, TimerHandle]] = {}

    def __len__(self) -> int:
        with self.lock:
            return len(self._rooms)

    def allocate_code(self) -> str:
        with self.lock:
            while True:
                code = "".join(self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
                if code not in self._rooms:
                    return code

    def create_room(self, host_id: str, username: str) -> Room:
        with self.lock:
            code = self.allocate_code()
            host = Player(id=host_id, username=username, is_host=True)
            room = Room(code=code, host_id=host_id, players=[host])
            self._rooms[code] = room
            logger.info("Room %s created by %s", code, username)
            return room

    def get_room(self, code: str) -> Room | None:
        with self.lock:
            return self._rooms.get(code)

    def delete_room(self, code: str) -> bool:
        with self.lock:
            self.cancel_expiry(code)
            if code in self._rooms:
                del self._rooms[code]
                return True
            return False

    def list_rooms(self) -> list[Room]:
        with self.lock:
            return list(self._rooms.values())

    def add_player(self, room: Room, sid: str, username: str) -> Player:
        with self.lock:
            # Any join cancels a pending empty-room expiry.
            self.cancel_expiry(room.code)
            player = Player(id=sid, username=username)
            if not room.players:
                # Reviving an empty room: the joiner takes over as host.
                player.is_host = True
                room.host_id = sid
            room.players.append(player)
            logger.info("%s joined room %s", username, room.code)
            return player

    def remove_connection(self, sid: str) -> list[Departure]:
        """Drop ``sid``'s player from every room that holds it.

        Empty rooms are scheduled for expiry. When the host leaves a room that
        still has players, the earliest remaining joiner becomes host.
        """
        departures: list[Departure] = []
        with self.lock:
            for room in list(self._rooms.values()):
                player = room.find_player(sid)
                if player is None:
                    continue

                room.players.remove(player)
                logger.info("%s left room %s", player.username, room.code)
                departure = Departure(room=room, player=player)

                if not room.players:
                    self.schedule_expiry(room.code)
                else:
                    self.cancel_expiry(room.code)
                    if player.is_host:
                        successor = room.players[0]
                        successor.is_host = True
                        room.host_id = successor.id
                        departure.promoted = successor
                        logger.info("%s is now host of room %s", successor.username, room.code)

                departures.append(departure)
        return departures

    def schedule_expiry(self, code: str) -> None:
        with self.lock:
            self.cancel_expiry(code)
            token = object()
            handle = self._schedule(self.idle_timeout_sec, partial(self._expire, code, token))
            self._timers[code] = (token, handle)
            logger.info("Room %s is empty, scheduling cleanup in %ss", code, self.idle_timeout_sec)

    def cancel_expiry(self, code: str) -> bool:
        with self.lock:
            entry = self._timers.pop(code, None)
            if entry is None:
                return False
            entry[1].cancel()
            return True

    def expiry_pending(self, code: str) -> bool:
        with self.lock:
            return code in self._timers

    def _expire(self, code: str, token: object) -> None:
        with self.lock:
            entry = self._timers.get(code)
            if entry is None or entry[0] is not token:
                # Superseded or cancelled after the timer already fired.
                return
            del self._timers[code]

            room = self._rooms.get(code)
            if room is not None and not room.players:
                del self._rooms[code]
                logger.info("Cleaning up empty room: %s", code)

    def room_public_state(self, room: Room) -> dict:
        with self.lock:
            return {
                "roomCode": room.code,
                "hostId": room.host_id,
                "gameStarted": room.game_started,
                "gameMode": room.game_mode,
                "players": room.public_players(),
            }
