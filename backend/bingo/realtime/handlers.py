from __future__ import annotations

import logging
from typing import Any, Callable

from flask import request
from flask_socketio import SocketIO

from ..game.cards import generate_card
from ..game.errors import BingoError, GameInProgress, InvalidPayload, NotHost, PlayerNotInRoom, RoomNotFound
from ..game.models import Room
from ..game.registry import RoomRegistry
from ..game.rules import evaluate
from .broadcaster import RoomBroadcaster
from .events import (
    ContinueToBlackout,
    CreateRoom,
    FinishGame,
    InboundMessage,
    JoinRoom,
    MarkSquare,
    NewRound,
    StartGame,
    parse_event,
)

logger = logging.getLogger(__name__)


class SessionCoordinator:
    """Applies inbound client events to the room registry and emits the results.

    Each event runs to completion while holding the registry lock, so two
    handlers never interleave on the same room.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        broadcaster: RoomBroadcaster,
        card_factory: Callable[[], list[str]] = generate_card,
    ) -> None:
        self.registry = registry
        self.broadcaster = broadcaster
        self.card_factory = card_factory

    def dispatch(self, sid: str, message: InboundMessage) -> None:
        with self.registry.lock:
            try:
                self._route(sid, message)
            except BingoError as exc:
                self.reject(sid, type(message).__name__, exc)

    def reject(self, sid: str, event: str, exc: BingoError) -> None:
        logger.info("Rejected %s from %s: %s", event, sid, exc.code)
        self.broadcaster.to_connection(sid, "error", exc.to_payload())

    def _route(self, sid: str, message: InboundMessage) -> None:
        if isinstance(message, CreateRoom):
            self.create_room(sid, message)
        elif isinstance(message, JoinRoom):
            self.join_room(sid, message)
        elif isinstance(message, StartGame):
            self.start_game(sid, message)
        elif isinstance(message, MarkSquare):
            self.mark_square(sid, message)
        elif isinstance(message, NewRound):
            self.new_round(sid, message)
        elif isinstance(message, ContinueToBlackout):
            self.continue_to_blackout(sid, message)
        elif isinstance(message, FinishGame):
            self.finish_game(sid, message)
        else:
            raise TypeError(f"unhandled inbound message: {message!r}")

    def _require_room(self, code: str) -> Room:
        room = self.registry.get_room(code)
        if room is None:
            raise RoomNotFound()
        return room

    def _require_host(self, room: Room, sid: str, action: str) -> None:
        if room.host_id != sid:
            raise NotHost(f"Only host can {action}")

    def create_room(self, sid: str, message: CreateRoom) -> None:
        room = self.registry.create_room(sid, message.username)
        self.broadcaster.join(sid, room.code)
        self.broadcaster.to_connection(
            sid,
            "room-created",
            {"roomCode": room.code, "players": room.players_payload()},
        )

    def join_room(self, sid: str, message: JoinRoom) -> None:
        room = self._require_room(message.room_code)
        if room.find_player(sid) is not None:
            # Already seated: resend the room state without adding a duplicate.
            self.broadcaster.to_connection(
                sid, "room-joined", {"roomCode": room.code, "players": room.public_players()}
            )
            return
        if room.game_started:
            raise GameInProgress()

        player = self.registry.add_player(room, sid, message.username)
        self.broadcaster.join(sid, room.code)

        players = room.public_players()
        self.broadcaster.to_connection(sid, "room-joined", {"roomCode": room.code, "players": players})
        self.broadcaster.to_room_except(
            room.code,
            sid,
            "player-joined",
            {"player": player.public_dict(), "players": players},
        )

    def start_game(self, sid: str, message: StartGame) -> None:
        room = self._require_room(message.room_code)
        self._require_host(room, sid, "start the game")

        for player in room.players:
            player.deal(self.card_factory())
        room.game_started = True
        logger.info("Game started in room %s", room.code)

        # Each player only ever sees their own card.
        public_players = room.public_players()
        for player in room.players:
            self.broadcaster.to_connection(
                player.id,
                "game-started",
                {"bingoCard": list(player.bingo_card), "players": public_players},
            )

    def mark_square(self, sid: str, message: MarkSquare) -> None:
        room = self._require_room(message.room_code)
        player = room.find_player(sid)
        if player is None:
            raise PlayerNotInRoom()

        index = message.index
        player.marked_squares[index] = not player.marked_squares[index]

        self.broadcaster.to_room(
            room.code,
            "square-marked",
            {
                "playerId": sid,
                "username": player.username,
                "index": index,
                "marked": player.marked_squares[index],
            },
        )

        if evaluate(player.marked_squares, room.game_mode):
            marked = player.marked_count
            logger.info(
                "%s won in room %s (%s mode, %d squares)",
                player.username,
                room.code,
                room.game_mode,
                marked,
            )
            self.broadcaster.to_room(
                room.code,
                "player-won",
                {
                    "playerId": sid,
                    "username": player.username,
                    "gameMode": room.game_mode,
                    "markedCount": marked,
                },
            )

    def new_round(self, sid: str, message: NewRound) -> None:
        room = self._require_room(message.room_code)
        self._require_host(room, sid, "start new round")

        for player in room.players:
            player.deal(self.card_factory())
            player.reset_marks()
        room.game_mode = "regular"
        logger.info("New round started in room %s", room.code)

        for player in room.players:
            self.broadcaster.to_connection(
                player.id,
                "new-round-started",
                {"bingoCard": list(player.bingo_card), "gameMode": room.game_mode},
            )

    def continue_to_blackout(self, sid: str, message: ContinueToBlackout) -> None:
        room = self._require_room(message.room_code)
        self._require_host(room, sid, "continue to blackout")

        room.game_mode = "blackout"
        logger.info("Blackout mode started in room %s", room.code)
        self.broadcaster.to_room(room.code, "blackout-mode-started", {"gameMode": room.game_mode})

    def finish_game(self, sid: str, message: FinishGame) -> None:
        room = self._require_room(message.room_code)
        self._require_host(room, sid, "finish game")

        # The host is always in the room, so there is at least one player.
        winner = room.players[0]
        best = winner.marked_count
        for player in room.players[1:]:
            if player.marked_count > best:
                winner, best = player, player.marked_count

        logger.info("Game finished in room %s. Winner: %s with %d squares", room.code, winner.username, best)
        self.broadcaster.to_room(
            room.code,
            "game-finished",
            {"playerId": winner.id, "username": winner.username, "markedCount": best},
        )

    def disconnect(self, sid: str) -> None:
        with self.registry.lock:
            for departure in self.registry.remove_connection(sid):
                if departure.room_empty:
                    continue
                room = departure.room
                event = "new-host" if departure.promoted is not None else "player-left"
                self.broadcaster.to_room(room.code, event, {"players": room.public_players()})


def register_socketio_handlers(socketio: SocketIO, coordinator: SessionCoordinator) -> None:
    def _handle(event: str, data: Any) -> None:
        sid = request.sid
        try:
            message = parse_event(event, data)
        except InvalidPayload as exc:
            coordinator.reject(sid, event, exc)
            return
        coordinator.dispatch(sid, message)

    @socketio.on("connect")
    def on_connect(auth=None):
        logger.info("New client connected: %s", request.sid)

    @socketio.on("create-room")
    def create_room(data=None):
        _handle("create-room", data)

    @socketio.on("join-room")
    def join_room(data=None):
        _handle("join-room", data)

    @socketio.on("start-game")
    def start_game(data=None):
        _handle("start-game", data)

    @socketio.on("mark-square")
    def mark_square(data=None):
        _handle("mark-square", data)

    @socketio.on("new-round")
    def new_round(data=None):
        _handle("new-round", data)

    @socketio.on("continue-to-blackout")
    def continue_to_blackout(data=None):
        _handle("continue-to-blackout", data)

    @socketio.on("finish-game")
    def finish_game(data=None):
        _handle("finish-game", data)

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        logger.info("Client disconnected: %s", request.sid)
        coordinator.disconnect(request.sid)
