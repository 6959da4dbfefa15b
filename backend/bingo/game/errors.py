from __future__ import annotations


class BingoError(Exception):
    """A rejected client event; reported to the requester only."""

    code = "error"
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"message": self.message, "error": self.code}


class RoomNotFound(BingoError):
    code = "room_not_found"
    default_message = "Room not found"


class GameInProgress(BingoError):
    code = "game_in_progress"
    default_message = "Game already in progress"


class NotHost(BingoError):
    code = "only_host"
    default_message = "Only host can do that"


class PlayerNotInRoom(BingoError):
    code = "not_in_room"
    default_message = "Player not in room"


class InvalidPayload(BingoError):
    code = "invalid_payload"
    default_message = "Invalid payload"
