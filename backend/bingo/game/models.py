from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


GameMode = Literal["regular", "blackout"]

CARD_SIZE = 25
FREE_SPACE_INDEX = 12


def fresh_marks() -> list[bool]:
    marks = [False] * CARD_SIZE
    marks[FREE_SPACE_INDEX] = True
    return marks


@dataclass
class Player:
    id: str
    username: str
    is_host: bool = False
    bingo_card: list[str] = field(default_factory=list)
    marked_squares: list[bool] = field(default_factory=fresh_marks)

    @property
    def marked_count(self) -> int:
        return sum(1 for m in self.marked_squares if m)

    def deal(self, card: list[str]) -> None:
        self.bingo_card = list(card)

    def reset_marks(self) -> None:
        self.marked_squares = fresh_marks()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "isHost": self.is_host,
            "bingoCard": list(self.bingo_card),
            "markedSquares": list(self.marked_squares),
        }

    def public_dict(self) -> dict:
        # Cards stay private to their owner.
        return {"id": self.id, "username": self.username, "isHost": self.is_host}


@dataclass
class Room:
    code: str
    host_id: str
    players: list[Player] = field(default_factory=list)
    game_started: bool = False
    game_mode: GameMode = "regular"

    def find_player(self, sid: str) -> Player | None:
        for p in self.players:
            if p.id == sid:
                return p
        return None

    def players_payload(self) -> list[dict]:
        return [p.to_dict() for p in self.players]

    def public_players(self) -> list[dict]:
        return [p.public_dict() for p in self.players]
