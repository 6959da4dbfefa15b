from __future__ import annotations

from typing import Sequence

from .models import CARD_SIZE, GameMode

GRID = 5

ROWS = [tuple(r * GRID + c for c in range(GRID)) for r in range(GRID)]
COLUMNS = [tuple(r * GRID + c for r in range(GRID)) for c in range(GRID)]
DIAGONALS = [(0, 6, 12, 18, 24), (4, 8, 12, 16, 20)]

WINNING_LINES: list[tuple[int, ...]] = ROWS + COLUMNS + DIAGONALS


def _check_size(marks: Sequence[bool]) -> None:
    if len(marks) != CARD_SIZE:
        raise ValueError(f"expected {CARD_SIZE} marks, got {len(marks)}")


def has_line(marks: Sequence[bool]) -> bool:
    _check_size(marks)
    return any(all(marks[i] for i in line) for line in WINNING_LINES)


def is_blackout(marks: Sequence[bool]) -> bool:
    _check_size(marks)
    return all(marks)


def evaluate(marks: Sequence[bool], mode: GameMode) -> bool:
    """Return True when ``marks`` wins under ``mode``.

    Regular mode needs one complete row, column or diagonal; blackout mode
    needs every cell.
    """
    if mode == "blackout":
        return is_blackout(marks)
    if mode == "regular":
        return has_line(marks)
    raise ValueError(f"unknown game mode: {mode!r}")
