"""Board and move serialisation.

Two board encodings are supported:

* **Layout text**: a compact FEN-like string. Rows run from row 0 to
  row 10 separated by ``/``; ``A``, ``D`` and ``K`` mark pieces and
  decimal numbers count empty cells.
* **Rows**: 11 lists of 11 entries, each ``"attacker"``, ``"defender"``,
  ``"king"`` or ``None``; the board-state shape used by game records.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from hnefatafl.core.board import Board
from hnefatafl.core.errors import InvalidBoard, InvalidMove
from hnefatafl.core.move import Move
from hnefatafl.core.piece import piece_char, piece_from_char, piece_from_name
from hnefatafl.core.types import BOARD_SIZE, Position, parse_position

STARTING_LAYOUT = (
    "3AAAAA3/5A5/11/A4D4A/A3DDD3A/AA1DDKDD1AA/A3DDD3A/A4D4A/11/5A5/3AAAAA3"
)


# ── Layout text ──────────────────────────────────────────────────────────────


def board_to_text(board: Board) -> str:
    """Encode *board* as layout text."""
    rows: list[str] = []
    for row in range(BOARD_SIZE):
        parts: list[str] = []
        empty = 0
        for col in range(BOARD_SIZE):
            piece = board[Position(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                parts.append(str(empty))
                empty = 0
            parts.append(piece_char(piece))
        if empty:
            parts.append(str(empty))
        rows.append("".join(parts))
    return "/".join(rows)


def board_from_text(text: str) -> Board:
    """Decode layout text produced by :func:`board_to_text`."""
    row_texts = text.strip().split("/")
    if len(row_texts) != BOARD_SIZE:
        raise InvalidBoard(f"Expected {BOARD_SIZE} rows, got {len(row_texts)}")

    board = Board()
    for row, row_text in enumerate(row_texts):
        col = 0
        digits = ""
        for char in row_text + "\0":
            if char.isdigit():
                digits += char
                continue
            if digits:
                col += int(digits)
                digits = ""
            if char == "\0":
                break
            if col >= BOARD_SIZE:
                raise InvalidBoard(f"Row {row + 1} is too long: {row_text!r}")
            try:
                board[Position(row, col)] = piece_from_char(char)
            except ValueError as exc:
                raise InvalidBoard(str(exc)) from None
            col += 1
        if col != BOARD_SIZE:
            raise InvalidBoard(f"Row {row + 1} has {col} cells: {row_text!r}")

    board.validate()
    return board


# ── Rows ─────────────────────────────────────────────────────────────────────


def board_to_rows(board: Board) -> list[list[str | None]]:
    """Encode *board* as 11×11 nested lists of piece names."""
    return [
        [
            None if (piece := board[Position(row, col)]) is None else str(piece)
            for col in range(BOARD_SIZE)
        ]
        for row in range(BOARD_SIZE)
    ]


def board_from_rows(rows: Sequence[Sequence[str | None]]) -> Board:
    """Decode nested lists produced by :func:`board_to_rows`."""
    if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
        raise InvalidBoard(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")

    board = Board()
    for row, cells in enumerate(rows):
        for col, name in enumerate(cells):
            if name is None:
                continue
            try:
                board[Position(row, col)] = piece_from_name(name)
            except ValueError as exc:
                raise InvalidBoard(str(exc)) from None
    board.validate()
    return board


# ── Moves ────────────────────────────────────────────────────────────────────


def _pos_to_dict(pos: Position) -> dict[str, int]:
    return {"row": pos.row, "col": pos.col}


def _pos_from_dict(data: Any) -> Position:
    if not isinstance(data, Mapping):
        raise InvalidMove("malformed position record")
    row, col = data.get("row"), data.get("col")
    if not isinstance(row, int) or not isinstance(col, int):
        raise InvalidMove("malformed position record")
    return Position(row, col)


def move_to_dict(move: Move) -> dict[str, Any]:
    """Encode *move* as a plain game-record dict."""
    return {
        "from": _pos_to_dict(move.from_pos),
        "to": _pos_to_dict(move.to_pos),
        "piece": str(move.piece),
        "captured": [_pos_to_dict(pos) for pos in move.captured],
        "timestamp": move.timestamp,
    }


def move_from_dict(data: Mapping[str, Any]) -> Move:
    """Decode a dict produced by :func:`move_to_dict`."""
    try:
        piece = piece_from_name(data["piece"])
        return Move(
            _pos_from_dict(data["from"]),
            _pos_from_dict(data["to"]),
            piece,
            captured=tuple(_pos_from_dict(p) for p in data.get("captured") or ()),
            timestamp=float(data.get("timestamp") or 0.0),
        )
    except (KeyError, TypeError, ValueError) as exc:
        if isinstance(exc, InvalidMove):
            raise
        raise InvalidMove(f"malformed move record: {exc}") from None


def parse_move(text: str) -> tuple[Position, Position]:
    """Parse ``'a4-d4'`` into its from/to positions."""
    parts = text.strip().split("-")
    if len(parts) != 2:
        raise ValueError(f"Invalid move text: {text!r}")
    return parse_position(parts[0]), parse_position(parts[1])
