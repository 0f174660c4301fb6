"""Tests for board and move serialisation."""

import pytest

from hnefatafl.core.board import Board, create_initial_board
from hnefatafl.core.enums import PieceType, Role
from hnefatafl.core.errors import InvalidBoard, InvalidMove
from hnefatafl.core.move import Move
from hnefatafl.core.notation import (
    STARTING_LAYOUT,
    board_from_rows,
    board_from_text,
    board_to_rows,
    board_to_text,
    move_from_dict,
    move_to_dict,
    parse_move,
)
from hnefatafl.core.rules import apply_move, validate_move
from hnefatafl.core.types import parse_position as sq
from hnefatafl.engine.evaluation import evaluate


class TestLayoutText:
    def test_initial_board_encodes_to_starting_layout(self) -> None:
        assert board_to_text(create_initial_board()) == STARTING_LAYOUT

    def test_starting_layout_decodes_to_initial_board(self) -> None:
        assert board_from_text(STARTING_LAYOUT) == create_initial_board()

    def test_empty_board(self) -> None:
        text = board_to_text(Board())
        assert text == "/".join(["11"] * 11)
        assert board_from_text(text) == Board()

    def test_round_trip_after_moves(self) -> None:
        board = create_initial_board()
        board = apply_move(board, validate_move(board, Role.ATTACKER, sq("d1"), sq("d3")))
        board = apply_move(board, validate_move(board, Role.DEFENDER, sq("f4"), sq("i4")))
        decoded = board_from_text(board_to_text(board))
        assert decoded == board
        assert decoded.zobrist_hash == board.zobrist_hash

    @pytest.mark.parametrize(
        "text",
        [
            "11/11",
            "/".join(["11"] * 10 + ["12"]),
            "/".join(["11"] * 10 + ["10X"]),
            "/".join(["11"] * 10 + ["AAAAAAAAAAAA"]),
            "/".join(["A10"] + ["11"] * 9 + ["10"]),
        ],
    )
    def test_malformed_text(self, text: str) -> None:
        with pytest.raises(InvalidBoard):
            board_from_text(text)

    def test_invariants_checked(self) -> None:
        rows = ["11"] * 11
        rows[5] = "5A5"  # attacker on the throne
        with pytest.raises(InvalidBoard):
            board_from_text("/".join(rows))


class TestRows:
    def test_round_trip(self) -> None:
        board = create_initial_board()
        rows = board_to_rows(board)
        assert len(rows) == 11 and all(len(r) == 11 for r in rows)
        assert rows[5][5] == "king"
        assert rows[0][3] == "attacker"
        assert rows[4][4] == "defender"
        assert rows[2][2] is None
        assert board_from_rows(rows) == board

    def test_round_trip_preserves_evaluation(self) -> None:
        board = create_initial_board()
        board = apply_move(board, validate_move(board, Role.ATTACKER, sq("d1"), sq("d3")))
        decoded = board_from_rows(board_to_rows(board))
        for role in Role:
            assert evaluate(decoded, role) == evaluate(board, role)

    def test_bad_shape(self) -> None:
        with pytest.raises(InvalidBoard):
            board_from_rows([[None] * 11] * 10)

    def test_bad_piece_name(self) -> None:
        rows: list[list[str | None]] = [[None] * 11 for _ in range(11)]
        rows[1][1] = "queen"
        with pytest.raises(InvalidBoard):
            board_from_rows(rows)


class TestMoveRecords:
    def test_round_trip(self) -> None:
        move = Move(sq("e7"), sq("e4"), PieceType.ATTACKER, captured=(sq("d4"),), timestamp=12.5)
        data = move_to_dict(move)
        assert data["from"] == {"row": 6, "col": 4}
        assert data["piece"] == "attacker"
        decoded = move_from_dict(data)
        assert decoded == move
        assert decoded.captured == move.captured
        assert decoded.timestamp == 12.5

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"from": {"row": 1, "col": 1}, "to": {"row": 1, "col": 3}},
            {"from": {"row": 1}, "to": {"row": 1, "col": 3}, "piece": "attacker"},
            {"from": {"row": 1, "col": 1}, "to": [1, 3], "piece": "attacker"},
            {"from": {"row": 1, "col": 1}, "to": {"row": 1, "col": 3}, "piece": "rook"},
        ],
    )
    def test_malformed(self, data: dict) -> None:
        with pytest.raises(InvalidMove):
            move_from_dict(data)

    def test_parse_move(self) -> None:
        assert parse_move("a4-d4") == (sq("a4"), sq("d4"))
        with pytest.raises(ValueError):
            parse_move("a4d4")
