"""Core domain layer — pure Hnefatafl rules with zero external dependencies.

Quick start::

    from hnefatafl.core import Role, create_initial_board, generate_legal_moves

    board = create_initial_board()
    for move in generate_legal_moves(board, Role.ATTACKER):
        print(move)
"""

from hnefatafl.core.board import Board, create_initial_board
from hnefatafl.core.enums import PieceType, Role, WinCondition
from hnefatafl.core.errors import HnefataflError, InvalidBoard, InvalidMove, NoLegalMoves
from hnefatafl.core.move import Move
from hnefatafl.core.move_generator import MoveGenerator
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
from hnefatafl.core.rules import (
    Outcome,
    Rules,
    apply_move,
    detect_terminal,
    generate_legal_moves,
    has_legal_moves,
    is_legal_move,
    resolve_captures,
    validate_move,
)
from hnefatafl.core.types import (
    BOARD_SIZE,
    CORNERS,
    THRONE,
    Position,
    is_corner,
    is_throne,
    parse_position,
    position_name,
)

__all__ = [
    # Enums
    "PieceType",
    "Role",
    "WinCondition",
    # Errors
    "HnefataflError",
    "InvalidBoard",
    "InvalidMove",
    "NoLegalMoves",
    # Types / helpers
    "BOARD_SIZE",
    "CORNERS",
    "THRONE",
    "Position",
    "is_corner",
    "is_throne",
    "parse_position",
    "position_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Outcome",
    "Rules",
    # Rules facade
    "apply_move",
    "create_initial_board",
    "detect_terminal",
    "generate_legal_moves",
    "has_legal_moves",
    "is_legal_move",
    "resolve_captures",
    "validate_move",
    # Notation
    "STARTING_LAYOUT",
    "board_from_rows",
    "board_from_text",
    "board_to_rows",
    "board_to_text",
    "move_from_dict",
    "move_to_dict",
    "parse_move",
]
