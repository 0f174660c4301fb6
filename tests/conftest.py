"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from hnefatafl.core.board import Board
from hnefatafl.core.piece import piece_from_char
from hnefatafl.core.types import parse_position

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def make_board(**squares: str) -> Board:
    """Board with pieces placed by name, e.g. ``make_board(f6="K", e6="A")``."""
    board = Board()
    for name, char in squares.items():
        board[parse_position(name)] = piece_from_char(char)
    return board


@pytest.fixture
def board_factory() -> Callable[..., Board]:
    return make_board


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for worker tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
