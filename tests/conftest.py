import os

import pytest

# widgets are built without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from nxn_tictactoe.game_logic import GameEngine
from tests.helpers import DIAGONAL_WIN_MOVES_3X3, DRAW_MOVES_3X3, play

__all__ = [
    "DIAGONAL_WIN_MOVES_3X3",
    "DRAW_MOVES_3X3",
    "play",
]


@pytest.fixture
def engine():
    eng = GameEngine()
    eng.start_session()
    return eng


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
