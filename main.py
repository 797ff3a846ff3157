import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor
from nxn_tictactoe.game_logic import DEFAULT_BOARD_SIZE, MAX_BOARD_SIZE, MIN_BOARD_SIZE
from nxn_tictactoe.ui.main_window import TicTacToeWindow

# -----------------------------------------------------------------------------
# COLOR CONSTANTS
# -----------------------------------------------------------------------------

WINDOW_COLOR = QColor(53, 53, 53)
WINDOW_TEXT_COLOR = Qt.white
BASE_COLOR = QColor(35, 35, 35)
TEXT_COLOR = Qt.white
BUTTON_COLOR = QColor(66, 66, 66)
BUTTON_TEXT_COLOR = Qt.white
HIGHLIGHT_COLOR = QColor(42, 130, 218)
HIGHLIGHTED_TEXT_COLOR = Qt.white

DISABLED_TEXT_COLOR = QColor(127, 127, 127)
DISABLED_BUTTON_TEXT_COLOR = QColor(127, 127, 127)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# -----------------------------------------------------------------------------
# PALETTE SETUP
# -----------------------------------------------------------------------------

def apply_default_palette(app: QApplication):
    """
    Apply the dark theme palette using predefined constants.
    """
    palette = QPalette()
    palette.setColor(QPalette.Window, WINDOW_COLOR)
    palette.setColor(QPalette.WindowText, WINDOW_TEXT_COLOR)
    palette.setColor(QPalette.Base, BASE_COLOR)
    palette.setColor(QPalette.Text, TEXT_COLOR)
    palette.setColor(QPalette.Button, BUTTON_COLOR)
    palette.setColor(QPalette.ButtonText, BUTTON_TEXT_COLOR)
    palette.setColor(QPalette.Highlight, HIGHLIGHT_COLOR)
    palette.setColor(QPalette.HighlightedText, HIGHLIGHTED_TEXT_COLOR)
    # stepper buttons grey out at the size limits
    palette.setColor(QPalette.Disabled, QPalette.Text, DISABLED_TEXT_COLOR)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, DISABLED_BUTTON_TEXT_COLOR)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# COMMAND LINE
# -----------------------------------------------------------------------------

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Two-player N x N tic-tac-toe.")
    ap.add_argument("--size", type=int, default=DEFAULT_BOARD_SIZE,
                    help=f"initial board size, clamped to {MIN_BOARD_SIZE}-{MAX_BOARD_SIZE}")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    help="logging level for engine and ui messages")
    # Qt keeps its own options (-style, -platform ...)
    return ap.parse_known_args(argv)


def setup_logging(level):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def run(argv=None):
    args, qt_args = parse_args(argv)
    setup_logging(args.log_level)

    app = QApplication([sys.argv[0]] + qt_args)
    app.setStyle('Fusion')
    apply_default_palette(app)

    window = TicTacToeWindow(initial_size=args.size)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(run())
