import logging

from ..game_logic import (
    DEFAULT_BOARD_SIZE, MAX_BOARD_SIZE, MIN_BOARD_SIZE,
    Continue, Draw, GameEngine, Mark, Win, clamp_board_size,
)
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QStackedWidget,
    QPushButton, QLabel, QMenuBar, QMenu, QFrame, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

log = logging.getLogger(__name__)

X_STYLE = "color: #8acaff; font-weight: bold;"
O_STYLE = "color: #ff8a8a; font-weight: bold;"
DRAW_STYLE = "color: #eee; font-weight: bold;"
CARD_STYLE = "QFrame { border: 2px solid #444; border-radius: 6px; }"
CARD_ACTIVE_STYLE = {
    Mark.X: "QFrame { border: 2px solid #8acaff; border-radius: 6px; }",
    Mark.O: "QFrame { border: 2px solid #ff8a8a; border-radius: 6px; }",
}


def _centered_label(text):
    label = QLabel(text)
    label.setAlignment(Qt.AlignCenter)
    return label


class TicTacToeWindow(QMainWindow):
    """
    main window: setup page, game page, round flow
    """
    def __init__(self, initial_size=DEFAULT_BOARD_SIZE):
        """
        init engine, ui widgets, signals
        """
        super().__init__()
        self.engine = GameEngine()
        self.pending_size = clamp_board_size(initial_size)  # stepper value on setup page
        self.board_widget = BoardWidget(self.engine, parent=self)

        self._setup_ui()
        self._show_setup_page()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #222; }
            QPushButton { padding: 6px 14px; }
        """)
        self._create_menu_bar()            # top menu
        self.pages = QStackedWidget()
        self.setCentralWidget(self.pages)
        self._create_setup_page()          # size picker
        self._create_game_page()           # scores, board, controls
        self.pages.addWidget(self.setup_page)
        self.pages.addWidget(self.game_page)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        self.new_round_action = QAction("New Round", self)
        self.new_round_action.triggered.connect(self.new_round)
        self.back_action = QAction("Back to Setup", self)
        self.back_action.triggered.connect(self.back_to_setup)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (self.new_round_action, self.back_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_setup_page(self):
        '''board size stepper + start'''
        self.setup_page = QWidget()
        layout = QVBoxLayout(self.setup_page)
        title = QLabel("Tic-Tac-Toe")
        f = QFont(); f.setPointSize(22); f.setBold(True); title.setFont(f)
        title.setAlignment(Qt.AlignCenter)
        layout.addStretch(1)
        layout.addWidget(title)
        layout.addWidget(_centered_label("Board size"))

        stepper = QHBoxLayout()
        self.minus_button = QPushButton("−"); self.minus_button.clicked.connect(self._decrease_size)
        self.plus_button = QPushButton("+"); self.plus_button.clicked.connect(self._increase_size)
        self.size_label = QLabel(""); self.size_label.setAlignment(Qt.AlignCenter)
        f = QFont(); f.setPointSize(18); self.size_label.setFont(f)
        self.size_label.setMinimumWidth(80)
        stepper.addStretch(1)
        for w in (self.minus_button, self.size_label, self.plus_button): stepper.addWidget(w)
        stepper.addStretch(1)
        layout.addLayout(stepper)

        self.start_button = QPushButton("Start Game")
        self.start_button.clicked.connect(self.start_game)
        layout.addWidget(self.start_button, alignment=Qt.AlignCenter)
        layout.addStretch(1)

    def _create_score_card(self, mark):
        # bordered box: "Player X" over the win count
        card = QFrame(); card.setStyleSheet(CARD_STYLE)
        vl = QVBoxLayout(card)
        name = _centered_label(f"Player {mark.value}")
        name.setStyleSheet(X_STYLE if mark is Mark.X else O_STYLE)
        score = _centered_label("0")
        f = QFont(); f.setPointSize(16); score.setFont(f)
        vl.addWidget(name); vl.addWidget(score)
        return card, score

    def _create_game_page(self):
        '''score cards, turn label, board, message overlay, buttons'''
        self.game_page = QWidget()
        layout = QVBoxLayout(self.game_page)

        scores = QHBoxLayout()
        self.score_card_x, self.score_x_label = self._create_score_card(Mark.X)
        self.score_card_o, self.score_o_label = self._create_score_card(Mark.O)
        scores.addWidget(self.score_card_x); scores.addWidget(self.score_card_o)
        layout.addLayout(scores)

        self.turn_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.turn_label.setFont(f)
        self.turn_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.turn_label)

        layout.addWidget(self.board_widget, 1)

        # round-over message, hidden while playing
        self.message_panel = QFrame()
        self.message_panel.setStyleSheet("QFrame { background: #2b2b2b; border-radius: 8px; }")
        ml = QVBoxLayout(self.message_panel)
        self.message_title = _centered_label("")
        f = QFont(); f.setPointSize(16); self.message_title.setFont(f)
        self.message_sub = _centered_label("")
        self.message_ok_button = QPushButton("OK")
        self.message_ok_button.clicked.connect(self._dismiss_message)
        ml.addWidget(self.message_title); ml.addWidget(self.message_sub)
        ml.addWidget(self.message_ok_button, alignment=Qt.AlignCenter)
        self.message_panel.hide()
        layout.addWidget(self.message_panel)

        self.controls_bottom_widget = QWidget()
        hl = QHBoxLayout(self.controls_bottom_widget)
        self.reset_button = QPushButton("Reset"); self.reset_button.clicked.connect(self.new_round)
        self.back_button = QPushButton("Back"); self.back_button.clicked.connect(self.back_to_setup)
        for w in (None, self.reset_button, self.back_button):
            if w: hl.addWidget(w)
            else: hl.addStretch(1)
        self.controls_bottom_widget.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        layout.addWidget(self.controls_bottom_widget)

    # -- setup page --

    def _show_setup_page(self):
        self.pages.setCurrentWidget(self.setup_page)
        self.new_round_action.setEnabled(False); self.back_action.setEnabled(False)
        self._update_size_ui()

    def _update_size_ui(self):
        # size label + disable stepper at the bounds
        n = self.pending_size
        self.size_label.setText(f"{n} × {n}")
        self.minus_button.setEnabled(n > MIN_BOARD_SIZE)
        self.plus_button.setEnabled(n < MAX_BOARD_SIZE)

    @Slot()
    def _increase_size(self):
        self.pending_size = clamp_board_size(self.pending_size + 1)
        self._update_size_ui()

    @Slot()
    def _decrease_size(self):
        self.pending_size = clamp_board_size(self.pending_size - 1)
        self._update_size_ui()

    @Slot()
    def start_game(self):
        # new session at the chosen size
        self.engine.configure(self.pending_size)
        self.engine.start_session()
        self.pages.setCurrentWidget(self.game_page)
        self.new_round_action.setEnabled(True); self.back_action.setEnabled(True)
        self._begin_round_ui()
        self._update_score_ui()

    @Slot()
    def back_to_setup(self):
        # drop the session; size picker back to default
        self.message_panel.hide()
        self.engine.back_to_configuration()
        self.pending_size = self.engine.board_size
        self.board_widget.set_highlight(())
        self._show_setup_page()

    # -- game page --

    @Slot()
    def new_round(self):
        if not self.engine.has_round:
            return
        self.message_panel.hide()
        self.engine.start_round()
        self._begin_round_ui()

    def _begin_round_ui(self):
        # clean board, X to move, focus first cell
        self.board_widget.set_highlight(())
        self.board_widget.reset_focus()
        self.board_widget.set_accept_clicks(True)
        self._update_turn_ui(Mark.X)
        self.board_widget.setFocus()

    def _update_turn_ui(self, player):
        self.turn_label.setText(f"Turn: Player {player.value}")
        self.turn_label.setStyleSheet(X_STYLE if player is Mark.X else O_STYLE)
        # glow on the active card only
        self.score_card_x.setStyleSheet(CARD_ACTIVE_STYLE[Mark.X] if player is Mark.X else CARD_STYLE)
        self.score_card_o.setStyleSheet(CARD_ACTIVE_STYLE[Mark.O] if player is Mark.O else CARD_STYLE)

    def _update_score_ui(self):
        scores = self.engine.scoreboard
        self.score_x_label.setText(str(scores.wins_x))
        self.score_o_label.setText(str(scores.wins_o))

    def _show_message(self, title, sub, style):
        self.message_title.setText(title)
        self.message_title.setStyleSheet(style)
        self.message_sub.setText(sub)
        self.message_panel.show()
        self.message_ok_button.setFocus()

    @Slot()
    def _dismiss_message(self):
        # OK / Escape: next round
        if self.message_panel.isHidden():
            return
        self.new_round()

    def _handle_round_over(self, outcome):
        # end of round UI updates
        self.board_widget.set_accept_clicks(False)
        if isinstance(outcome, Win):
            p = outcome.player
            self.board_widget.set_highlight(outcome.cells)
            self._update_score_ui()
            self._show_message(f"Player {p.value} Wins!", "Well played!",
                               X_STYLE if p is Mark.X else O_STYLE)
        else:
            self._show_message("It's a Draw!", "No one wins this round.", DRAW_STYLE)

    @Slot(int, int)
    def _on_cell_clicked(self, r, c):
        # ignore clicks outside a session
        if not self.engine.has_round:
            return
        res = self.engine.apply_move(r, c)
        if isinstance(res, (Win, Draw)):
            self.board_widget.update()
            self._handle_round_over(res)
        elif isinstance(res, Continue):
            self.board_widget.update()
            self._update_turn_ui(res.next_player)
        else:
            log.debug("ignored click on %d,%d", r, c)

    def keyPressEvent(self, event):
        # Escape closes the round message like OK does
        if event.key() == Qt.Key_Escape and not self.message_panel.isHidden():
            self._dismiss_message()
            event.accept()
            return
        super().keyPressEvent(event)
