import logging
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple

log = logging.getLogger(__name__)

MIN_BOARD_SIZE = 2
MAX_BOARD_SIZE = 9
DEFAULT_BOARD_SIZE = 3


class InvalidUsageError(ValueError):
    """
    engine called in a way no correct caller would
    """


class Mark(str, Enum):
    """
    cell contents, compares equal to '', 'X', 'O'
    """
    EMPTY = ''
    X = 'X'
    O = 'O'

    @property
    def opponent(self):
        # other player's mark
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise InvalidUsageError("empty cell has no opponent")


class Coord(NamedTuple):
    """
    0-indexed board coordinate
    """
    row: int
    col: int

    def in_bounds(self, size):
        return 0 <= self.row < size and 0 <= self.col < size

    def step(self, d_row, d_col, size):
        """
        neighbour in the given direction, None if it falls off the board
        """
        nxt = Coord(self.row + d_row, self.col + d_col)
        return nxt if nxt.in_bounds(size) else None


Board = Tuple[Tuple[Mark, ...], ...]


def clamp_board_size(size):
    """
    stepper behaviour: pull any int into [MIN, MAX]
    """
    return max(MIN_BOARD_SIZE, min(int(size), MAX_BOARD_SIZE))


def _lines(size, last_move=None):
    # every candidate line in priority order: rows, cols, main diag, anti diag
    rows = range(size) if last_move is None else (last_move.row,)
    for r in rows:
        yield tuple(Coord(r, c) for c in range(size))
    cols = range(size) if last_move is None else (last_move.col,)
    for c in cols:
        yield tuple(Coord(r, c) for r in range(size))
    if last_move is None or last_move.row == last_move.col:
        yield tuple(Coord(i, i) for i in range(size))
    if last_move is None or last_move.row + last_move.col == size - 1:
        yield tuple(Coord(i, size - 1 - i) for i in range(size))


def find_winning_line(board, mark, last_move=None):
    """
    scan rows, cols, then both diagonals for a full line of `mark`.

    returns the first matching line as a tuple of Coord, or None.
    with `last_move` only lines through that cell are looked at; a line
    completed by an earlier move would already have ended the round, so
    the answer is the same.
    """
    size = len(board)
    for line in _lines(size, last_move):
        if all(board[r][c] == mark for r, c in line):
            return line
    return None


@dataclass(frozen=True)
class RoundState:
    """
    snapshot of one round for rendering
    """
    board: Board
    current_player: Mark
    moves_played: int
    active: bool

    @property
    def size(self):
        return len(self.board)

    def mark_at(self, coord):
        return self.board[coord.row][coord.col]


@dataclass(frozen=True)
class Scoreboard:
    wins_x: int = 0
    wins_o: int = 0

    def wins_for(self, mark):
        return self.wins_x if mark is Mark.X else self.wins_o


# apply_move outcomes

@dataclass(frozen=True)
class MoveOutcome:
    pass


@dataclass(frozen=True)
class Rejected(MoveOutcome):
    pass


@dataclass(frozen=True)
class Win(MoveOutcome):
    player: Mark
    cells: Tuple[Coord, ...]


@dataclass(frozen=True)
class Draw(MoveOutcome):
    pass


@dataclass(frozen=True)
class Continue(MoveOutcome):
    next_player: Mark


class GameEngine:
    """
    n x n tic-tac-toe rules, round state and session scores
    """
    def __init__(self, board_size=DEFAULT_BOARD_SIZE):
        """
        no round yet, scores zeroed
        """
        self.board_size = DEFAULT_BOARD_SIZE
        self.configure(board_size)
        self._board = None              # list of lists of Mark, None between sessions
        self._current_player = Mark.X
        self._moves_played = 0
        self._active = False
        self._wins = {Mark.X: 0, Mark.O: 0}

    def configure(self, size):
        """
        set the size used by the next round
        """
        # bool is an int subclass, still a caller bug
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidUsageError(f"board size must be an int, got {size!r}")
        if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            raise InvalidUsageError(
                f"board size {size} outside [{MIN_BOARD_SIZE}, {MAX_BOARD_SIZE}]"
            )
        self.board_size = size

    def start_session(self):
        """
        zero the scores and open the first round
        """
        self._wins = {Mark.X: 0, Mark.O: 0}
        log.info("new session on %dx%d board", self.board_size, self.board_size)
        return self.start_round()

    def start_round(self):
        """
        fresh empty board, X to move
        """
        n = self.board_size
        self._board = [[Mark.EMPTY for _ in range(n)] for _ in range(n)]
        self._current_player = Mark.X
        self._moves_played = 0
        self._active = True
        log.info("round started (%dx%d)", n, n)
        return self.round_state

    def apply_move(self, row, col):
        """
        place the current player's mark, check result.
        returns Rejected, Win, Draw or Continue
        """
        if self._board is None:
            raise InvalidUsageError("apply_move called before start_round")
        n = len(self._board)
        # ints only; anything else is treated like an off-board click
        if not (isinstance(row, int) and isinstance(col, int)):
            log.debug("rejected move %r,%r: not a coordinate", row, col)
            return Rejected()
        coord = Coord(row, col)
        if not self._active:
            log.debug("rejected move %s: round is over", coord)
            return Rejected()
        if not coord.in_bounds(n):
            log.debug("rejected move %s: off a %dx%d board", coord, n, n)
            return Rejected()
        if self._board[row][col] is not Mark.EMPTY:
            log.debug("rejected move %s: cell taken", coord)
            return Rejected()

        player = self._current_player
        self._board[row][col] = player
        self._moves_played += 1

        cells = find_winning_line(self._board, player, last_move=coord)
        if cells is not None:
            self._active = False
            self._wins[player] += 1
            log.info("player %s wins on %s", player.value, list(cells))
            return Win(player, cells)
        if self._moves_played == n * n:
            self._active = False
            log.info("round drawn after %d moves", self._moves_played)
            return Draw()
        self._current_player = player.opponent
        return Continue(self._current_player)

    def back_to_configuration(self, reset_size=True):
        """
        drop the round and the scores; size back to default unless told not to
        """
        self._board = None
        self._current_player = Mark.X
        self._moves_played = 0
        self._active = False
        self._wins = {Mark.X: 0, Mark.O: 0}
        if reset_size:
            self.board_size = DEFAULT_BOARD_SIZE
        log.info("session ended, back to configuration")

    def is_cell_empty(self, row, col):
        """
        true if a round exists, coords valid and cell blank
        """
        if self._board is None:
            return False
        if Coord(row, col).in_bounds(len(self._board)):
            return self._board[row][col] is Mark.EMPTY
        return False

    @property
    def has_round(self):
        return self._board is not None

    @property
    def round_state(self):
        """
        immutable copy of the current round, None outside a session
        """
        if self._board is None:
            return None
        return RoundState(
            board=tuple(tuple(row) for row in self._board),
            current_player=self._current_player,
            moves_played=self._moves_played,
            active=self._active,
        )

    @property
    def scoreboard(self):
        return Scoreboard(wins_x=self._wins[Mark.X], wins_o=self._wins[Mark.O])
