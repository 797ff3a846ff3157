from nxn_tictactoe.game_logic import Mark

# N=3, every cell filled, no line for anyone
DRAW_MOVES_3X3 = [
    (0, 0), (0, 1), (0, 2),
    (1, 1), (1, 0), (1, 2),
    (2, 1), (2, 0), (2, 2),
]

# N=3, X wins on the main diagonal
DIAGONAL_WIN_MOVES_3X3 = [(0, 0), (0, 1), (1, 1), (0, 2), (2, 2)]


def play(engine, moves):
    """Apply (row, col) moves in order and return the list of outcomes."""
    return [engine.apply_move(r, c) for r, c in moves]


def empty_board(n):
    return [[Mark.EMPTY for _ in range(n)] for _ in range(n)]


def filled_count(state):
    return sum(1 for row in state.board for cell in row if cell is not Mark.EMPTY)
