from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen

from ..game_logic import Coord, Mark

BACKGROUND_COLOR = QColor("#333")
GRID_COLOR = QColor("#555")
X_COLOR = QColor("#8acaff")
O_COLOR = QColor("#ff8a8a")
WIN_FILL_COLOR = QColor(138, 202, 255, 70)
FOCUS_COLOR = QColor("#eeeeee")

# arrow key -> (d_row, d_col)
ARROW_STEPS = {
    int(Qt.Key_Up): (-1, 0),
    int(Qt.Key_Down): (1, 0),
    int(Qt.Key_Left): (0, -1),
    int(Qt.Key_Right): (0, 1),
}
PLAY_KEYS = (int(Qt.Key_Return), int(Qt.Key_Enter), int(Qt.Key_Space))


class BoardWidget(QWidget):
    """
    custom widget to draw and click on an n x n board
    """
    cell_clicked = Signal(int, int)  # emits row, col on click or Enter/Space

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine            # reference to game state
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self.setFocusPolicy(Qt.StrongFocus)
        self._accept_clicks = True      # toggle click handling
        self._highlight = frozenset()   # winning cells
        self.focus_cell = Coord(0, 0)   # keyboard cursor
        self._update_accessible_name()

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def set_highlight(self, cells):
        self._highlight = frozenset(cells)
        self.update()

    def reset_focus(self):
        # back to top-left, e.g. on a new round
        self.focus_cell = Coord(0, 0)
        self._update_accessible_name()
        self.update()

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        # square drawing area centred in the widget
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side

    def _board_size(self):
        state = self.engine.round_state
        return state.size if state else self.engine.board_size

    def _update_accessible_name(self):
        r, c = self.focus_cell
        self.setAccessibleName(f"Row {r + 1}, Column {c + 1}")

    def paintEvent(self, event):
        """
        draw grid, X/O marks, winning line and focus cell
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            offset_x, offset_y, side = self._geometry()
            painter.fillRect(self.rect(), BACKGROUND_COLOR)
            state = self.engine.round_state
            size = self._board_size()
            cell_size = side / size
            # winning cells under everything else
            for r, c in self._highlight:
                painter.fillRect(
                    QRectF(offset_x + c*cell_size, offset_y + r*cell_size, cell_size, cell_size),
                    WIN_FILL_COLOR,
                )
            # grid lines
            painter.setPen(QPen(GRID_COLOR, 2))
            for i in range(1, size):
                x = offset_x + i*cell_size
                painter.drawLine(int(x), int(offset_y), int(x), int(offset_y+side))
                y = offset_y + i*cell_size
                painter.drawLine(int(offset_x), int(y), int(offset_x+side), int(y))
            # marks
            if state is not None:
                pen_width = max(2, int(cell_size * 0.06))
                for r in range(size):
                    for c in range(size):
                        sym = state.board[r][c]
                        if sym is Mark.EMPTY: continue
                        cx = offset_x + c*cell_size + cell_size/2
                        cy = offset_y + r*cell_size + cell_size/2
                        rad = cell_size/2 * 0.7
                        if sym is Mark.X:
                            painter.setPen(QPen(X_COLOR, pen_width))
                            # two crossing lines
                            painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                            painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                        else:
                            painter.setPen(QPen(O_COLOR, pen_width))
                            painter.drawEllipse(QPointF(cx, cy), rad, rad)
            # keyboard cursor
            if self.hasFocus() and self.focus_cell.in_bounds(size):
                r, c = self.focus_cell
                painter.setPen(QPen(FOCUS_COLOR, 2, Qt.DashLine))
                painter.setBrush(Qt.NoBrush)
                painter.drawRect(QRectF(offset_x + c*cell_size + 3, offset_y + r*cell_size + 3,
                                        cell_size - 6, cell_size - 6))
        finally:
            painter.end()

    def cell_at(self, x, y):
        """
        map widget pixel position to a board Coord, None outside the grid
        """
        ox, oy, side = self._geometry()
        if not (ox <= x < ox+side and oy <= y < oy+side):
            return None
        size = self._board_size()
        cell = side / size
        if cell <= 0: return None
        col = int((x-ox)//cell); row = int((y-oy)//cell)
        # clamp to valid range
        row = max(0, min(row, size-1)); col = max(0, min(col, size-1))
        return Coord(row, col)

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self._accept_clicks:
            return
        pos = event.position()
        coord = self.cell_at(pos.x(), pos.y())
        if coord is None:
            return
        self.focus_cell = coord
        self._update_accessible_name()
        self.cell_clicked.emit(coord.row, coord.col)  # notify main window

    def keyPressEvent(self, event):
        """
        arrows move the cursor, Enter/Space play the cursor cell
        """
        key = int(event.key())
        if key in PLAY_KEYS:
            if self._accept_clicks:
                self.cell_clicked.emit(self.focus_cell.row, self.focus_cell.col)
            event.accept()
            return
        if key in ARROW_STEPS:
            d_row, d_col = ARROW_STEPS[key]
            nxt = self.focus_cell.step(d_row, d_col, self._board_size())
            if nxt is not None:
                self.focus_cell = nxt
                self._update_accessible_name()
                self.update()
            event.accept()
            return
        super().keyPressEvent(event)
