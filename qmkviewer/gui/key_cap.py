from PyQt5.QtCore import Qt, pyqtSignal, QRectF, QSize
from PyQt5.QtGui import QPainter, QColor, QBrush, QPen, QFont
from PyQt5.QtWidgets import QWidget

from qmkviewer.keymap.wrappers import KeyKind

KEY_SIZE = 56
KEY_MARGIN = 3
KEY_RADIUS = 6.0

# Catppuccin Mocha (subset)
BLUE = QColor(0x89, 0xb4, 0xfa)
PEACH = QColor(0xfa, 0xb3, 0x87)
YELLOW = QColor(0xf9, 0xe2, 0xaf)
GREEN = QColor(0xa6, 0xe3, 0xa1)
SURFACE = QColor(0x1e, 0x1e, 0x2e)
OVERLAY = QColor(0x31, 0x31, 0x41)
TEXT = QColor(0xc6, 0xd0, 0xf5)

BORDER_COLORS = {
    KeyKind.MOD_TAP: PEACH,
    KeyKind.LAYER_TAP: BLUE,
    KeyKind.ONE_SHOT: YELLOW,
}


def border_color(kind):
    return BORDER_COLORS.get(kind, TEXT)


class KeyCap(QWidget):
    """ One key of the grid showing a main and a sub legend """
    clicked = pyqtSignal(int)

    def __init__(self, index, parent=None):
        super().__init__(parent)
        self.index = index
        self.main = ""
        self.sub = ""
        self.kind = KeyKind.PLAIN
        self.pressed = False
        self.transparent = False
        self.held = False

        self.font_main = QFont("Arial", 11)
        self.font_sub = QFont("Arial", 8)
        self.setMinimumSize(KEY_SIZE, KEY_SIZE)

    def sizeHint(self):
        return QSize(KEY_SIZE, KEY_SIZE)

    def set_key(self, main, sub, kind, pressed, transparent, held):
        """ Update the content, held marks an MT key pressed for longer than the swap threshold """
        state = (main, sub, kind, pressed, transparent, held)
        if state == (self.main, self.sub, self.kind, self.pressed, self.transparent, self.held):
            return
        self.main, self.sub, self.kind, self.pressed, self.transparent, self.held = state
        self.update()

    def background(self):
        if self.transparent:
            return None
        if self.pressed:
            return PEACH if self.kind == KeyKind.MOD_TAP and self.held else GREEN
        return OVERLAY

    # noinspection PyPep8Naming
    def paintEvent(self, _):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        rect = QRectF(self.rect()).adjusted(KEY_MARGIN, KEY_MARGIN, -KEY_MARGIN, -KEY_MARGIN)

        bg = self.background()
        painter.setPen(Qt.NoPen)
        if bg is not None:
            painter.setBrush(QBrush(bg))
            painter.drawRoundedRect(rect, KEY_RADIUS, KEY_RADIUS)

        is_fn = self.kind != KeyKind.PLAIN
        sub_color = TEXT
        if is_fn:
            sub_color = border_color(self.kind)
            painter.setBrush(Qt.NoBrush)
            painter.setPen(QPen(sub_color, 1.2))
            painter.drawRoundedRect(rect.adjusted(0.5, 0.5, -0.5, -0.5), KEY_RADIUS, KEY_RADIUS)

        big, small = self.main, self.sub
        if self.kind == KeyKind.MOD_TAP and self.held:
            big, small = small, big
        if self.kind == KeyKind.ONE_SHOT:
            small = ""

        if big:
            painter.setPen(Qt.white)
            painter.setFont(self.font_main)
            top = rect.adjusted(0, 0, 0, -rect.height() / 3) if small else rect
            painter.drawText(top, Qt.AlignCenter, big)
        if small:
            painter.setPen(sub_color)
            painter.setFont(self.font_sub)
            bottom = rect.adjusted(0, rect.height() * 0.55, 0, 0)
            painter.drawText(bottom, Qt.AlignHCenter | Qt.AlignTop, small)
        painter.end()

    # noinspection PyPep8Naming
    def mousePressEvent(self, ev):
        if ev.button() == Qt.LeftButton:
            self.clicked.emit(self.index)
        super().mousePressEvent(ev)
