import os

from PyQt5.QtCore import Qt, pyqtSignal, QRectF
from PyQt5.QtGui import QPainter, QPen, QFont
from PyQt5.QtWidgets import QWidget

from qmkviewer.gui.key_cap import SURFACE, OVERLAY, TEXT, GREEN
from qmkviewer.keymap.keymap_config import SUPPORTED_EXTENSIONS

DROP_TEXT = "Drop your keymap file here\nor click to browse\n(.json, keymap.c, keymap.h)"


def first_supported_file(urls):
    for url in urls:
        path = url.toLocalFile()
        if path and os.path.splitext(path)[1].lower() in SUPPORTED_EXTENSIONS:
            return path
    return None


class DropZone(QWidget):
    """ Shown while no keymap is loaded, accepts a dropped keymap file or a click to browse """
    file_dropped = pyqtSignal(str)
    browse_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self._hovered = False

    # noinspection PyPep8Naming
    def dragEnterEvent(self, ev):
        if ev.mimeData().hasUrls() and first_supported_file(ev.mimeData().urls()):
            ev.acceptProposedAction()
            self._hovered = True
            self.update()
        else:
            ev.ignore()

    # noinspection PyPep8Naming
    def dragLeaveEvent(self, ev):
        self._hovered = False
        self.update()
        super().dragLeaveEvent(ev)

    # noinspection PyPep8Naming
    def dropEvent(self, ev):
        self._hovered = False
        self.update()
        path = first_supported_file(ev.mimeData().urls())
        if path:
            ev.acceptProposedAction()
            self.file_dropped.emit(path)

    # noinspection PyPep8Naming
    def enterEvent(self, ev):
        self._hovered = True
        self.update()
        super().enterEvent(ev)

    # noinspection PyPep8Naming
    def leaveEvent(self, ev):
        self._hovered = False
        self.update()
        super().leaveEvent(ev)

    # noinspection PyPep8Naming
    def mousePressEvent(self, ev):
        if ev.button() == Qt.LeftButton:
            self.browse_requested.emit()
        super().mousePressEvent(ev)

    # noinspection PyPep8Naming
    def paintEvent(self, _):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        w, h = self.width() * 0.8, self.height() * 0.6
        rect = QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

        painter.setBrush(OVERLAY if self._hovered else SURFACE)
        painter.setPen(QPen(TEXT, 2.0))
        painter.drawRoundedRect(rect, 10.0, 10.0)

        painter.setPen(GREEN if self._hovered else TEXT)
        painter.setFont(QFont("Arial", 18))
        painter.drawText(rect, Qt.AlignCenter | Qt.TextWordWrap, DROP_TEXT)
        painter.end()
