import logging
import time

import yaml
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QStackedWidget,
    QPushButton, QLabel, QPlainTextEdit, QGroupBox, QMessageBox, QFileDialog, QDockWidget, QDialog
)

from qmkviewer.gui.drop_zone import DropZone, first_supported_file
from qmkviewer.gui.key_cap import KeyCap, PEACH, BLUE, YELLOW
from qmkviewer.gui.settings_dialog import SettingsDialog
from qmkviewer.keymap.errors import KeymapLoadError
from qmkviewer.keymap.keyboard_state import KeyboardState
from qmkviewer.keymap.keymap_config import load_keymap_file
from qmkviewer.keymap.keymap_model import KeyboardLayout
from qmkviewer.keymap.wrappers import KeyKind
from qmkviewer.util.bit_util import toggle_bit, format_bits

FILE_FILTER = "Keymap files (*.json *.c *.h);;JSON files (*.json);;C files (*.c *.h)"


class ViewerWindow(QMainWindow):
    """
    Keyboard grid, layer header, debug panel and file loading.

    The window owns the KeyboardState. Reports only arrive through tick(), which the
    application calls once per render cycle with the newest polled report.
    """

    def __init__(self, settings, store, mock_mode, parent=None):
        super().__init__(parent)
        self.log = logging.getLogger('QmkViewer')
        self.settings = settings
        self.store = store
        self.mock_mode = mock_mode
        self.mt_hold_swap_sec = settings.get("render_mt_hold_swap_msec") / 1000.0

        self.state = KeyboardState(KeyboardLayout.planck_default())
        self.keyboard_loaded = False
        self.manual_pressed = 0
        self.pressed_started = {}
        self.caps = []

        self.setWindowTitle("QMK Keyboard Viewer")
        self.setAcceptDrops(True)
        self.init_ui()
        self.rebuild_grid()
        self.show_current_page()

    def init_ui(self):
        central = QWidget()
        main_layout = QVBoxLayout(central)

        header = QHBoxLayout()
        header.addWidget(QLabel("Layer:"))
        self.layer_label = QLabel()
        self.layer_label.setFont(QFont("Arial", 11, QFont.Bold))
        header.addWidget(self.layer_label)
        header.addStretch(1)

        if self.mock_mode:
            header.addWidget(QLabel("Mode: Mock"))
            for text, step in (("Layer -", -1), ("Layer +", 1)):
                button = QPushButton(text)
                button.clicked.connect(lambda _, s=step: self.step_layer(s))
                header.addWidget(button)

        self.textarea_button = self.add_toggle(header, "Textarea")
        self.legend_button = self.add_toggle(header, "Legend")
        self.debug_button = self.add_toggle(header, "Debug")

        button = QPushButton("Open...")
        button.clicked.connect(self.open_file_dialog)
        header.addWidget(button)
        button = QPushButton("Settings...")
        button.clicked.connect(self.open_settings)
        header.addWidget(button)
        self.unload_button = QPushButton("Unload")
        self.unload_button.clicked.connect(self.unload_keyboard)
        header.addWidget(self.unload_button)
        main_layout.addLayout(header)

        self.pages = QStackedWidget()
        self.drop_zone = DropZone()
        self.drop_zone.file_dropped.connect(self.load_keymap_from_path)
        self.drop_zone.browse_requested.connect(self.open_file_dialog)
        self.pages.addWidget(self.drop_zone)

        keyboard_page = QWidget()
        page_layout = QVBoxLayout(keyboard_page)
        page_layout.setContentsMargins(30, 30, 30, 30)
        self.grid_host = QWidget()
        self.grid = QGridLayout(self.grid_host)
        self.grid.setSpacing(4)
        page_layout.addWidget(self.grid_host, alignment=Qt.AlignCenter)

        extras = QHBoxLayout()
        self.legend_box = self.create_legend_box()
        extras.addWidget(self.legend_box)
        self.text_box = QGroupBox("Text Input")
        text_layout = QVBoxLayout(self.text_box)
        text_edit = QPlainTextEdit()
        text_edit.setPlaceholderText("Type here to test your keyboard layout...")
        text_layout.addWidget(text_edit)
        extras.addWidget(self.text_box)
        page_layout.addLayout(extras)
        page_layout.addStretch(1)
        self.pages.addWidget(keyboard_page)
        main_layout.addWidget(self.pages)

        self.legend_button.toggled.connect(self.legend_box.setVisible)
        self.textarea_button.toggled.connect(self.text_box.setVisible)
        self.legend_box.setVisible(False)
        self.text_box.setVisible(False)

        self.debug_dock = QDockWidget("Debug", self)
        self.debug_label = QLabel()
        self.debug_label.setFont(QFont("Courier", 10))
        self.debug_label.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        self.debug_label.setWordWrap(True)
        self.debug_dock.setWidget(self.debug_label)
        self.addDockWidget(Qt.RightDockWidgetArea, self.debug_dock)
        self.debug_button.toggled.connect(self.debug_dock.setVisible)
        self.debug_dock.setVisible(False)

        self.setCentralWidget(central)

    @staticmethod
    def add_toggle(layout, text):
        button = QPushButton(text)
        button.setCheckable(True)
        layout.addWidget(button)
        return button

    @staticmethod
    def create_legend_box():
        box = QGroupBox("Legend")
        layout = QVBoxLayout(box)
        for color, title in ((PEACH, "MT(mod, key)"), (BLUE, "LT(layer, key)"), (YELLOW, "OSL ★")):
            label = QLabel(title)
            label.setStyleSheet(f"border: 2px solid {color.name()}; border-radius: 4px; padding: 2px 6px;")
            layout.addWidget(label)
        return box

    def rebuild_grid(self):
        for cap in self.caps:
            self.grid.removeWidget(cap)
            cap.deleteLater()
        self.caps = []
        self.pressed_started = {}

        layout = self.state.layout
        for idx in range(layout.num_keys):
            row, col = divmod(idx, layout.cols)
            cap = KeyCap(idx)
            cap.clicked.connect(self.key_clicked)
            self.grid.addWidget(cap, row, col)
            self.caps.append(cap)
        self.refresh()

    def show_current_page(self):
        self.pages.setCurrentIndex(1 if self.keyboard_loaded else 0)
        self.unload_button.setVisible(self.keyboard_loaded)

    def set_state(self, state):
        self.state = state
        self.manual_pressed = 0
        self.rebuild_grid()

    def load_keymap_from_path(self, path, notify=True):
        try:
            config = load_keymap_file(path)
        except KeymapLoadError as e:
            self.log.warning("Could not load keymap %s: %s", path, e)
            if notify:
                QMessageBox.warning(self, "Error", str(e))
            return False

        self.set_state(KeyboardState(config.to_keyboard_layout()))
        self.keyboard_loaded = True
        self.show_current_page()
        self.setWindowTitle(f"QMK Keyboard Viewer - {config.keyboard} / {config.keymap}")

        try:
            self.store.save_keymap_file(path)
        except (OSError, yaml.YAMLError, KeymapLoadError) as e:
            self.log.warning("Failed to save keymap file: %s", e)
        return True

    def unload_keyboard(self):
        try:
            self.store.clear_saved_keymap()
        except (OSError, yaml.YAMLError) as e:
            self.log.warning("Failed to clear saved keymap: %s", e)
        self.keyboard_loaded = False
        self.set_state(KeyboardState(KeyboardLayout.planck_default()))
        self.setWindowTitle("QMK Keyboard Viewer")
        self.show_current_page()

    def open_file_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Select keymap file", "", FILE_FILTER)
        if file_name:
            self.load_keymap_from_path(file_name)
        else:
            self.log.info("No file selected. Operation canceled.")

    def open_settings(self):
        dlg = SettingsDialog(self)
        dlg.setup(self.settings.get_all())
        if dlg.exec_() == QDialog.Accepted:
            self.settings.set_all(dlg.get_updated_settings())
            self.mt_hold_swap_sec = self.settings.get("render_mt_hold_swap_msec") / 1000.0
        dlg.close()

    def step_layer(self, step):
        count = self.state.layout.num_layers
        self.state.set_layer((self.state.active_layer + step) % count)
        self.refresh()

    def key_clicked(self, index):
        if self.mock_mode:
            self.manual_pressed = toggle_bit(self.manual_pressed, index)
            self.state.set_pressed_bits(self.manual_pressed)
            self.refresh()

    def tick(self, report=None):
        if report is not None:
            self.state.apply_report(report)
            if self.mock_mode and not self.settings.get("input_mock_animate"):
                self.state.set_pressed_bits(self.manual_pressed)
        self.refresh()

    def refresh(self):
        state = self.state
        layer = state.active_layer
        layout = state.layout
        now = time.monotonic()

        for idx in range(layout.num_keys):
            if (state.pressed_bits >> idx) & 1:
                self.pressed_started.setdefault(idx, now)
            else:
                self.pressed_started.pop(idx, None)

        shift = state.is_shift_pressed()
        for cap in self.caps:
            row, col = divmod(cap.index, layout.cols)
            main, sub = state.display_parts(layer, row, col, shift)
            started = self.pressed_started.get(cap.index)
            held = started is not None and now - started >= self.mt_hold_swap_sec
            cap.set_key(main, sub, state.kind_at(layer, row, col) or KeyKind.PLAIN,
                        state.is_pressed(row, col), state.is_transparent_key(layer, row, col), held)

        self.layer_label.setText(f"{layout.layer_name(layer)} (#{layer})")
        if self.debug_dock.isVisible():
            self.debug_label.setText(
                f"Active layer index: {layer}\n"
                f"Pressed bits: {format_bits(state.pressed_bits)}\n"
                f"Pressed indices: {state.pressed_indices()}")

    # noinspection PyPep8Naming
    def dragEnterEvent(self, ev):
        if ev.mimeData().hasUrls() and first_supported_file(ev.mimeData().urls()):
            ev.acceptProposedAction()

    # noinspection PyPep8Naming
    def dropEvent(self, ev):
        path = first_supported_file(ev.mimeData().urls())
        if path:
            ev.acceptProposedAction()
            self.load_keymap_from_path(path)
