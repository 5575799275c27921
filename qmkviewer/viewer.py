import logging
import sys

from PyQt5.QtCore import QTimer
from PyQt5.QtWidgets import QApplication

from qmkviewer._version import __version__
from qmkviewer.device.report_poller import ReportPoller
from qmkviewer.device.report_source import create_report_source
from qmkviewer.gui.viewer_window import ViewerWindow
from qmkviewer.services.keymap_store import KeymapStore
from qmkviewer.settings import ViewerSettings


class QmkViewer(QApplication):
    def __init__(self, log_level, keymap_path=None, source=None, port=None):
        super().__init__(sys.argv)
        logging.basicConfig(
            level=log_level,
            format="[%(asctime)s] {%(filename)s:%(lineno)d} %(levelname)s - %(message)s",
            handlers=[
                logging.FileHandler(filename="viewer_log.txt", encoding="utf-8"),
                logging.StreamHandler(stream=sys.stdout),
            ],
        )
        self.log = logging.getLogger('QmkViewer')
        self.setApplicationName('QmkViewer')
        self.log.info("QmkViewer %s starting", __version__)

        self.settings = ViewerSettings()
        self.store = KeymapStore()

        source_kind = source or self.settings.get("input_source")
        self.source = create_report_source(source_kind, self.settings, port)
        self.poller = ReportPoller(self.source, self.settings.get("input_poll_interval_msec") / 1000.0)

        self.window = ViewerWindow(self.settings, self.store, mock_mode=source_kind == "mock")
        self.window.setWindowTitle(f"{self.window.windowTitle()} ({self.source.get_name()})")

        if keymap_path:
            self.window.load_keymap_from_path(keymap_path)
        elif self.settings.get("keymap_restore_last"):
            self.restore_last_keymap()

        self.aboutToQuit.connect(self.shutdown)
        self.poller.start()

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.update_view)
        self.timer.start(self.settings.get("render_refresh_msec"))

        self.window.resize(900, 520)
        self.window.show()

    def restore_last_keymap(self):
        path = self.store.get_saved_keymap_path()
        if path is None:
            return
        self.log.info("Restoring keymap %s (originally %s)", path, self.store.get_original_path())
        if not self.window.load_keymap_from_path(path, notify=False):
            self.log.warning("Remembered keymap could not be restored, starting without keymap")

    def update_view(self):
        self.window.tick(self.poller.drain_latest())

    def shutdown(self):
        self.timer.stop()
        self.poller.stop()
        self.log.info("Stopped polling input")
