import argparse
import logging
import sys

from PyQt5.QtWidgets import QApplication

from qmkviewer.settings import INPUT_SOURCES
from qmkviewer.viewer import QmkViewer


def main():
    parser = argparse.ArgumentParser(
                    prog='QmkViewer',
                    usage='%(prog)s [options] [keymap]',
                    description='Live view of your QMK keymap')
    parser.add_argument('keymap', nargs='?', help='Keymap file to load (.json, .c or .h)')
    parser.add_argument('--source', choices=INPUT_SOURCES, help='Input source, overrides the settings file')
    parser.add_argument('--port', help='Serial port for the console input source')
    parser.add_argument('--debug', type=int, default=0, choices=[0, 1, 2], help='Set debug level: 0 (no debug), 1 (basic debug), 2 (detailed debug)')
    args = parser.parse_args()

    # Important for XWayland icon matching
    if sys.platform.startswith('linux'):
        QApplication.setDesktopFileName('QmkViewer')

    print("Executing QmkViewer...")
    app = QmkViewer(logging.DEBUG if args.debug > 0 else logging.INFO, args.keymap, args.source, args.port)

    sys.exit(app.exec_())
