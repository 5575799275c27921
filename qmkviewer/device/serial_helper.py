import logging
import time

import serial
import serial.tools.list_ports

from qmkviewer.device.report import parse_console_line
from qmkviewer.device.report_source import ReportSource

PORT_NAME_HINTS = ("usbmodem", "usbserial")
REOPEN_INTERVAL_SEC = 0.5


class ConsoleReportSource(ReportSource):
    """
    Reads 'L:<layer> B:<hex bits>' lines printed by the keyboard on a serial console.

    Without an explicit port the first port whose name looks like a USB modem or
    USB serial adapter is used. Opening is retried at most every REOPEN_INTERVAL_SEC.
    """

    def __init__(self, port=None, baudrate=115200):
        self.log = logging.getLogger('QmkViewer')
        self.port_name = port
        self.baudrate = baudrate
        self.serial = None
        self.buffer = ""
        self.last_try = 0.0

    def find_serial(self):
        if self.port_name:
            return self.port_name
        for port in serial.tools.list_ports.comports():
            if any(hint in port.device.lower() for hint in PORT_NAME_HINTS):
                return port.device
        return None

    def ensure_port(self):
        if self.serial is not None:
            return
        now = time.monotonic()
        if now - self.last_try < REOPEN_INTERVAL_SEC:
            return
        self.last_try = now

        name = self.find_serial()
        if name is None:
            return
        try:
            self.serial = serial.Serial(name, self.baudrate, timeout=0.001)
            self.log.info("Opened console port %s", name)
        except serial.SerialException as e:
            self.log.debug("Could not open %s: %s", name, e)

    def read_all_and_add_to_buffer(self):
        try:
            data = self.serial.read(128)
        except serial.SerialException as e:
            self.log.warning("Console read failed, closing port: %s", e)
            self.close()
            return
        if data:
            self.buffer += data.decode("utf-8", errors="replace")

    def try_read_line(self):
        if self.serial is None:
            return None
        self.read_all_and_add_to_buffer()
        end = self.buffer.find("\n")
        if end == -1:
            return None
        line = self.buffer[:end]
        self.buffer = self.buffer[end + 1:]
        return line.strip()

    def poll(self):
        self.ensure_port()
        line = self.try_read_line()
        if not line:
            return None
        report = parse_console_line(line)
        if report is None:
            self.log.debug("console: %s", line)
        return report

    def close(self):
        if self.serial is not None:
            self.serial.close()
            self.serial = None

    def get_name(self):
        return f"Console ({self.port_name or 'auto'})"
