import logging
import threading

try:
    import hid
except ImportError:
    print("""Library hidapi missing. Please Install:

    Arch Linux:    pacman -Sy hidapi
    Fedora:        dnf install hidapi
    Ubuntu/Debian: apt install libhidapi-hidraw0
    macOS:         brew install hidapi
    Windows:       see the libusb/hidapi README

    and then: pip install hid
    """)
    raise

from qmkviewer.device.report import parse_rawhid_packet
from qmkviewer.device.report_source import ReportSource

usage_page    = 0xFF60
usage         = 0x61
report_length = 64
read_timeout_msec = 1


class RawHidSource(ReportSource):
    """
    Reads layer/bitmask packets from a QMK raw HID interface.

    The device is opened lazily on the first poll: a raw HID interface whose product
    name contains one of the filter terms wins, otherwise the first device that can be
    opened is used.
    """

    def __init__(self, product_filter=("planck", "qmk")):
        self.log = logging.getLogger('QmkViewer')
        self.product_filter = list(product_filter)
        self.lock = threading.Lock()
        self.interface = None
        self.product = None

    def __del__(self):
        self.close()

    def interface_acquired(self):
        return self.interface is not None

    def _open(self, info):
        try:
            device = hid.Device(path=info['path'])
        except hid.HIDException as e:
            self.log.debug("Could not open %s: %s", info.get('product_string'), e)
            return None
        self.product = info.get('product_string') or ""
        self.log.info("Opened raw HID device '%s'", self.product)
        return device

    def ensure_device(self):
        if self.interface is not None:
            return
        infos = hid.enumerate()
        raw_hid_first = sorted(infos, key=lambda i: not (i.get('usage_page') == usage_page and i.get('usage') == usage))

        for info in raw_hid_first:
            product = (info.get('product_string') or "").lower()
            if any(term in product for term in self.product_filter):
                self.interface = self._open(info)
                if self.interface:
                    return

        for info in raw_hid_first:
            self.interface = self._open(info)
            if self.interface:
                return

    def read(self, timeout=read_timeout_msec):
        if self.interface is None:
            return False, "No Interface"

        try:
            with self.lock:
                data = self.interface.read(report_length, timeout=timeout)
        except hid.HIDException as e:
            self.log.warning("Raw HID read failed, closing device: %s", e)
            self.close()
            return False, f"Exception: {e}"

        return True, data

    def poll(self):
        self.ensure_device()
        result, data = self.read()
        if not result or not data:
            return None
        return parse_rawhid_packet(data)

    def close(self):
        if getattr(self, "interface", None):
            self.interface.close()
            self.interface = None

    def get_name(self):
        return f"Raw HID ({self.product})" if self.product else "Raw HID"
