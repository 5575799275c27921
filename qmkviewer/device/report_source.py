import logging

from qmkviewer.device.report import Report, PLANCK_NUM_KEYS
from qmkviewer.util.bit_util import bits_from_indices

MOCK_POLLS_PER_LAYER = 120
MOCK_NUM_LAYERS = 4


class ReportSource:
    """ Something that can be polled for the next Report """

    def poll(self):
        """ Return the next Report or None if nothing new is available """
        raise NotImplementedError

    def close(self):
        pass

    def get_name(self):
        return type(self).__name__


class MockReportSource(ReportSource):
    """
    Simulated keyboard. When animated it walks a single pressed key over the
    grid and switches the layer every MOCK_POLLS_PER_LAYER polls, otherwise it stays quiet.
    """

    def __init__(self, animate=True, num_keys=PLANCK_NUM_KEYS, num_layers=MOCK_NUM_LAYERS):
        self.animate = animate
        self.num_keys = max(1, min(num_keys, 64))
        self.num_layers = max(1, num_layers)
        self.counter = 0

    def poll(self):
        if not self.animate:
            return None
        self.counter += 1
        layer = (self.counter // MOCK_POLLS_PER_LAYER) % self.num_layers
        idx = self.counter % self.num_keys
        return Report.now(layer, bits_from_indices([idx]))

    def get_name(self):
        return "Mock"


def create_report_source(kind, settings=None, port=None):
    """
    Build the report source named by kind ('mock', 'rawhid' or 'console').

    Transport libraries are only imported for the source that needs them.
    """
    log = logging.getLogger('QmkViewer')
    get = settings.get if settings else (lambda name: None)

    match kind:
        case "mock":
            return MockReportSource(animate=bool(get("input_mock_animate")))
        case "rawhid":
            from qmkviewer.device.hid_helper import RawHidSource
            product_filter = get("rawhid_product_filter") or "planck,qmk"
            return RawHidSource([f.strip().lower() for f in product_filter.split(",") if f.strip()])
        case "console":
            from qmkviewer.device.serial_helper import ConsoleReportSource
            return ConsoleReportSource(port or get("input_serial_port") or None,
                                       get("input_serial_baudrate") or 115200)
        case _:
            log.warning("Unknown input source '%s', falling back to mock input.", kind)
            return MockReportSource(animate=False)
