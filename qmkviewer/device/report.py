import time

from qmkviewer.util.bit_util import le_bytes_to_int

RAWHID_MIN_PACKET_LENGTH = 7
RAWHID_BITMASK_BYTES = 6
PLANCK_NUM_KEYS = 48


class Report:
    """ One input snapshot: timestamp, active layer and pressed-key bitmask """

    def __init__(self, epoch_ms, active_layer, pressed_bits):
        self.epoch_ms = epoch_ms
        self.active_layer = active_layer
        self.pressed_bits = pressed_bits

    @classmethod
    def now(cls, active_layer, pressed_bits):
        return cls(int(time.time() * 1000), active_layer, pressed_bits)

    def __eq__(self, other):
        if not isinstance(other, Report):
            return NotImplemented
        return (self.epoch_ms, self.active_layer, self.pressed_bits) == \
            (other.epoch_ms, other.active_layer, other.pressed_bits)

    def __repr__(self):
        return f"Report(layer={self.active_layer}, bits=0x{self.pressed_bits:012X}, t={self.epoch_ms})"


def parse_rawhid_packet(data):
    """
    Decode a raw HID packet: byte 0 is the active layer, bytes 1-6 a little-endian
    48 bit pressed-key mask. Packets shorter than 7 bytes give None.
    """
    if data is None or len(data) < RAWHID_MIN_PACKET_LENGTH:
        return None
    return Report.now(data[0], le_bytes_to_int(data[1:], RAWHID_BITMASK_BYTES))


def parse_console_line(line):
    """ Decode a QMK console line like 'L:2 B:A55A', None if either field is missing or invalid """
    layer = None
    bits = None
    for part in line.split():
        try:
            if part.startswith("L:"):
                layer = int(part[2:])
            elif part.startswith("B:"):
                bits = int(part[2:], 16)
        except ValueError:
            return None

    if layer is None or bits is None or not 0 <= layer <= 0xFF or bits < 0:
        return None
    return Report.now(layer, bits & 0xFFFF_FFFF_FFFF_FFFF)
