import time
import unittest

from qmkviewer.device.report import Report, parse_rawhid_packet, parse_console_line


class TestRawHidPacket(unittest.TestCase):

    def test_layer_and_bitmask(self):
        report = parse_rawhid_packet([2, 0x5A, 0xA5, 0, 0, 0, 0])
        self.assertEqual(report.active_layer, 2)
        self.assertEqual(report.pressed_bits, 0xA55A)

    def test_full_report_ignores_trailing_bytes(self):
        data = bytes([1, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF]) + bytes([0xFF] * 57)
        report = parse_rawhid_packet(data)
        self.assertEqual(report.active_layer, 1)
        self.assertEqual(report.pressed_bits, 0xFFFF_FFFF_FFFF)

    def test_short_packet(self):
        self.assertIsNone(parse_rawhid_packet([2, 0x5A, 0xA5, 0, 0, 0]))
        self.assertIsNone(parse_rawhid_packet(b""))
        self.assertIsNone(parse_rawhid_packet(None))

    def test_timestamp(self):
        before = int(time.time() * 1000)
        report = parse_rawhid_packet([0] * 7)
        self.assertGreaterEqual(report.epoch_ms, before)


class TestConsoleLine(unittest.TestCase):

    def test_valid_line(self):
        report = parse_console_line("L:2 B:A55A")
        self.assertEqual(report.active_layer, 2)
        self.assertEqual(report.pressed_bits, 0xA55A)

    def test_field_order_and_extra_text(self):
        report = parse_console_line("kb: B:ff L:1")
        self.assertEqual((report.active_layer, report.pressed_bits), (1, 0xFF))

    def test_invalid_lines(self):
        for line in ["", "hello", "L:1", "B:FF", "L:x B:1", "L:1 B:zz", "L:300 B:1", "L:-1 B:1"]:
            self.assertIsNone(parse_console_line(line), line)


class TestReport(unittest.TestCase):

    def test_equality(self):
        self.assertEqual(Report(5, 1, 3), Report(5, 1, 3))
        self.assertNotEqual(Report(5, 1, 3), Report(5, 1, 4))
        self.assertIn("0x000000000003", repr(Report(5, 1, 3)))


if __name__ == '__main__':
    unittest.main()
