import importlib
import sys
import unittest
from unittest.mock import patch, MagicMock


class FakeHidException(Exception):
    pass


def hid_info(path, product):
    return {'path': path, 'product_string': product, 'usage_page': 0xFF60, 'usage': 0x61}


class TestRawHidSource(unittest.TestCase):

    def setUp(self):
        self.hid = MagicMock()
        self.hid.HIDException = FakeHidException
        self.modules = patch.dict(sys.modules, {"hid": self.hid})
        self.modules.start()
        sys.modules.pop("qmkviewer.device.hid_helper", None)
        self.hid_helper = importlib.import_module("qmkviewer.device.hid_helper")

    def tearDown(self):
        self.modules.stop()

    def test_prefers_matching_product(self):
        self.hid.enumerate.return_value = [hid_info(b"a", "Keychron K2"), hid_info(b"b", "Planck EZ")]
        device = MagicMock()
        device.read.return_value = bytes([1, 0x01, 0, 0, 0, 0, 0]) + bytes(57)
        self.hid.Device.return_value = device

        source = self.hid_helper.RawHidSource(["planck", "qmk"])
        report = source.poll()
        self.hid.Device.assert_called_once_with(path=b"b")
        self.assertEqual((report.active_layer, report.pressed_bits), (1, 1))
        self.assertEqual(source.get_name(), "Raw HID (Planck EZ)")

    def test_falls_back_to_first_openable_device(self):
        self.hid.enumerate.return_value = [hid_info(b"a", "Busy Board"), hid_info(b"b", "Other Board")]
        device = MagicMock()
        device.read.return_value = b""
        self.hid.Device.side_effect = [FakeHidException("busy"), device]

        source = self.hid_helper.RawHidSource(["planck"])
        self.assertIsNone(source.poll())
        self.assertTrue(source.interface_acquired())
        self.assertEqual(source.product, "Other Board")

    def test_read_error_drops_device(self):
        self.hid.enumerate.return_value = [hid_info(b"a", "qmk board")]
        device = MagicMock()
        device.read.side_effect = FakeHidException("gone")
        self.hid.Device.return_value = device

        source = self.hid_helper.RawHidSource(["qmk"])
        with self.assertLogs('QmkViewer', level='WARNING'):
            self.assertIsNone(source.poll())
        self.assertFalse(source.interface_acquired())
        device.close.assert_called_once()

    def test_no_device(self):
        self.hid.enumerate.return_value = []
        source = self.hid_helper.RawHidSource()
        self.assertIsNone(source.poll())
        self.assertEqual(source.get_name(), "Raw HID")


if __name__ == '__main__':
    unittest.main()
