import unittest

from qmkviewer.util.bit_util import pressed_indices, bits_from_indices, toggle_bit, le_bytes_to_int, format_bits


class TestBitUtil(unittest.TestCase):

    def test_pressed_indices(self):
        self.assertEqual(pressed_indices(0b101), [0, 2])
        self.assertEqual(pressed_indices(0), [])
        self.assertEqual(pressed_indices(1 << 50, 48), [])
        self.assertEqual(pressed_indices(1 << 63), [63])

    def test_bits_from_indices(self):
        self.assertEqual(bits_from_indices([0, 2, 70, -1]), 0b101)
        self.assertEqual(pressed_indices(bits_from_indices([3, 17, 47])), [3, 17, 47])

    def test_toggle_bit(self):
        self.assertEqual(toggle_bit(0, 3), 8)
        self.assertEqual(toggle_bit(8, 3), 0)
        self.assertEqual(toggle_bit(5, 64), 5)
        self.assertEqual(toggle_bit(5, -1), 5)

    def test_le_bytes_to_int(self):
        self.assertEqual(le_bytes_to_int(bytes([0x5A, 0xA5, 0, 0, 0, 0]), 6), 0xA55A)
        self.assertEqual(le_bytes_to_int([0xFF] * 8, 6), 0xFFFF_FFFF_FFFF)
        self.assertEqual(le_bytes_to_int([0x01], 6), 1)

    def test_format_bits(self):
        self.assertEqual(format_bits(0xA55A), "0x00000000A55A")
        self.assertEqual(format_bits(0), "0x000000000000")


if __name__ == '__main__':
    unittest.main()
