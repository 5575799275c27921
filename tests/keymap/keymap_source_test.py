import unittest

from qmkviewer.keymap.errors import NoLayoutFoundError, KeymapLoadError
from qmkviewer.keymap.keymap_source import parse_keymap_source, strip_c_comments, extract_layout_blocks, \
    discover_layer_names, guess_keyboard

PLANCK_KEYMAP = """\
#include QMK_KEYBOARD_H

enum planck_layers { _BASE, _LOWER };

const uint16_t PROGMEM keymaps[][MATRIX_ROWS][MATRIX_COLS] = {
    [_BASE] = LAYOUT_planck_grid(
        KC_Q, KC_W, // top row
        MT(MOD_LCTL, KC_SPC), _______
    ),
    /* lower layer,
       numbers only */
    [_LOWER] = LAYOUT_planck_grid(
        KC_1, KC_2, KC_3, KC_4
    )
};
"""

PROGMEM_ONLY = """\
const uint16_t PROGMEM keymaps[][4][12] = {
  LAYOUT(KC_A, KC_B,
  LAYOUT(KC_C)
};
"""

PROGMEM_NESTED_GROUPS = """\
const uint16_t PROGMEM keymaps[][1][2] = {
  [0] = {KC_X},
  LAYOUT(KC_A, KC_B
  "}",
  LAYOUT(KC_C
};
"""


class TestStripComments(unittest.TestCase):

    def test_line_comment(self):
        self.assertEqual(strip_c_comments("a // x\nb"), "a \nb")

    def test_block_comment_keeps_newlines(self):
        self.assertEqual(strip_c_comments("/* x\ny */z"), "\nz")

    def test_markers_in_literals_survive(self):
        self.assertEqual(strip_c_comments('"//not" x'), '"//not" x')
        self.assertEqual(strip_c_comments("'/' /* c */"), "'/' ")


class TestParseKeymapSource(unittest.TestCase):

    def test_single_layout(self):
        parsed = parse_keymap_source("LAYOUT(KC_A, MO(1), LT(2,KC_TAB))")
        self.assertEqual(parsed.layers, [["KC_A", "MO(1)", "LT(2,KC_TAB)"]])
        self.assertEqual(parsed.layer_names, ["Layer 0"])
        self.assertEqual(parsed.keyboard, "unknown")

    def test_full_keymap(self):
        parsed = parse_keymap_source(PLANCK_KEYMAP)
        self.assertEqual(parsed.layers, [
            ["KC_Q", "KC_W", "MT(MOD_LCTL, KC_SPC)", "_______"],
            ["KC_1", "KC_2", "KC_3", "KC_4"],
        ])
        self.assertEqual(parsed.layer_names, ["_BASE", "_LOWER"])
        self.assertEqual(parsed.layout, "LAYOUT_planck_grid")
        self.assertEqual(parsed.keyboard, "planck_grid")

    def test_commented_out_layout_is_ignored(self):
        with self.assertRaises(NoLayoutFoundError):
            parse_keymap_source("// LAYOUT(KC_A)\n/* LAYOUT(KC_B) */")

    def test_no_layout(self):
        with self.assertRaises(KeymapLoadError) as ctx:
            parse_keymap_source("int main(void) { return 0; }")
        self.assertIn("no LAYOUT", str(ctx.exception))

    def test_marker_without_call(self):
        parsed = parse_keymap_source("#define MY_LAYOUT_NAME x\nLAYOUT(KC_B)")
        self.assertEqual(parsed.layers, [["KC_B"]])

    def test_literal_contents_do_not_split(self):
        self.assertEqual(extract_layout_blocks('LAYOUT(KC_A, ",)", KC_B)'), [["KC_A", '",)"', "KC_B"]])

    def test_unbalanced_block_falls_back_to_index_lines(self):
        parsed = parse_keymap_source("[0] = LAYOUT(KC_A, KC_B")
        self.assertEqual(parsed.layers, [["KC_A", "KC_B"]])
        self.assertEqual(parsed.layer_names, ["0"])

    def test_progmem_fallback(self):
        parsed = parse_keymap_source(PROGMEM_ONLY)
        self.assertEqual(parsed.layers, [["KC_A", "KC_B"], ["KC_C"]])
        self.assertEqual(parsed.layer_names, ["Layer 0", "Layer 1"])

    def test_progmem_block_spans_inner_brace_groups(self):
        parsed = parse_keymap_source(PROGMEM_NESTED_GROUPS)
        self.assertEqual(parsed.layers, [["KC_A", "KC_B"], ["KC_C"]])
        self.assertEqual(parsed.layer_names, ["0", "Layer 1"])

    def test_irregular_layers_are_kept(self):
        parsed = parse_keymap_source("LAYOUT(KC_A)\nLAYOUT(KC_B, KC_C, KC_D)")
        self.assertEqual([len(layer) for layer in parsed.layers], [1, 3])

    def test_trailing_comma(self):
        self.assertEqual(parse_keymap_source("LAYOUT(KC_A, KC_B,)").layers, [["KC_A", "KC_B"]])

    def test_parsing_is_repeatable(self):
        first = parse_keymap_source(PLANCK_KEYMAP)
        second = parse_keymap_source(PLANCK_KEYMAP)
        self.assertEqual(first.layers, second.layers)
        self.assertEqual(first.layer_names, second.layer_names)


class TestLayerNamesAndKeyboard(unittest.TestCase):

    def test_names_are_padded_and_truncated(self):
        source = "[_A] = x\n[_B] = y\n[_C] = z\n"
        self.assertEqual(discover_layer_names(source, 2), ["_A", "_B"])
        self.assertEqual(discover_layer_names(source, 4), ["_A", "_B", "_C", "Layer 3"])

    def test_guess_keyboard(self):
        self.assertEqual(guess_keyboard("LAYOUT_ortho_4x12"), "ortho_4x12")
        self.assertEqual(guess_keyboard("LAYOUT"), "unknown")
        self.assertEqual(guess_keyboard(None), "unknown")


if __name__ == '__main__':
    unittest.main()
