import unittest

from qmkviewer.keymap.wrappers import KeyKind, parse_wrapper, classify, display_parts, ONE_SHOT_MARKER


class TestParseWrapper(unittest.TestCase):

    def test_plain_token(self):
        self.assertEqual(parse_wrapper("KC_A"), (KeyKind.PLAIN, []))

    def test_mod_tap(self):
        self.assertEqual(parse_wrapper("MT(MOD_LCTL, KC_SPC)"), (KeyKind.MOD_TAP, ["MOD_LCTL", "KC_SPC"]))
        self.assertEqual(classify("KC_MT(MOD_LALT, KC_B)"), KeyKind.MOD_TAP)

    def test_nested_arguments_stay_together(self):
        kind, args = parse_wrapper("MT(MOD_LSFT, LCTL(KC_A))")
        self.assertEqual(kind, KeyKind.MOD_TAP)
        self.assertEqual(args, ["MOD_LSFT", "LCTL(KC_A)"])

    def test_missing_closing_paren(self):
        self.assertEqual(parse_wrapper("LT(2, KC_TAB"), (KeyKind.LAYER_TAP, ["2", "KC_TAB"]))

    def test_layer_wrappers(self):
        self.assertEqual(classify("MO(1)"), KeyKind.MOMENTARY)
        self.assertEqual(classify("OSL(NAV)"), KeyKind.ONE_SHOT)
        self.assertEqual(classify("TO(2)"), KeyKind.TOGGLE_LAYER)
        self.assertEqual(classify("DF(0)"), KeyKind.DEFAULT_LAYER)
        self.assertEqual(classify(" LT(SYM, KC_A) "), KeyKind.LAYER_TAP)


class TestDisplayParts(unittest.TestCase):

    def test_mod_tap(self):
        self.assertEqual(display_parts("MT(MOD_LCTL, KC_SPC)"), ("Space", "Ctrl"))

    def test_layer_tap(self):
        self.assertEqual(display_parts("LT(SYM, KC_A)"), ("a", "Symbols"))
        self.assertEqual(display_parts("LT(2,KC_TAB)"), ("Tab", "2"))

    def test_shift_applies_to_letters_only(self):
        self.assertEqual(display_parts("KC_A", shift_pressed=True), ("A", ""))
        self.assertEqual(display_parts("LT(SYM, KC_A)", shift_pressed=True), ("A", "Symbols"))
        self.assertEqual(display_parts("KC_SPC", shift_pressed=True), ("Space", ""))
        self.assertEqual(display_parts("KC_1", shift_pressed=True), ("1", ""))

    def test_momentary(self):
        self.assertEqual(display_parts("MO(1)"), ("1", "MO"))
        self.assertEqual(display_parts("MO(NAV)"), ("Nav", "MO"))

    def test_one_shot_has_no_sub_legend(self):
        self.assertEqual(display_parts("OSL(NAV)"), (ONE_SHOT_MARKER, ""))

    def test_to_and_df(self):
        self.assertEqual(display_parts("TO(2)"), ("2", "TO"))
        self.assertEqual(display_parts("DF(BASE)"), ("Base", "DF"))
        self.assertEqual(display_parts("TO(_QWERTY)"), ("QWERTY", "TO"))

    def test_transparent(self):
        self.assertEqual(display_parts("_______"), ("", ""))
        self.assertEqual(display_parts("KC_TRNS"), ("", ""))

    def test_plain(self):
        self.assertEqual(display_parts("KC_ENT"), ("Enter", ""))
        self.assertEqual(display_parts("MY_MACRO"), ("MY_MACRO", ""))


if __name__ == '__main__':
    unittest.main()
