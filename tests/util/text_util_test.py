import unittest

from qmkviewer.util.text_util import split_top_level, find_closing_paren, brace_delta


class TestSplitTopLevel(unittest.TestCase):

    def test_nested_calls(self):
        self.assertEqual(split_top_level("a, b(c, d), e"), ["a", "b(c, d)", "e"])
        self.assertEqual(split_top_level("MT(MOD_LSFT, LCTL(KC_A)), KC_B"), ["MT(MOD_LSFT, LCTL(KC_A))", "KC_B"])

    def test_empty_pieces_are_dropped(self):
        self.assertEqual(split_top_level("a, b,"), ["a", "b"])
        self.assertEqual(split_top_level(" , ,"), [])
        self.assertEqual(split_top_level(""), [])

    def test_literals(self):
        self.assertEqual(split_top_level("'a,b', c"), ["'a,b'", "c"])
        self.assertEqual(split_top_level('"(", KC_A'), ['"("', "KC_A"])
        self.assertEqual(split_top_level("'\\'', KC_A"), ["'\\''", "KC_A"])

    def test_other_separator(self):
        self.assertEqual(split_top_level("a; f(b; c)", ";"), ["a", "f(b; c)"])


class TestFindClosingParen(unittest.TestCase):

    def test_balanced(self):
        self.assertEqual(find_closing_paren("f(a(b)c)d", 1), 7)

    def test_unbalanced(self):
        self.assertEqual(find_closing_paren("f(a", 1), -1)

    def test_parens_in_literals(self):
        self.assertEqual(find_closing_paren('f(")")', 1), 5)
        self.assertEqual(find_closing_paren("f(')', x)", 1), 8)


class TestBraceDelta(unittest.TestCase):

    def test_counts_open_minus_close(self):
        self.assertEqual(brace_delta("keymaps[] = {"), 1)
        self.assertEqual(brace_delta("[0] = {KC_X},"), 0)
        self.assertEqual(brace_delta("};"), -1)

    def test_braces_in_literals_are_ignored(self):
        self.assertEqual(brace_delta("'}' }"), -1)
        self.assertEqual(brace_delta('"{" {'), 1)
        self.assertEqual(brace_delta('"\\"}" }'), -1)


if __name__ == '__main__':
    unittest.main()
