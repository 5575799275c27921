from enum import Enum

from qmkviewer.keymap.keycodes import translate_token, mod_to_glyph, layer_display_name, is_transparent_token
from qmkviewer.util.text_util import split_top_level

ONE_SHOT_MARKER = "★"


class KeyKind(Enum):
    PLAIN = 0
    MOD_TAP = 1
    LAYER_TAP = 2
    MOMENTARY = 3
    ONE_SHOT = 4
    TOGGLE_LAYER = 5
    DEFAULT_LAYER = 6


WRAPPER_PREFIXES = (
    ("KC_MT(", KeyKind.MOD_TAP),
    ("MT(", KeyKind.MOD_TAP),
    ("LT(", KeyKind.LAYER_TAP),
    ("MO(", KeyKind.MOMENTARY),
    ("OSL(", KeyKind.ONE_SHOT),
    ("TO(", KeyKind.TOGGLE_LAYER),
    ("DF(", KeyKind.DEFAULT_LAYER),
)

DUAL_ROLE_KINDS = frozenset([KeyKind.MOD_TAP, KeyKind.LAYER_TAP])


def split_args(inner: str) -> list[str]:
    """Split the interior of a wrapper call, commas nested in inner calls or quotes do not split."""
    return split_top_level(inner)


def parse_wrapper(token: str) -> tuple[KeyKind, list[str]]:
    """
    Decompose a raw token into its wrapper kind and argument list.

    Plain keycodes yield (KeyKind.PLAIN, []). For wrappers the arguments are the
    depth-zero, quote-aware comma separated parts of the parenthesized interior.
    A missing closing parenthesis is tolerated.
    """
    t = token.strip()
    for prefix, kind in WRAPPER_PREFIXES:
        if t.startswith(prefix):
            inner = t[len(prefix):]
            if inner.endswith(")"):
                inner = inner[:-1]
            return kind, split_args(inner)
    return KeyKind.PLAIN, []


def classify(token: str) -> KeyKind:
    kind, _ = parse_wrapper(token)
    return kind


def shift_case(label: str, shift_pressed: bool) -> str:
    """Upper-case a single lower-case letter label while shift is held."""
    if shift_pressed and len(label) == 1 and label.isascii() and label.islower():
        return label.upper()
    return label


def display_parts(token: str, shift_pressed: bool = False) -> tuple[str, str]:
    """
    Compose the (main, sub) legend pair for one raw token.

    MT(mod, key)  -> key label, modifier glyph
    LT(layer, key) -> key label, layer display name
    MO(layer)     -> layer display name, "MO"
    OSL(layer)    -> one-shot marker, nothing
    TO/DF(layer)  -> layer display name, "TO"/"DF"
    The key operand of MT/LT is always the last argument, the modifier/layer the first.
    """
    if is_transparent_token(token):
        return "", ""

    kind, args = parse_wrapper(token)

    if kind in DUAL_ROLE_KINDS and len(args) >= 2:
        main = shift_case(translate_token(args[-1]), shift_pressed)
        if kind == KeyKind.MOD_TAP:
            return main, mod_to_glyph(args[0])
        return main, layer_display_name(args[0])

    if kind == KeyKind.MOMENTARY:
        return layer_display_name(args[0] if args else ""), "MO"

    if kind == KeyKind.ONE_SHOT:
        return ONE_SHOT_MARKER, ""

    if kind == KeyKind.TOGGLE_LAYER and args:
        return layer_display_name(args[0]), "TO"

    if kind == KeyKind.DEFAULT_LAYER and args:
        return layer_display_name(args[0]), "DF"

    return shift_case(translate_token(token), shift_pressed), ""
