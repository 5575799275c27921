"""
Translation of QMK keycode tokens into the short labels shown on the key caps.

Every table is a plain dict built once at import time. translate_token() walks
them in a fixed priority order and falls back to the unchanged token, so it
never fails.
"""

TRANSPARENT_TOKENS = frozenset(["TRNS", "NO", "_______", "XXXXXXX", "KC_TRNS", "KC_TRANSPARENT", "KC_NO"])

# KC_P<x> keypad aliases that do not simply drop the 'K' of KC_KP_<x>
KEYPAD_ALIASES = {
    "DOT": "DOT",
    "CMM": "COMMA",
    "PLS": "PLUS",
    "MNS": "MINUS",
    "AST": "ASTERISK",
    "SLS": "SLASH",
    "ENT": "ENTER",
    "EQL": "EQUAL",
}

LOCALE_LABELS = {
    "KF_EGRV": "è",
    "KF_EACU": "é",
    "KF_ECRC": "ê",
    "KF_AGRV": "à",
    "KF_UGRV": "ù",
    "KF_UCRC": "û",
    "KF_ICRC": "î",
    "KF_ACRC": "â",
    "KF_CCED": "ç",
    "KF_DIAE": "¨",
    "KF_AE": "æ",
    "KF_OE": "œ",
    "KF_OCRC": "ô",
    "KF_LAQT": "«",
    "KF_RAQT": "»",
    "KF_LDQT": "“",
    "KF_RDQT": "”",
    "KF_MDOT": "·",
    "KF_BDOT": "•",
    "KF_DEG": "°",
    "KF_EURO": "€",
    "KF_UNDS": "_",
    "KF_SUP2": "²",
    "KF_IQES": "¿",
    "KF_LARW": "Left",
    "KF_RARW": "Right",
    "KF_MICR": "μ",
    "KF_PSMS": "±",
    "KF_CROS": "×",
    "KF_QUOT": "'",
    "KF_SLCT": "SelAll",
    "KF_CUT": "Cut",
    "KF_COPY": "Copy",
    "KF_PSTE": "Paste",
    "KF_SAVE": "Save",
    "KF_UNDO": "Undo",
    "KF_REDO": "Redo",
    # the same keys as they appear once the KF_ prefix has been dropped
    "OCRC": "ô",
    "ICRC": "î",
    "BDOT": "•",
    "IQES": "¿",
    "LARW": "Left",
    "RARW": "Right",
    "MDOT": "·",
    "DEG": "°",
    "UCRC": "û",
    "EURO": "€",
    "ACRC": "â",
    "LDQT": "“",
    "RDQT": "”",
    "MICR": "μ",
    "PSMS": "±",
    "CROS": "×",
    "EGRV": "è",
    "EACU": "é",
    "ECRC": "ê",
    "E": "e",
    "AGRV": "à",
    "UGRV": "ù",
    "CCED": "ç",
    "DIAE": "¨",
    "AE": "æ",
    "OE": "œ",
}

PUNCTUATION_LABELS = {}
for _name, _label in [
    ("LPRN", "("), ("RPRN", ")"), ("LBRC", "["), ("RBRC", "]"), ("LCBR", "{"), ("RCBR", "}"),
    ("LABK", "<"), ("RABK", ">"), ("SLSH", "/"), ("BSLS", "\\"), ("PIPE", "|"), ("COLN", ":"),
    ("SCLN", ";"), ("DQUO", "\""), ("GRV", "`"), ("TILD", "~"), ("AT", "@"), ("HASH", "#"),
    ("DLR", "$"), ("PERC", "%"), ("AMPR", "&"), ("ASTR", "*"), ("EQL", "="), ("PLUS", "+"),
    ("CIRC", "^"),
]:
    PUNCTUATION_LABELS[f"KF_{_name}"] = _label
    PUNCTUATION_LABELS[_name] = _label
PUNCTUATION_LABELS.update({
    "COMM": ",",
    "DOT": ".",
    "QUOT": "'",
    "MINS": "-",
    "UNDS": "_",
})

NAVIGATION_LABELS = {
    "NAV_LCK": "NAV",
    "SW_GRV": "`",
    "SW_TAB": "Tab",
    "CW_TOGG": "Caps",
    "OS_LALT": "Alt",
    "OS_LGUI": "gui",
    "OS_LSFT": "Shift",
    "OS_LCTL": "Ctrl",
    "OS_RCTL": "Ctrl",
    "OS_RSFT": "Shift",
    "OS_RGUI": "gui",
    "KC_PSCR": "PrtSc",
    "KC_APP": "Menu",
    "LEFT": "Left",
    "RGHT": "Right",
    "RIGHT": "Right",
    "UP": "Up",
    "DOWN": "Down",
    "HOME": "Home",
    "END": "End",
    "PGUP": "PgUp",
    "PG_U": "PgUp",
    "PGUPD": "PgUp",
    "PGDN": "PgDn",
    "PG_D": "PgDn",
    "BSPC": "Bksp",
    "DEL": "Del",
    "ENT": "Enter",
    "ENTER": "Enter",
    "ESC": "Esc",
    "TAB": "Tab",
    "SPC": "Space",
    "SPACE": "Space",
}

MODIFIER_LABELS = {
    "LSFT": "Shift",
    "RSFT": "Shift",
    "SFT": "Shift",
    "SHIFT": "Shift",
    "LCTL": "Ctrl",
    "RCTL": "Ctrl",
    "CTL": "Ctrl",
    "CTRL": "Ctrl",
    "LCTRL": "Ctrl",
    "RCTRL": "Ctrl",
    "LALT": "Alt",
    "RALT": "Alt",
    "ALT": "Alt",
    "LALT_T": "Alt",
    "LGUI": "gui",
    "RGUI": "gui",
    "GUI": "gui",
    "CMD": "gui",
    "WIN": "gui",
    "CAPS": "Caps",
    "CAPSLOCK": "Caps",
}

KC_LABELS = {
    "KC_SPC": "Space",
    "KC_SPACE": "Space",
    "KC_ENT": "Enter",
    "KC_ENTER": "Enter",
    "KC_ESC": "Esc",
    "KC_ESCAPE": "Esc",
    "KC_TAB": "Tab",
    "KC_BSPC": "Bksp",
    "KC_BACKSPACE": "Bksp",
    "KC_DEL": "Del",
    "KC_DELETE": "Del",

    "KC_LEFT": "Left",
    "KC_RGHT": "Right",
    "KC_RIGHT": "Right",
    "KC_UP": "Up",
    "KC_DOWN": "Down",
    "KC_HOME": "Home",
    "KC_END": "End",
    "KC_PGUP": "PgUp",
    "KC_PG_U": "PgUp",
    "KC_PAGE_UP": "PgUp",
    "KC_PGDN": "PgDn",
    "KC_PG_D": "PgDn",
    "KC_PAGE_DOWN": "PgDn",

    "KC_LSFT": "Shift",
    "KC_RSFT": "Shift",
    "KC_LEFT_SHIFT": "Shift",
    "KC_RIGHT_SHIFT": "Shift",
    "KC_LCTL": "Ctrl",
    "KC_RCTL": "Ctrl",
    "KC_LEFT_CTRL": "Ctrl",
    "KC_RIGHT_CTRL": "Ctrl",
    "KC_LALT": "Alt",
    "KC_RALT": "Alt",
    "KC_LEFT_ALT": "Alt",
    "KC_RIGHT_ALT": "Alt",
    "KC_LGUI": "gui",
    "KC_RGUI": "gui",
    "KC_LEFT_GUI": "gui",
    "KC_RIGHT_GUI": "gui",
    "KC_CAPS": "Caps",
    "KC_CAPSLOCK": "Caps",
    "KC_CAPS_LOCK": "Caps",

    "KC_LPRN": "(",
    "KC_RPRN": ")",
    "KC_LBRC": "[",
    "KC_RBRC": "]",
    "KC_LCBR": "{",
    "KC_RCBR": "}",
    "KC_LABK": "<",
    "KC_RABK": ">",
    "KC_COMM": ",",
    "KC_DOT": ".",
    "KC_SLSH": "/",
    "KC_BSLS": "\\",
    "KC_PIPE": "|",
    "KC_COLN": ":",
    "KC_SCLN": ";",
    "KC_QUOT": "'",
    "KC_DQUO": "\"",
    "KC_GRV": "`",
    "KC_TILD": "~",
    "KC_AT": "@",
    "KC_HASH": "#",
    "KC_DLR": "$",
    "KC_PERC": "%",
    "KC_AMPR": "&",
    "KC_ASTR": "*",
    "KC_MINS": "-",
    "KC_UNDS": "_",
    "KC_EQL": "=",
    "KC_PLUS": "+",
    "KC_EXLM": "!",
    "KC_CIRC": "^",

    "KC_PSCR": "PrtSc",
    "KC_APP": "Menu",

    "KC_KP_DOT": ".",
    "KC_KP_POINT": ".",
    "KC_KP_PERIOD": ".",
    "KC_KP_COMMA": ",",
    "KC_KP_PLUS": "+",
    "KC_KP_MINUS": "-",
    "KC_KP_SUBTRACT": "-",
    "KC_KP_ASTERISK": "*",
    "KC_KP_MULTIPLY": "*",
    "KC_KP_SLASH": "/",
    "KC_KP_DIVIDE": "/",
    "KC_KP_ENTER": "Enter",
    "KC_KP_EQUAL": "=",
    "KC_KP_EQUAL_AS400": "=",
    "KC_NUMLOCK": "Num",
    "KC_NUM": "Num",
    "KC_NUM_LOCK": "Num",
    "KC_LOCKING_NUM": "Num",
}
for _digit in range(10):
    KC_LABELS[f"KC_{_digit}"] = str(_digit)
    KC_LABELS[f"KC_KP_{_digit}"] = str(_digit)
for _fn in range(1, 25):
    KC_LABELS[f"KC_F{_fn}"] = f"F{_fn}"

ICON_LABELS = {
    "UNDO": "↺",
    "REDO": "↻",
    "COPY": "⎘",
    "CUT": "✂",
    "PSTE": "📋",
    "PASTE": "📋",
    "SAVE": "💾",
    "LAQT": "«",
    "RAQT": "»",
    "SUP2": "²",
    "SUP": "²",
    "ENT": "Enter",
    "ENTER": "Enter",
}

MODIFIER_GLYPHS = {}
for _names, _glyph in [
    (("MOD_LSFT", "MOD_RSFT", "MOD_MASK_SHIFT", "KC_LSFT", "KC_RSFT"), "Shift"),
    (("MOD_LCTL", "MOD_RCTL", "MOD_MASK_CTRL", "KC_LCTL", "KC_RCTL"), "Ctrl"),
    (("MOD_LALT", "MOD_RALT", "MOD_MASK_ALT", "KC_LALT", "KC_RALT"), "Alt"),
    (("MOD_LGUI", "MOD_RGUI", "MOD_MASK_GUI", "KC_LGUI", "KC_RGUI"), "gui"),
]:
    for _name in _names:
        MODIFIER_GLYPHS[_name] = _glyph

LAYER_DISPLAY_NAMES = {
    "DEF": "Base",
    "BASE": "Base",
    "DEF2": "Base 2",
    "SPC": "Space",
    "SYM": "Symbols",
    "SYM_SFT": "Symbols Shift",
    "NAV": "Nav",
    "NAV_ALT": "Nav Alt",
    "NAV_GUI": "Nav gui",
    "NAV_CTL": "Nav Ctrl",
    "NUM": "Num",
    "MOS": "Mouse",
    "_QWERTY": "QWERTY",
}

# looked up in this order, first hit wins
LABEL_TABLES = (LOCALE_LABELS, PUNCTUATION_LABELS, NAVIGATION_LABELS, MODIFIER_LABELS)


def normalize_keypad_token(token: str) -> str:
    """Collapse malformed keypad spellings like 'KC_KP 0', 'KC_P 1' or 'KC_KP_ 2' into KC_KP_<x>."""
    compact = token.replace(" ", "")
    upper = compact.upper()
    if upper.startswith("KC_KP"):
        rest = upper[5:].lstrip("_")
        if rest:
            return f"KC_KP_{rest}"
    elif upper.startswith("KC_P"):
        rest = upper[4:].lstrip("_")
        if rest.isdigit():
            return f"KC_KP_{rest}"
        if rest in KEYPAD_ALIASES:
            return f"KC_KP_{KEYPAD_ALIASES[rest]}"
    return token


def is_transparent_token(token: str) -> bool:
    return token.strip() in TRANSPARENT_TOKENS


def translate_token(token: str) -> str:
    """Translate a QMK keycode token to a human-readable label, unknown tokens are returned trimmed."""
    trimmed = token.strip()
    t = normalize_keypad_token(trimmed)
    if t in TRANSPARENT_TOKENS:
        return ""

    for table in LABEL_TABLES:
        if t in table:
            return table[t]

    if t.startswith("KC_") and len(t) == 4 and t[3].isascii() and t[3].isalpha():
        return t[3].lower()

    if t in KC_LABELS:
        return KC_LABELS[t]

    if len(t) == 1 and t.isascii() and t.isalpha():
        return t.lower()

    if t in ICON_LABELS:
        return ICON_LABELS[t]

    return trimmed


def mod_to_glyph(modifier: str) -> str:
    """Short label for the modifier operand of MT(mod, key)."""
    m = modifier.strip()
    if m in MODIFIER_GLYPHS:
        return MODIFIER_GLYPHS[m]
    return translate_token(m)


def layer_display_name(token: str) -> str:
    t = token.strip()
    return LAYER_DISPLAY_NAMES.get(t, t)
