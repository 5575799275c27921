import re
from enum import Enum

from qmkviewer.keymap.errors import NoLayoutFoundError
from qmkviewer.util.text_util import split_top_level, find_closing_paren, brace_delta

LAYOUT_MARKER = "LAYOUT"
UNKNOWN_KEYBOARD = "unknown"

LAYER_INDEX_LINE = re.compile(r"^\s*\[[^\]]*\]\s*=")
MACRO_NAME = re.compile(r"\bLAYOUT\w*")


class ScanState(Enum):
    NORMAL = 0
    LINE_COMMENT = 1
    BLOCK_COMMENT = 2
    STRING = 3
    CHAR = 4


class ParsedKeymap:
    """ Result of parsing a firmware keymap source """

    def __init__(self, layers, layer_names, keyboard, layout):
        self.layers = layers
        self.layer_names = layer_names
        self.keyboard = keyboard
        self.layout = layout


def strip_c_comments(source: str) -> str:
    """
    Remove // and /* */ comments in a single left-to-right scan.

    String and character literals are copied through untouched, so a comment marker
    inside a literal survives. Newlines inside block comments are kept to preserve
    the line structure for the line based passes.
    """
    out = []
    state = ScanState.NORMAL
    i = 0
    n = len(source)

    while i < n:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < n else ""

        if state == ScanState.NORMAL:
            if ch == "/" and nxt == "/":
                state = ScanState.LINE_COMMENT
                i += 2
                continue
            if ch == "/" and nxt == "*":
                state = ScanState.BLOCK_COMMENT
                i += 2
                continue
            if ch == '"':
                state = ScanState.STRING
            elif ch == "'":
                state = ScanState.CHAR
            out.append(ch)
        elif state == ScanState.LINE_COMMENT:
            if ch == "\n":
                state = ScanState.NORMAL
                out.append(ch)
        elif state == ScanState.BLOCK_COMMENT:
            if ch == "*" and nxt == "/":
                state = ScanState.NORMAL
                i += 2
                continue
            if ch == "\n":
                out.append(ch)
        else:
            out.append(ch)
            if ch == "\\" and nxt:
                out.append(nxt)
                i += 2
                continue
            if (state == ScanState.STRING and ch == '"') or (state == ScanState.CHAR and ch == "'"):
                state = ScanState.NORMAL
        i += 1

    return "".join(out)


def split_items(inner: str) -> list[str]:
    """ Split a layout call interior into its raw tokens """
    return split_top_level(inner)


def find_macro_open_paren(source: str, marker_idx: int) -> int:
    """
    Return the index of the '(' that opens the macro starting at marker_idx, only
    identifier characters and whitespace may come in between. -1 if there is none.
    """
    j = marker_idx + len(LAYOUT_MARKER)
    while j < len(source) and (source[j].isalnum() or source[j] == "_"):
        j += 1
    while j < len(source) and source[j].isspace():
        j += 1
    if j < len(source) and source[j] == "(":
        return j
    return -1


def extract_layout_blocks(source: str) -> list[list[str]]:
    """ Capture every balanced LAYOUT...( ... ) invocation as one layer """
    layers = []
    i = source.find(LAYOUT_MARKER)

    while i != -1:
        open_idx = find_macro_open_paren(source, i)
        if open_idx == -1:
            i = source.find(LAYOUT_MARKER, i + len(LAYOUT_MARKER))
            continue

        close_idx = find_closing_paren(source, open_idx)
        if close_idx == -1:
            break

        items = split_items(source[open_idx + 1:close_idx])
        if items:
            layers.append(items)
        i = source.find(LAYOUT_MARKER, close_idx + 1)

    return layers


def extract_from_line(line: str) -> list[str]:
    """ Tokens of the first layout call on a single line, an unterminated call runs to the line end """
    start = line.find(LAYOUT_MARKER)
    if start == -1:
        return []
    open_idx = find_macro_open_paren(line, start)
    if open_idx == -1:
        return []
    close_idx = find_closing_paren(line, open_idx)
    inner = line[open_idx + 1:close_idx] if close_idx != -1 else line[open_idx + 1:]
    return split_items(inner)


def extract_keymap_arrays(source: str) -> list[list[str]]:
    """ Fallback: lines like '[N] = LAYOUT(...)' """
    layers = []
    for line in source.splitlines():
        if LAYER_INDEX_LINE.match(line) and LAYOUT_MARKER in line:
            items = extract_from_line(line)
            if items:
                layers.append(items)
    return layers


def extract_progmem_keymaps(source: str) -> list[list[str]]:
    """
    Fallback: layout calls inside a 'PROGMEM keymaps' declaration block.

    Brace depth is tracked over the block, balanced inner groups like '[0] = {KC_X},'
    do not end it. The scan stops at the closing brace of the declaration.
    """
    layers = []
    lines = source.splitlines()
    i = 0

    while i < len(lines):
        line = lines[i]
        if "PROGMEM" in line and "keymaps" in line:
            depth = brace_delta(line)
            opened = depth > 0
            i += 1
            while i < len(lines):
                line = lines[i].strip()
                if LAYOUT_MARKER in line:
                    items = extract_from_line(line)
                    if items:
                        layers.append(items)
                depth += brace_delta(line)
                opened = opened or depth > 0
                if opened and depth <= 0:
                    break
                i += 1
        i += 1

    return layers


def discover_layer_names(source: str, layer_count: int) -> list[str]:
    """ Names from lines starting with '[NAME]', padded with 'Layer N' or truncated to layer_count """
    names = []
    for line in source.splitlines():
        if len(names) >= layer_count:
            break
        line = line.strip()
        if line.startswith("["):
            end = line.find("]")
            if end != -1:
                names.append(line[1:end].strip())

    while len(names) < layer_count:
        names.append(f"Layer {len(names)}")
    return names


def guess_layout_macro(source: str):
    match = MACRO_NAME.search(source)
    return match.group(0) if match else None


def guess_keyboard(layout_macro) -> str:
    """ 'LAYOUT_planck_grid' -> 'planck_grid', a bare 'LAYOUT' tells nothing """
    if layout_macro and layout_macro.startswith(LAYOUT_MARKER + "_"):
        return layout_macro[len(LAYOUT_MARKER) + 1:]
    return UNKNOWN_KEYBOARD


def parse_keymap_source(source: str) -> ParsedKeymap:
    """
    Recover the per-layer token arrays from firmware keymap source text.

    Balanced LAYOUT(...) blocks are tried first, then '[N] = LAYOUT(...)' lines, then
    layout calls inside a PROGMEM keymaps block. Layers of irregular length are kept
    as they are. Raises NoLayoutFoundError when no strategy yields a layer.
    """
    stripped = strip_c_comments(source)

    layers = extract_layout_blocks(stripped)
    if not layers:
        layers = extract_keymap_arrays(stripped)
    if not layers:
        layers = extract_progmem_keymaps(stripped)
    if not layers:
        raise NoLayoutFoundError()

    layout_macro = guess_layout_macro(stripped)
    return ParsedKeymap(
        layers=layers,
        layer_names=discover_layer_names(stripped, len(layers)),
        keyboard=guess_keyboard(layout_macro),
        layout=layout_macro,
    )
