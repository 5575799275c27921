import math

from qmkviewer.keymap.keycodes import translate_token
from qmkviewer.keymap.wrappers import classify

TRANSPARENT_TOKEN = "_______"

PLANCK_ROWS = 4
PLANCK_COLS = 12
PLANCK_LAYER_NAMES = ["Base", "Lower", "Raise", "Adjust"]

# (max key count, rows, cols), tuned to common physical board sizes
DIMENSION_BREAKPOINTS = [
    (20, 3, 7),
    (40, 4, 10),
    (50, 4, 12),
    (60, 5, 12),
    (70, 5, 14),
    (80, 6, 14),
    (90, 6, 15),
    (100, 6, 17),
    (110, 6, 18),
]


def estimate_dimensions(total_keys: int) -> tuple[int, int]:
    """Best-effort (rows, cols) for a key count, rows * cols is never below total_keys."""
    for max_keys, rows, cols in DIMENSION_BREAKPOINTS:
        if total_keys <= max_keys:
            return rows, cols

    cols = max(10, math.ceil(math.sqrt(total_keys)))
    rows = math.ceil(total_keys / cols)
    return rows, cols


def default_layer_names(count, names=None) -> list[str]:
    """Use the given names where present, fill up with 'Layer N' and cut off extras."""
    result = list(names[:count]) if names else []
    while len(result) < count:
        result.append(f"Layer {len(result)}")
    return result


class KeyboardLayout:
    """
    Grid of raw tokens and translated legends for every layer.

    The raw tokens are kept next to the legends since MT/LT/MO/OSL detection works
    on the raw text. The wrapper kind of every cell is computed once here.
    """

    def __init__(self, rows, cols, layer_names, raw_layers=None):
        self.rows = rows
        self.cols = cols
        total_keys = rows * cols

        if not raw_layers:
            raw_layers = [[] for _ in range(max(1, len(layer_names or [])))]
        self.layer_names = default_layer_names(len(raw_layers), layer_names)

        self.raw_legends = []
        self.legends = []
        self.kinds = []
        for layer in raw_layers:
            raw = list(layer) + [TRANSPARENT_TOKEN] * max(0, total_keys - len(layer))
            legends = [translate_token(token) for token in layer]
            legends += [""] * max(0, total_keys - len(legends))
            self.raw_legends.append(raw)
            self.legends.append(legends)
            self.kinds.append([classify(token) for token in raw])

    @classmethod
    def from_tokens(cls, layers, layer_names=None):
        """Infer the grid from the largest layer and pad every layer up to rows * cols."""
        max_keys = max((len(layer) for layer in layers), default=0)
        rows, cols = estimate_dimensions(max_keys)
        return cls(rows, cols, layer_names, layers)

    @classmethod
    def blank(cls, rows, cols, layer_names):
        return cls(rows, cols, layer_names)

    @classmethod
    def planck_default(cls):
        return cls.blank(PLANCK_ROWS, PLANCK_COLS, PLANCK_LAYER_NAMES)

    @property
    def num_keys(self):
        return self.rows * self.cols

    @property
    def num_layers(self):
        return len(self.raw_legends)

    def layer_name(self, layer):
        if 0 <= layer < len(self.layer_names):
            return self.layer_names[layer]
        return f"Layer {layer}"
