from qmkviewer.keymap.keycodes import TRANSPARENT_TOKENS
from qmkviewer.keymap.keymap_model import KeyboardLayout
from qmkviewer.keymap.wrappers import KeyKind, DUAL_ROLE_KINDS, display_parts
from qmkviewer.util.bit_util import PRESSED_MASK, pressed_indices

SHIFT_SPELLINGS = ("LSFT", "RSFT", "MOD_MASK_SHIFT", "LEFT_SHIFT", "RIGHT_SHIFT")


class KeyboardState:
    """
    Runtime view over a KeyboardLayout: the active layer and the pressed-key bitmask.

    Bit i of pressed_bits is the key at flattened index row * cols + col. The active
    layer is not wrapped or clamped here, lookups on a missing layer just come back empty.
    """

    def __init__(self, layout: KeyboardLayout):
        self.layout = layout
        self.active_layer = 0
        self.pressed_bits = 0

    def set_layer(self, layer):
        self.active_layer = layer

    def set_pressed_bits(self, bits):
        self.pressed_bits = bits & PRESSED_MASK

    def apply_report(self, report):
        self.set_layer(report.active_layer)
        self.set_pressed_bits(report.pressed_bits)

    def index_for(self, row, col):
        if 0 <= row < self.layout.rows and 0 <= col < self.layout.cols:
            return row * self.layout.cols + col
        return None

    def position_for(self, index):
        """ Inverse of index_for """
        if 0 <= index < self.layout.num_keys:
            return divmod(index, self.layout.cols)
        return None

    def is_pressed(self, row, col):
        idx = self.index_for(row, col)
        if idx is None:
            return False
        return (self.pressed_bits >> idx) & 1 == 1

    def pressed_indices(self):
        return pressed_indices(self.pressed_bits, self.layout.num_keys)

    def _cell(self, table, layer, row, col):
        idx = self.index_for(row, col)
        if idx is None or not 0 <= layer < len(table):
            return None
        cells = table[layer]
        return cells[idx] if idx < len(cells) else None

    def legend_at(self, layer, row, col):
        return self._cell(self.layout.legends, layer, row, col)

    def raw_legend_at(self, layer, row, col):
        return self._cell(self.layout.raw_legends, layer, row, col)

    def kind_at(self, layer, row, col):
        return self._cell(self.layout.kinds, layer, row, col)

    def is_transparent_key(self, layer, row, col):
        raw = self.raw_legend_at(layer, row, col)
        if raw is None:
            return False
        return raw.strip() in TRANSPARENT_TOKENS or self.legend_at(layer, row, col) == ""

    def is_function_key(self, layer, row, col):
        kind = self.kind_at(layer, row, col)
        return kind is not None and kind != KeyKind.PLAIN

    def is_dual_role_key(self, layer, row, col):
        return self.kind_at(layer, row, col) in DUAL_ROLE_KINDS

    def is_mt_key(self, layer, row, col):
        return self.kind_at(layer, row, col) == KeyKind.MOD_TAP

    def is_lt_key(self, layer, row, col):
        return self.kind_at(layer, row, col) == KeyKind.LAYER_TAP

    def is_osl_key(self, layer, row, col):
        return self.kind_at(layer, row, col) == KeyKind.ONE_SHOT

    def is_shift_pressed(self):
        """ True if a pressed key on the active layer references a shift modifier """
        layer = self.active_layer
        if not 0 <= layer < self.layout.num_layers:
            return False
        raw_layer = self.layout.raw_legends[layer]
        for idx in self.pressed_indices():
            if idx < len(raw_layer) and any(s in raw_layer[idx] for s in SHIFT_SPELLINGS):
                return True
        return False

    def display_parts(self, layer, row, col, shift_pressed=None):
        """ shift_pressed lets a caller rendering many keys look up the shift state once """
        raw = self.raw_legend_at(layer, row, col)
        if raw is None:
            return "", ""
        if shift_pressed is None:
            shift_pressed = self.is_shift_pressed()
        return display_parts(raw, shift_pressed)
