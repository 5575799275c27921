import json
import logging
import os

from qmkviewer.keymap.errors import KeymapDecodeError, KeymapReadError, UnsupportedFormatError
from qmkviewer.keymap.keymap_model import KeyboardLayout
from qmkviewer.keymap.keymap_source import parse_keymap_source, UNKNOWN_KEYBOARD

JSON_EXTENSIONS = (".json",)
SOURCE_EXTENSIONS = (".c", ".h")
SUPPORTED_EXTENSIONS = JSON_EXTENSIONS + SOURCE_EXTENSIONS

log = logging.getLogger('QmkViewer')


def _is_string_list(value):
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


class KeymapConfig:
    """
    A keymap as described by the structured (QMK json) format.

    layers holds one list of raw tokens per layer, layer_names is optional and
    aligned 1:1 with layers when present. layout is only a hint.
    """

    def __init__(self, keyboard, keymap, layers, layout=None, layer_names=None):
        self.keyboard = keyboard
        self.keymap = keymap
        self.layers = layers
        self.layout = layout
        self.layer_names = layer_names

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise KeymapDecodeError("Keymap json must be an object")

        layers = data.get("layers")
        if not isinstance(layers, list) or not all(_is_string_list(layer) for layer in layers):
            raise KeymapDecodeError("'layers' must be a list of lists of keycode strings")

        layer_names = data.get("layer_names")
        if layer_names is not None and not _is_string_list(layer_names):
            raise KeymapDecodeError("'layer_names' must be a list of strings")

        for field in ("keyboard", "keymap", "layout"):
            if data.get(field) is not None and not isinstance(data[field], str):
                raise KeymapDecodeError(f"'{field}' must be a string")

        return cls(keyboard=data.get("keyboard") or UNKNOWN_KEYBOARD,
                   keymap=data.get("keymap") or "",
                   layers=layers,
                   layout=data.get("layout"),
                   layer_names=layer_names)

    @classmethod
    def from_json(cls, text):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise KeymapDecodeError(f"Failed to parse json keymap: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_source(cls, text, keymap="keymap.c"):
        parsed = parse_keymap_source(text)
        return cls(keyboard=parsed.keyboard,
                   keymap=keymap,
                   layers=parsed.layers,
                   layout=parsed.layout,
                   layer_names=parsed.layer_names)

    def to_keyboard_layout(self):
        return KeyboardLayout.from_tokens(self.layers, self.layer_names)


def load_keymap_file(path) -> KeymapConfig:
    """
    Read a keymap file and decode it according to its extension.

    Raises UnsupportedFormatError, KeymapReadError, KeymapDecodeError or
    NoLayoutFoundError, all of them KeymapLoadError.
    """
    ext = os.path.splitext(str(path))[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(path)

    try:
        with open(path, encoding='utf-8', errors='replace') as f:
            content = f.read()
    except OSError as e:
        raise KeymapReadError(path, e) from e

    if ext in JSON_EXTENSIONS:
        config = KeymapConfig.from_json(content)
    else:
        config = KeymapConfig.from_source(content, keymap=os.path.basename(str(path)))

    log.info("Loaded keymap '%s' with %d layers from %s", config.keymap, len(config.layers), path)
    return config
