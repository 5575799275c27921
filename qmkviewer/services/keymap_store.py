import logging
import os
import shutil

import yaml
from platformdirs import user_config_dir

from qmkviewer.keymap.errors import UnsupportedFormatError
from qmkviewer.keymap.keymap_config import SUPPORTED_EXTENSIONS

STORE_APP_NAME = "qmk_viewer"
RECORD_FILENAME = "keymap_store.yaml"
SAVED_KEYMAP_BASENAME = "last_keymap"


class KeymapStore:
    """
    Remembers the last keymap that was loaded successfully.

    The file is copied byte for byte to last_keymap.<ext> in the config directory
    and a small yaml record keeps the path it originally came from.
    """

    def __init__(self, directory=None):
        self.log = logging.getLogger('QmkViewer')
        self.directory = directory or user_config_dir(STORE_APP_NAME)
        self.record_path = os.path.join(self.directory, RECORD_FILENAME)
        os.makedirs(self.directory, exist_ok=True)

    def saved_filenames(self):
        """ last_keymap.json, last_keymap.c, last_keymap.h in order of preference """
        return [f"{SAVED_KEYMAP_BASENAME}{ext}" for ext in SUPPORTED_EXTENSIONS]

    def load_record(self):
        if not os.path.exists(self.record_path):
            return {"last_keymap_path": None}
        try:
            with open(self.record_path, encoding='utf-8') as f:
                record = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.log.warning("Ignoring broken keymap record %s: %s", self.record_path, e)
            record = {}
        if not isinstance(record, dict):
            self.log.warning("Ignoring keymap record %s, expected a mapping", self.record_path)
            record = {}
        record.setdefault("last_keymap_path", None)
        return record

    def save_record(self, record):
        with open(self.record_path, "w", encoding='utf-8') as f:
            yaml.safe_dump(record, f)

    def save_keymap_file(self, source_path):
        """ Copy source_path into the store and remember where it came from, returns the stored path """
        ext = os.path.splitext(str(source_path))[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(source_path)

        # only one remembered keymap at a time
        for filename in self.saved_filenames():
            path = os.path.join(self.directory, filename)
            if os.path.exists(path) and filename != f"{SAVED_KEYMAP_BASENAME}{ext}":
                os.remove(path)

        saved_path = os.path.join(self.directory, f"{SAVED_KEYMAP_BASENAME}{ext}")
        if os.path.abspath(str(source_path)) != os.path.abspath(saved_path):
            shutil.copyfile(source_path, saved_path)

            record = self.load_record()
            record["last_keymap_path"] = os.path.abspath(str(source_path))
            self.save_record(record)
        self.log.info("Remembered keymap %s as %s", source_path, saved_path)
        return saved_path

    def clear_saved_keymap(self):
        for filename in self.saved_filenames():
            path = os.path.join(self.directory, filename)
            if os.path.exists(path):
                os.remove(path)

        record = self.load_record()
        record["last_keymap_path"] = None
        self.save_record(record)
        self.log.info("Cleared remembered keymap")

    def get_saved_keymap_path(self):
        for filename in self.saved_filenames():
            path = os.path.join(self.directory, filename)
            if os.path.exists(path):
                return path
        return None

    def get_original_path(self):
        return self.load_record().get("last_keymap_path")
