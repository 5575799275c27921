import logging
import os

import yaml
from platformdirs import user_config_dir

APP_NAME = "QmkViewer"
INPUT_SOURCES = ("mock", "rawhid", "console")


class ViewerSettings:
    """ Stores program specific settings """
    def __init__(self, directory=None):
        self.collection = None
        self.log = logging.getLogger('QmkViewer')
        self.CONFIG_FILENAME = "settings.yaml"

        # Get the user-specific config directory
        directory = directory or user_config_dir(APP_NAME)
        self.path = os.path.join(directory, self.CONFIG_FILENAME)

        os.makedirs(directory, exist_ok=True)

        self.defaults = {
            "input_source": "mock",
            "input_poll_interval_msec": 8,
            "input_serial_port": "",
            "input_serial_baudrate": 115200,
            "input_mock_animate": False,
            "rawhid_product_filter": "planck,qmk",
            "render_refresh_msec": 16,
            "render_mt_hold_swap_msec": 500,
            "keymap_restore_last": True,
        }

        if os.path.exists(self.path):
            self.load()
        else:
            self.collection = dict(self.defaults)
        self.save()

        self.log.info("\nCurrent settings:\n====================================\n%s", yaml.dump(
            self.collection, default_flow_style=False))

    def get(self, name):
        return self.collection[name]

    def get_all(self):
        return self.collection

    def set_all(self, new_settings):
        self.collection = {k: v for k, v in new_settings.items() if k in self.defaults}
        for key, value in self.defaults.items():
            self.collection.setdefault(key, value)
        self.save()

    def load(self):
        try:
            with open(self.path, encoding='utf-8') as f:
                self.collection = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.log.warning("Ignoring broken settings file %s: %s", self.path, e)
            self.collection = {}
        if not isinstance(self.collection, dict):
            self.collection = {}
        for key, value in self.defaults.items():
            self.collection.setdefault(key, value)

        self.collection = {k: v for k, v in self.collection.items() if k in self.defaults}

    def restore_defaults(self):
        self.collection = dict(self.defaults)
        self.save()

    def save(self):
        with open(self.path, "w", encoding='utf-8') as f:
            yaml.safe_dump(self.collection, f)
        self.log.info("Saved settings to %s", self.path)
