class KeymapLoadError(Exception):
    """ Base class for everything that can go wrong while turning a file into a keymap """


class KeymapReadError(KeymapLoadError):
    """ The keymap file could not be read """

    def __init__(self, path, cause):
        super().__init__(f"Failed to read file '{path}': {cause}")
        self.path = path


class UnsupportedFormatError(KeymapLoadError):
    """ The file extension is neither a structured keymap nor a firmware source """

    def __init__(self, path):
        super().__init__(f"Unsupported file type '{path}'. Please use .json, .c, or .h files.")
        self.path = path


class KeymapDecodeError(KeymapLoadError):
    """ The structured keymap is malformed """


class NoLayoutFoundError(KeymapLoadError):
    """ The firmware source parser did not find a single layout block """

    def __init__(self, message="no LAYOUT(...) blocks found in keymap source"):
        super().__init__(message)
