class CatalogError(Exception):
    """Base class for errors raised by the strings catalog."""


class ParseError(CatalogError):
    """The text does not follow the strings file grammar."""

    def __init__(self, message: str, position: int = None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} at offset {position}"
        super().__init__(message)


class DictionaryLoadError(CatalogError):
    """The file is not a flat key to string property list."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load {path} as a string dictionary: {reason}")


class PathStructureError(CatalogError):
    """The file path does not sit inside a language directory."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unexpected path structure for {path}: {reason}")


class WriteError(CatalogError):
    """A strings file could not be written."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Writing strings file {path} failed: {cause}")


class InvalidEntryError(CatalogError, ValueError):
    """An entry cannot be written in the strings file grammar."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Cannot write entry {key!r}: {reason}")
