from enum import Enum


class Globals:
    STRINGS_EXTENSION = ".strings"
    LANGUAGE_DIRECTORY_SUFFIX = ".lproj"
    DEFAULT_IGNORED_DIRECTORIES = frozenset({"Pods", "Carthage", "build", ".framework"})
    # Language reported for files outside a language directory
    UNKNOWN_LANGUAGE = ""
    DEFAULT_MAX_WORKERS = 1


class LoadOutcome(Enum):
    """How the entries of one strings file were obtained."""
    PARSED = "parsed"
    DICTIONARY_FALLBACK = "dictionary_fallback"
    EMPTY = "empty"
