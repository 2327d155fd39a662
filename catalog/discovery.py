"""Discovery and grouping of strings files.

Files are grouped by the language directory convention: a strings file lives
in a directory named after its language with a marker suffix, e.g.
``Base.lproj`` or ``fr.lproj``. Removing every such directory from a path
yields the identity of the logical file that all language variants share.
"""

import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Callable, Dict, Iterable, List, Optional

from utils.globals import Globals, LoadOutcome
from utils.logging_setup import get_logger

from .catalog_results import CatalogScanResults
from .dictionary_loader import load_string_dictionary
from .errors import DictionaryLoadError, PathStructureError
from .models import Localization, LocalizationGroup, TranslationEntry
from .parser import Parsed, read_strings_file

logger = get_logger("discovery")


def _path_segments(path: str) -> List[str]:
    pure_path = PurePath(path)
    parts = list(pure_path.parts)
    if pure_path.anchor and parts and parts[0] == pure_path.anchor:
        parts = parts[1:]
    return parts


def group_key_of(path: str, suffix: str = Globals.LANGUAGE_DIRECTORY_SUFFIX) -> str:
    """Get the language independent identity of a strings file.

    Examples:
    - /app/en.lproj/Localizable.strings -> /app/Localizable.strings
    - /app/Base.lproj/Main.strings -> /app/Main.strings

    Args:
        path: Path of the strings file
        suffix: Language directory marker

    Returns:
        str: The path with every language directory segment removed
    """
    pure_path = PurePath(path)
    kept = [part for part in _path_segments(path) if not part.endswith(suffix)]
    return str(PurePath(pure_path.anchor, *kept))


def language_of(path: str, suffix: str = Globals.LANGUAGE_DIRECTORY_SUFFIX) -> str:
    """Get the language of a strings file from its enclosing directory.

    Unlike a plain "parent directory minus marker" rule, a parent without the
    marker (e.g. /app/Resources/X.strings) is not taken as a language named
    "Resources"; it is rejected and discovery files it under the placeholder
    language instead.

    Args:
        path: Path of the strings file
        suffix: Language directory marker

    Returns:
        str: The parent directory name without the marker

    Raises:
        PathStructureError: If the parent directory is not a language directory
    """
    segments = _path_segments(path)
    if len(segments) < 2:
        raise PathStructureError(path, "file has no enclosing directory")
    parent = segments[-2]
    if not parent.endswith(suffix):
        raise PathStructureError(path, f"parent directory {parent} does not end with {suffix}")
    return parent[:-len(suffix)]


def is_strings_file(path: str, extension: str = Globals.STRINGS_EXTENSION) -> bool:
    return os.path.splitext(path)[1] == extension


def is_ignored(path: str, root: str, ignored_directories: Iterable[str]) -> bool:
    """Check whether a file sits below one of the ignored directories.

    Only directories below the root are considered. A name starting with a dot
    (e.g. ``.framework``) matches any directory ending with it; other names
    must match a directory exactly.
    """
    relative = os.path.relpath(os.path.abspath(path), os.path.abspath(root))
    if relative.startswith(os.pardir):
        relative = path
    directories = _path_segments(relative)[:-1]
    for name in ignored_directories:
        for directory in directories:
            if directory == name or (name.startswith(".") and directory.endswith(name)):
                return True
    return False


def find_strings_files(root: str,
                       list_files: Callable[[str], List[str]],
                       ignored_directories: Iterable[str] = Globals.DEFAULT_IGNORED_DIRECTORIES,
                       extension: str = Globals.STRINGS_EXTENSION) -> List[str]:
    """List the strings files under root that are not in ignored directories.

    Returns:
        list: Matching paths, sorted
    """
    ignored_directories = list(ignored_directories)
    return sorted(path for path in list_files(root)
                  if is_strings_file(path, extension) and not is_ignored(path, root, ignored_directories))


@dataclass
class LoadedFile:
    path: str
    entries: List[TranslationEntry] = field(default_factory=list)
    outcome: LoadOutcome = LoadOutcome.PARSED
    reason: Optional[str] = None


def load_translations(path: str) -> LoadedFile:
    """Read the entries of one strings file, sorted by key.

    The file is parsed as strings file text first. If that fails it is read
    as a property list dictionary, and if that fails too it contributes no
    entries.

    Args:
        path: Path of the strings file

    Returns:
        LoadedFile: The entries and how they were obtained
    """
    result = read_strings_file(path)
    if isinstance(result, Parsed):
        entries = sorted(result.entries, key=lambda entry: entry.key)
        logger.debug(f"Found {len(entries)} keys in {path} using built in parser")
        return LoadedFile(path, entries, LoadOutcome.PARSED)

    logger.warning(f"Could not parse {path} as strings file: {result.reason}")
    try:
        entries = load_string_dictionary(path)
    except DictionaryLoadError as e:
        logger.error(f"Could not parse {path} as dictionary: {e.reason}")
        return LoadedFile(path, [], LoadOutcome.EMPTY, f"{result.reason}; {e.reason}")

    entries.sort(key=lambda entry: entry.key)
    logger.debug(f"Found {len(entries)} keys in {path} as dictionary")
    return LoadedFile(path, entries, LoadOutcome.DICTIONARY_FALLBACK)


def build_groups(loaded_files: Iterable[LoadedFile],
                 suffix: str = Globals.LANGUAGE_DIRECTORY_SUFFIX,
                 results: Optional[CatalogScanResults] = None) -> List[LocalizationGroup]:
    """Group loaded files into localization groups.

    Each group gets at most one localization per language; when two files of
    a group resolve to the same language, the first one in path order is kept.

    Args:
        loaded_files: Per file load results
        suffix: Language directory marker
        results: Optional scan results to record per file outcomes in

    Returns:
        list: Groups sorted by name
    """
    files_by_key: Dict[str, List[LoadedFile]] = {}
    for loaded in sorted(loaded_files, key=lambda loaded: loaded.path):
        files_by_key.setdefault(group_key_of(loaded.path, suffix), []).append(loaded)

    groups = []
    for key, files in files_by_key.items():
        group = LocalizationGroup(name=PurePath(key).name, localizations=[], path=key)
        for loaded in files:
            try:
                language = language_of(loaded.path, suffix)
            except PathStructureError as e:
                logger.warning(str(e))
                language = Globals.UNKNOWN_LANGUAGE
                if results is not None:
                    results.unknown_language_files[loaded.path] = e.reason

            if group.get_localization(language) is not None:
                logger.warning(f"Skipping {loaded.path}: group {key} already has language '{language}'")
                if results is not None:
                    results.duplicate_language_files.append(loaded.path)
                continue

            group.localizations.append(Localization(language=language,
                                                    translations=loaded.entries,
                                                    path=loaded.path))
        groups.append(group)

    groups.sort()
    return groups
