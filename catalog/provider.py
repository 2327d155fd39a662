import os
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Callable, Dict, Iterable, List, Optional

from utils.config import ConfigManager, DiscoverySettings
from utils.file_listing import list_files_recursively
from utils.globals import LoadOutcome
from utils.logging_setup import get_logger

from .catalog_results import CatalogScanResults
from .discovery import build_groups, find_strings_files, load_translations
from .models import Localization, LocalizationGroup
from .serializer import render_strings, validate_entry, write_strings_file

logger = get_logger("provider")


class PathLocks:
    """One exclusive lock per file path.

    Held while a file is read during a scan and while it is mutated and
    rewritten, so a scan never observes a half written file.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def lock_for(self, path: str) -> threading.Lock:
        normalized = os.path.normcase(os.path.abspath(path))
        with self._guard:
            if normalized not in self._locks:
                self._locks[normalized] = threading.Lock()
            return self._locks[normalized]

    @contextmanager
    def hold(self, path: str):
        with self.lock_for(path):
            yield


class LocalizationProvider:
    """Service for finding, reading and updating strings files."""

    def __init__(self,
                 file_lister: Callable[[str], List[str]] = list_files_recursively,
                 ignored_directories: Optional[Iterable[str]] = None,
                 max_workers: Optional[int] = None,
                 config_manager: Optional[ConfigManager] = None):
        """Initialize the provider.

        Args:
            file_lister: Lists all files below a directory as absolute paths
            ignored_directories: Directory names excluded from discovery, overrides config
            max_workers: Number of threads reading files during a scan, overrides config
            config_manager: Source of the discovery settings, defaults are used without one
        """
        self._file_lister = file_lister
        settings = config_manager.get_discovery_settings() if config_manager else DiscoverySettings()

        if ignored_directories is None:
            ignored_directories = settings.ignored_directories
        self.ignored_directories = frozenset(ignored_directories)
        self.extension = settings.extension
        self.language_directory_suffix = settings.language_directory_suffix
        if max_workers is None:
            max_workers = settings.max_workers
        self.max_workers = max(1, int(max_workers))
        self.path_locks = PathLocks()

    # Actions

    def update_localization(self, localization: Localization, key: str, value: str,
                            message: Optional[str] = None) -> bool:
        """Update one value in a localization and rewrite its file.

        The whole file is regenerated from the entries of the localization.

        Args:
            localization: Localization to update
            key: Entry key
            value: New value for the entry
            message: New comment for the entry, None for no comment

        Returns:
            bool: False if the entry already had this value and message, True if the file was rewritten

        Raises:
            InvalidEntryError: If the entry, or an entry already in the file,
                cannot be written in strings file syntax. Nothing is changed.
            WriteError: If the file could not be written. The in-memory
                localization keeps the update in that case.
        """
        with self.path_locks.hold(localization.path):
            existing = localization.get_entry(key)
            if existing is not None and existing.value == value and existing.message == message:
                logger.debug(f"Same value provided for {key} in {localization}, not updating")
                return False

            validate_entry(key, value, message)
            for entry in localization.translations:
                if entry is not existing:
                    validate_entry(entry.key, entry.value, entry.message)

            logger.debug(f"Updating {key} in {localization} with message: {message or 'No message.'}")
            localization.update(key, value, message)
            text = render_strings(list(localization.translations))
            write_strings_file(localization.path, text)

        logger.debug(f"Localization file for {localization} updated")
        return True

    def get_localizations(self, root: str) -> List[LocalizationGroup]:
        """Find and construct localizations for a directory.

        Args:
            root: Directory to start the search in

        Returns:
            list: Localization groups sorted by name
        """
        return self.scan(root).groups

    def scan(self, root: str) -> CatalogScanResults:
        """Build the full catalog for a directory.

        Args:
            root: Directory to start the search in

        Returns:
            CatalogScanResults: The groups and the per file outcomes of the scan
        """
        root = os.path.abspath(root)
        results = CatalogScanResults.create(root)
        logger.debug(f"Searching {root} for {self.extension} files")

        paths = find_strings_files(root, self._file_lister, self.ignored_directories, self.extension)
        results.total_files = len(paths)
        logger.debug(f"Found {len(paths)} localization files")

        if self.max_workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                loaded_files = list(executor.map(self._load_file, paths))
        else:
            loaded_files = [self._load_file(path) for path in paths]

        for loaded in loaded_files:
            if loaded.outcome == LoadOutcome.DICTIONARY_FALLBACK:
                results.fallback_files.append(loaded.path)
            elif loaded.outcome == LoadOutcome.EMPTY:
                results.empty_files[loaded.path] = loaded.reason

        results.groups = build_groups(loaded_files, self.language_directory_suffix, results)
        logger.info(f"Found {results.total_groups} localization groups in {root}")
        return results

    def _load_file(self, path: str):
        with self.path_locks.hold(path):
            return load_translations(path)
