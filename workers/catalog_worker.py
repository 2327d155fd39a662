"""Worker thread for scanning and updating strings catalogs."""

from PyQt6.QtCore import QThread, pyqtSignal

from catalog.catalog_results import CatalogScanResults
from catalog.errors import InvalidEntryError, WriteError
from catalog.provider import LocalizationProvider
from utils.logging_setup import get_logger

logger = get_logger("catalog_worker")


class CatalogWorker(QThread):
    scan_finished = pyqtSignal(CatalogScanResults)
    scan_failed = pyqtSignal(str)
    update_failed = pyqtSignal(str, str)  # path, error message

    def __init__(self, directory, provider=None, pending_updates=None):
        """Initialize the worker.

        Args:
            directory: Project directory to scan
            provider: LocalizationProvider to use, a default one is created if None
            pending_updates: List of (localization, key, value, message) tuples to
                write before scanning
        """
        super().__init__()
        self.directory = directory
        self.provider = provider or LocalizationProvider()
        self.pending_updates = list(pending_updates or [])
        self.updated_count = 0
        logger.debug(f"Initialized CatalogWorker with directory: {directory}, "
                     f"pending_updates: {len(self.pending_updates)}")

    def run(self):
        try:
            # Updates go first so the rescan sees the files as written
            for localization, key, value, message in self.pending_updates:
                try:
                    if self.provider.update_localization(localization, key, value, message):
                        self.updated_count += 1
                except WriteError as e:
                    logger.error(str(e))
                    self.update_failed.emit(e.path, str(e.cause))
                except InvalidEntryError as e:
                    logger.error(f"Skipping update of {localization}: {e}")
                    self.update_failed.emit(localization.path, e.reason)
            self.pending_updates = []

            results = self.provider.scan(self.directory)
            logger.debug(f"Catalog worker finished with {results.total_groups} groups")
            self.scan_finished.emit(results)
        except Exception as e:
            logger.error(f"Error in catalog worker: {e}", exc_info=True)
            self.scan_failed.emit(str(e))
