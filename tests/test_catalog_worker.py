import pytest

pytest.importorskip("PyQt6")

from catalog.models import Localization, TranslationEntry
from catalog.provider import LocalizationProvider
from workers.catalog_worker import CatalogWorker


def test_run_emits_scan_results(tmp_path, write_file):
    write_file("App/en.lproj/Localizable.strings", '"a" = "1";')
    worker = CatalogWorker(str(tmp_path), LocalizationProvider())
    finished = []
    failed = []
    worker.scan_finished.connect(finished.append)
    worker.scan_failed.connect(failed.append)

    worker.run()

    assert failed == []
    assert len(finished) == 1
    assert [group.name for group in finished[0].groups] == ["Localizable.strings"]


def test_pending_updates_are_written_before_scan(tmp_path, write_file):
    path = write_file("App/en.lproj/Localizable.strings", '"a" = "1";')
    provider = LocalizationProvider()
    localization = provider.get_localizations(str(tmp_path))[0].get_localization("en")
    worker = CatalogWorker(str(tmp_path), provider, pending_updates=[(localization, "a", "2", "changed")])
    finished = []
    worker.scan_finished.connect(finished.append)

    worker.run()

    assert worker.updated_count == 1
    assert worker.pending_updates == []
    assert '"a" = "2";' in path.read_text(encoding="utf-8")
    rescanned = finished[0].groups[0].get_localization("en")
    assert rescanned.get_entry("a") == TranslationEntry("a", "2", "changed")


def test_failed_update_is_reported_and_scan_still_runs(tmp_path, write_file):
    write_file("App/en.lproj/Localizable.strings", '"a" = "1";')
    unwritable = Localization("en", [], str(tmp_path / "gone" / "Localizable.strings"))
    worker = CatalogWorker(str(tmp_path), LocalizationProvider(), pending_updates=[(unwritable, "a", "2", None)])
    update_failures = []
    finished = []
    worker.update_failed.connect(lambda path, error: update_failures.append(path))
    worker.scan_finished.connect(finished.append)

    worker.run()

    assert update_failures == [unwritable.path]
    assert len(finished) == 1
