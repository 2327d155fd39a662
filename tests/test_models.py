from catalog.models import Localization, LocalizationGroup, TranslationEntry


def test_entries_sort_case_sensitively_by_key():
    entries = [TranslationEntry("a", "1"), TranslationEntry("b", "2"), TranslationEntry("A", "3")]
    assert [entry.key for entry in sorted(entries)] == ["A", "a", "b"]


def test_lookup_is_first_match_wins():
    localization = Localization("en", [TranslationEntry("k", "first"), TranslationEntry("k", "second")])
    assert localization.get("k") == "first"
    assert localization.get("missing") is None
    assert localization.get("missing", "fallback") == "fallback"


def test_sort_keeps_duplicate_order():
    localization = Localization("en", [
        TranslationEntry("b", "1"), TranslationEntry("a", "first"), TranslationEntry("a", "second")])
    localization.sort()
    assert [(entry.key, entry.value) for entry in localization.translations] == [
        ("a", "first"), ("a", "second"), ("b", "1")]


def test_update_in_place_and_append():
    localization = Localization("en", [TranslationEntry("b", "1", "note")])
    localization.update("b", "2", None)
    localization.update("a", "new", "added")
    assert localization.translations == [TranslationEntry("a", "new", "added"), TranslationEntry("b", "2", None)]


def test_groups_sort_by_name():
    groups = [LocalizationGroup("b.strings", path="/x/b.strings"),
              LocalizationGroup("a.strings", path="/y/a.strings"),
              LocalizationGroup("A.strings", path="/z/A.strings")]
    assert [group.name for group in sorted(groups)] == ["A.strings", "a.strings", "b.strings"]


def test_group_language_lookup():
    group = LocalizationGroup("L.strings", [Localization("en"), Localization("fr")], "/app/L.strings")
    assert group.languages == ["en", "fr"]
    assert group.get_localization("fr").language == "fr"
    assert group.get_localization("de") is None
