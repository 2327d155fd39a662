import plistlib

import pytest

from catalog.dictionary_loader import load_string_dictionary
from catalog.errors import DictionaryLoadError
from catalog.models import TranslationEntry


def test_loads_xml_property_list(write_file):
    path = write_file("en.lproj/Compiled.strings", plistlib.dumps({"greeting": "Hello", "farewell": "Bye"}))
    entries = load_string_dictionary(str(path))
    assert sorted(entries, key=lambda entry: entry.key) == [
        TranslationEntry("farewell", "Bye", None),
        TranslationEntry("greeting", "Hello", None),
    ]


def test_loads_binary_property_list(write_file):
    data = plistlib.dumps({"a": "1"}, fmt=plistlib.FMT_BINARY)
    path = write_file("en.lproj/Binary.strings", data)
    assert load_string_dictionary(str(path)) == [TranslationEntry("a", "1", None)]


@pytest.mark.parametrize("content", [
    b"NOT A VALID STRINGS FILE",
    plistlib.dumps(["not", "a", "dictionary"]),
    plistlib.dumps({"count": 3}),
    plistlib.dumps({"nested": {"a": "b"}}),
    plistlib.dumps({"": "empty key"}),
    b"<?xml version=\"1.0\"?><plist><dict><key>a</key>",
])
def test_rejects_anything_but_a_flat_string_dictionary(write_file, content):
    path = write_file("en.lproj/Broken.strings", content)
    with pytest.raises(DictionaryLoadError) as excinfo:
        load_string_dictionary(str(path))
    assert excinfo.value.path == str(path)


def test_missing_file_is_a_load_error(tmp_path):
    with pytest.raises(DictionaryLoadError):
        load_string_dictionary(str(tmp_path / "missing.strings"))


def test_malformed_xml_values_are_a_load_error(write_file):
    path = write_file("en.lproj/Broken.strings", "<plist><dict><key>a</key><date>x</date></dict></plist>")
    with pytest.raises(DictionaryLoadError):
        load_string_dictionary(str(path))


def test_loads_old_style_text_with_line_comments(write_file):
    path = write_file("en.lproj/Localizable.strings", '// header\n"a" = "1";\n"b" = "2";\n')
    entries = load_string_dictionary(str(path))
    assert sorted(entries, key=lambda entry: entry.key) == [
        TranslationEntry("a", "1", None),
        TranslationEntry("b", "2", None),
    ]


def test_loads_old_style_text_with_unquoted_keys(write_file):
    path = write_file("en.lproj/Localizable.strings", "/* title */\ntitle = \"Title\";\n")
    assert load_string_dictionary(str(path)) == [TranslationEntry("title", "Title", None)]


def test_loads_old_style_dictionary_in_braces(write_file):
    path = write_file("en.lproj/Localizable.strings", '{\n    "a" = "1";\n}\n')
    assert load_string_dictionary(str(path)) == [TranslationEntry("a", "1", None)]
