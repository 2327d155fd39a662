import os

import pytest

from catalog.errors import WriteError
from catalog.models import TranslationEntry
from catalog.serializer import escape_value, render_strings, write_strings_file


def test_escape_value():
    assert escape_value('Say "hi"') == 'Say \\"hi\\"'
    assert escape_value("plain") == "plain"


def test_render_strings_canonical_form():
    entries = [
        TranslationEntry("bye", "Bye"),
        TranslationEntry("hello", 'Say "hello"', "Greeting"),
    ]
    assert render_strings(entries) == (
        '"bye" = "Bye";\n'
        '\n'
        '/* Greeting */\n'
        '"hello" = "Say \\"hello\\"";\n'
    )


def test_render_strings_empty():
    assert render_strings([]) == ""


def test_write_strings_file_replaces_contents(tmp_path):
    path = tmp_path / "Localizable.strings"
    path.write_text('"old" = "Old";\n', encoding="utf-8")

    write_strings_file(str(path), '"new" = "Neu";\n')

    assert path.read_text(encoding="utf-8") == '"new" = "Neu";\n'
    assert os.listdir(tmp_path) == ["Localizable.strings"]


def test_write_strings_file_reports_path_and_cause(tmp_path):
    path = tmp_path / "missing" / "Localizable.strings"
    with pytest.raises(WriteError) as excinfo:
        write_strings_file(str(path), "")
    assert excinfo.value.path == str(path)
    assert isinstance(excinfo.value.cause, OSError)
