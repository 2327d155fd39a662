import plistlib
from typing import List

import openstep_plist

from .errors import DictionaryLoadError, ParseError
from .models import TranslationEntry
from .parser import decode_strings_data


def _is_xml_or_binary_plist(data: bytes) -> bool:
    head = data.lstrip()[:8]
    return head.startswith(b"bplist") or head.startswith(b"<")


def _load_xml_or_binary(path: str, data: bytes):
    try:
        return plistlib.loads(data)
    except Exception as e:
        # plistlib raises more than InvalidFileException on malformed XML
        raise DictionaryLoadError(path, f"not a property list ({type(e).__name__}: {e})") from e


def _load_openstep(path: str, data: bytes):
    """Read old style (OpenStep) property list text.

    This is the format strings files are written in, but the reader is more
    lenient than the entry parser: it accepts // comments, unquoted keys and
    a dictionary with or without enclosing braces.
    """
    try:
        text = decode_strings_data(data)
    except ParseError as e:
        raise DictionaryLoadError(path, str(e)) from e

    error = None
    for candidate in (text, "{\n" + text + "\n}"):
        try:
            contents = openstep_plist.loads(candidate)
        except Exception as e:
            error = e
            continue
        if isinstance(contents, dict):
            return contents
    raise DictionaryLoadError(path, f"not an old style property list ({error})")


def load_string_dictionary(path: str) -> List[TranslationEntry]:
    """Read a strings file as a property list holding a flat string dictionary.

    This is the fallback for files the entry parser rejects: strings files
    compiled to XML or binary property lists, and old style property list text
    using syntax the entry parser does not accept. No comments are kept in this
    form, so every entry has no message.

    Args:
        path: Path of the file to read

    Returns:
        list: One entry per dictionary pair, in the order the dictionary yields them

    Raises:
        DictionaryLoadError: If the file is not a dictionary of strings
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise DictionaryLoadError(path, str(e)) from e

    if _is_xml_or_binary_plist(data):
        contents = _load_xml_or_binary(path, data)
    else:
        contents = _load_openstep(path, data)

    if not isinstance(contents, dict):
        raise DictionaryLoadError(path, f"top level is {type(contents).__name__}, not a dictionary")

    entries = []
    for key, value in contents.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise DictionaryLoadError(path, f"entry {key!r} does not map a string to a string")
        if key == "":
            raise DictionaryLoadError(path, "empty key")
        entries.append(TranslationEntry(key, value, None))
    return entries
