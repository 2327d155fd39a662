import os
import tempfile
from typing import Iterable, Optional

from utils.logging_setup import get_logger

from .errors import InvalidEntryError, WriteError
from .models import TranslationEntry

logger = get_logger("serializer")

NEW_FILE_MODE = 0o644


def escape_value(value: str) -> str:
    return value.replace('"', '\\"')


def validate_entry(key: str, value: str, message: Optional[str] = None):
    """Check that an entry renders to text the parser reads back unchanged.

    Raises:
        InvalidEntryError: If the key, value or message cannot be written
    """
    if not key:
        raise InvalidEntryError(key, "key is empty")
    if '"' in key:
        raise InvalidEntryError(key, "key contains a double quote")
    # A trailing backslash would turn the closing quote into an escaped one
    if value.endswith("\\"):
        raise InvalidEntryError(key, "value ends with a backslash")
    if message is not None and "*/" in message:
        raise InvalidEntryError(key, "comment contains */")


def render_entry(entry: TranslationEntry) -> str:
    lines = []
    if entry.message is not None:
        lines.append(f"/* {entry.message} */")
    lines.append(f"\"{entry.key}\" = \"{escape_value(entry.value)}\";")
    return "\n".join(lines) + "\n"


def render_strings(entries: Iterable[TranslationEntry]) -> str:
    """Render entries in canonical strings file form.

    Entries are written in the order given, each one optionally preceded by
    its comment line, with a blank line between entries.

    Args:
        entries: Snapshot of the entries to write, already sorted

    Returns:
        str: The full file text
    """
    return "\n".join(render_entry(entry) for entry in entries)


def write_strings_file(path: str, text: str):
    """Replace the contents of a strings file.

    The text goes to a temporary file next to the target which is then moved
    over it, so readers never see a partially written file.

    Args:
        path: Target file path
        text: Full file text

    Raises:
        WriteError: If the file could not be written
    """
    directory = os.path.dirname(os.path.abspath(path))
    temp_path = None
    try:
        fd, temp_path = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        mode = os.stat(path).st_mode & 0o7777 if os.path.exists(path) else NEW_FILE_MODE
        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
        temp_path = None
    except OSError as e:
        logger.error(f"Writing strings file {path} failed with {e}")
        raise WriteError(path, e) from e
    finally:
        if temp_path is not None and os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {temp_path}: {e}")
    logger.debug(f"Wrote {len(text)} characters to {path}")
