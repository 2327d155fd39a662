"""Parser for Apple style .strings files.

The grammar is a sequence of entries of the form

    /* optional comment */
    "key" = "value";

Whitespace between tokens is ignored. Inside a value the sequence \\" stands
for a literal quote. A comment is attached to the next key that follows it.
Any deviation from the grammar fails the whole file; callers decide what to
fall back to.
"""

import codecs
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Union

from .errors import ParseError
from .models import TranslationEntry


class ParserState(Enum):
    SEEKING_KEY_OR_COMMENT = auto()
    IN_COMMENT = auto()
    IN_KEY = auto()
    EXPECT_EQUALS = auto()
    EXPECT_VALUE = auto()
    IN_VALUE = auto()
    EXPECT_SEMICOLON = auto()


class StringsParser:
    QUOTE = '"'
    ESCAPE = '\\'
    EQUALS = '='
    SEMICOLON = ';'
    COMMENT_START = "/*"
    COMMENT_END = "*/"

    def __init__(self, text: str):
        self._text = text

    def parse(self) -> List[TranslationEntry]:
        """Parse the text into entries in file order.

        Returns:
            list: The entries of the file, not sorted

        Raises:
            ParseError: If the text breaks the grammar anywhere
        """
        text = self._text
        length = len(text)
        entries = []
        state = ParserState.SEEKING_KEY_OR_COMMENT
        pending_message = None
        token_start = 0
        buffer = []
        key = None
        i = 0

        while i < length:
            c = text[i]

            if state == ParserState.SEEKING_KEY_OR_COMMENT:
                if c.isspace():
                    i += 1
                elif text.startswith(StringsParser.COMMENT_START, i):
                    state = ParserState.IN_COMMENT
                    token_start = i
                    i += len(StringsParser.COMMENT_START)
                elif c == StringsParser.QUOTE:
                    state = ParserState.IN_KEY
                    token_start = i
                    buffer = []
                    i += 1
                else:
                    raise ParseError(f"Expected a key or a comment, found {c!r}", i)

            elif state == ParserState.IN_COMMENT:
                end = text.find(StringsParser.COMMENT_END, i)
                if end == -1:
                    raise ParseError("Unterminated comment", token_start)
                # The last comment before a key is the one that describes it
                pending_message = text[i:end].strip()
                state = ParserState.SEEKING_KEY_OR_COMMENT
                i = end + len(StringsParser.COMMENT_END)

            elif state == ParserState.IN_KEY:
                if c == StringsParser.QUOTE:
                    key = "".join(buffer)
                    if key == "":
                        raise ParseError("Empty key", token_start)
                    state = ParserState.EXPECT_EQUALS
                else:
                    buffer.append(c)
                i += 1

            elif state == ParserState.EXPECT_EQUALS:
                if c.isspace():
                    i += 1
                elif c == StringsParser.EQUALS:
                    state = ParserState.EXPECT_VALUE
                    i += 1
                else:
                    raise ParseError(f"Expected '=' after key \"{key}\", found {c!r}", i)

            elif state == ParserState.EXPECT_VALUE:
                if c.isspace():
                    i += 1
                elif c == StringsParser.QUOTE:
                    state = ParserState.IN_VALUE
                    token_start = i
                    buffer = []
                    i += 1
                else:
                    raise ParseError(f"Expected a quoted value for key \"{key}\", found {c!r}", i)

            elif state == ParserState.IN_VALUE:
                if c == StringsParser.ESCAPE and i + 1 < length and text[i + 1] == StringsParser.QUOTE:
                    buffer.append(StringsParser.QUOTE)
                    i += 2
                elif c == StringsParser.QUOTE:
                    entries.append(TranslationEntry(key, "".join(buffer), pending_message))
                    pending_message = None
                    state = ParserState.EXPECT_SEMICOLON
                    i += 1
                else:
                    buffer.append(c)
                    i += 1

            elif state == ParserState.EXPECT_SEMICOLON:
                if c.isspace():
                    i += 1
                elif c == StringsParser.SEMICOLON:
                    state = ParserState.SEEKING_KEY_OR_COMMENT
                    i += 1
                else:
                    raise ParseError(f"Expected ';' after value of key \"{key}\", found {c!r}", i)

        if state == ParserState.IN_COMMENT:
            raise ParseError("Unterminated comment", token_start)
        if state == ParserState.IN_KEY:
            raise ParseError("Unterminated key", token_start)
        if state == ParserState.IN_VALUE:
            raise ParseError(f"Unterminated value for key \"{key}\"", token_start)
        if state != ParserState.SEEKING_KEY_OR_COMMENT:
            raise ParseError(f"Incomplete entry for key \"{key}\" at end of input", length)

        return entries


@dataclass
class Parsed:
    entries: List[TranslationEntry] = field(default_factory=list)


@dataclass
class Failed:
    reason: str
    position: Optional[int] = None


ParseResult = Union[Parsed, Failed]


def parse_strings(text: str) -> ParseResult:
    """Parse strings file text without raising.

    Args:
        text: Full content of one strings file

    Returns:
        Parsed with the entries in file order, or Failed with the reason
    """
    try:
        return Parsed(StringsParser(text).parse())
    except ParseError as e:
        return Failed(str(e), e.position)


def decode_strings_data(data: bytes) -> str:
    """Decode raw strings file bytes.

    UTF-8 is expected, but Xcode also writes UTF-16 files with a byte order
    mark, so those are honored.

    Raises:
        ParseError: If the bytes cannot be decoded
    """
    try:
        if data.startswith(codecs.BOM_UTF16_LE) or data.startswith(codecs.BOM_UTF16_BE):
            return data.decode("utf-16")
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Could not decode file contents: {e.reason}", e.start)


def read_strings_file(path: str) -> ParseResult:
    """Read and parse one strings file.

    Args:
        path: Path of the strings file

    Returns:
        Parsed or Failed, unreadable files included
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        return Failed(f"Could not read {path}: {e}")
    try:
        text = decode_strings_data(data)
    except ParseError as e:
        return Failed(str(e), e.position)
    return parse_strings(text)
