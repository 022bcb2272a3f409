"""Parser for the structured (``osascript -ss``) rendering of AppleScript values.

Lists and records become ``list`` and ``dict``, strings and numbers map to
their Python counterparts, ``true``/``false`` become booleans and ``date "…"``
yields the quoted text. Other bare constants such as ``missing value`` or
``null`` are returned as their literal text; turning those into ``None`` is
the decoder's job.
"""

from __future__ import annotations

import re
from typing import Any

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_KEY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_ ]*")
_BARE_RE = re.compile(r"[^,{}:\"«»]+")
_STRING_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}
_QUOTED_CLASSES = {"date", "file", "alias", "POSIX file"}


class OsascriptOutputError(ValueError):
    """Raised when osascript output is not a well-formed AppleScript value."""


class _ValueParser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> Any:
        self._skip_ws()
        value = self._value()
        self._skip_ws()
        if self.pos != len(self.text):
            self._fail("unexpected trailing text")
        return value

    def _fail(self, reason: str) -> None:
        raise OsascriptOutputError(f"{reason} at offset {self.pos}: {self.text[self.pos:self.pos + 40]!r}")

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _expect(self, char: str) -> None:
        self._skip_ws()
        if self._peek() != char:
            self._fail(f"expected {char!r}")
        self.pos += 1

    def _value(self) -> Any:
        char = self._peek()
        if char == "{":
            return self._collection()
        if char == '"':
            return self._string()
        if char == "«":
            return self._raw_code()
        match = _NUMBER_RE.match(self.text, self.pos)
        if match is not None:
            self.pos = match.end()
            token = match.group(0)
            if any(marker in token for marker in ".eE"):
                return float(token)
            return int(token)
        return self._bare()

    def _string(self) -> str:
        self.pos += 1
        chunks: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == '"':
                self.pos += 1
                return "".join(chunks)
            if char == "\\" and self.pos + 1 < len(self.text):
                nxt = self.text[self.pos + 1]
                chunks.append(_STRING_ESCAPES.get(nxt, nxt))
                self.pos += 2
                continue
            chunks.append(char)
            self.pos += 1
        self._fail("unterminated string")
        return ""

    def _raw_code(self) -> str:
        end = self.text.find("»", self.pos)
        if end == -1:
            self._fail("unterminated raw code")
        token = self.text[self.pos:end + 1]
        self.pos = end + 1
        return token

    def _bare(self) -> Any:
        match = _BARE_RE.match(self.text, self.pos)
        if match is None:
            self._fail("expected a value")
        self.pos = match.end()
        word = match.group(0).strip()
        if word in _QUOTED_CLASSES and self._peek() == '"':
            return self._string()
        if word == "true":
            return True
        if word == "false":
            return False
        return word

    def _record_key_ahead(self) -> bool:
        if self._peek() == "|":
            return True
        match = _KEY_RE.match(self.text, self.pos)
        if match is None:
            return False
        rest = self.text[match.end():].lstrip()
        return rest.startswith(":")

    def _key(self) -> str:
        if self._peek() == "|":
            end = self.text.find("|", self.pos + 1)
            if end == -1:
                self._fail("unterminated key")
            key = self.text[self.pos + 1:end]
            self.pos = end + 1
        else:
            match = _KEY_RE.match(self.text, self.pos)
            if match is None:
                self._fail("expected a record key")
            key = match.group(0).strip()
            self.pos = match.end()
        self._expect(":")
        return key

    def _collection(self) -> Any:
        self.pos += 1
        self._skip_ws()
        if self._peek() == "}":
            self.pos += 1
            return []
        if self._record_key_ahead():
            return self._record_body()
        items: list[Any] = []
        while True:
            self._skip_ws()
            items.append(self._value())
            self._skip_ws()
            if self._peek() == ",":
                self.pos += 1
                continue
            self._expect("}")
            return items

    def _record_body(self) -> dict[str, Any]:
        record: dict[str, Any] = {}
        while True:
            self._skip_ws()
            key = self._key()
            self._skip_ws()
            record[key] = self._value()
            self._skip_ws()
            if self._peek() == ",":
                self.pos += 1
                continue
            self._expect("}")
            return record


def parse_osascript_output(text: str | None) -> Any:
    """Parse one value; blank output (a script that returns nothing) gives ``None``."""
    if text is None or not text.strip():
        return None
    return _ValueParser(text.strip()).parse()
