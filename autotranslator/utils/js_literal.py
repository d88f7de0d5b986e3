"""Read and write the object literal exported by a `.ts`/`.js` locale module.

Only the data subset used by locale files is understood: object and array
literals, strings (template literals without `${}` substitutions), numbers,
booleans, `null` and `undefined`.
"""

from __future__ import annotations

import json
import re
from typing import Any

_EXPORT_PATTERN = re.compile(r"(?:export\s+default|module\.exports\s*=)\s*")
_IDENTIFIER = re.compile(r"(?:[^\W\d]|\$)(?:\w|\$)*")
_NUMBER = re.compile(r"[-+]?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_KEYWORDS = {"true": True, "false": False, "null": None, "undefined": None}


class JSLiteralError(ValueError):
    """Raised when a module does not export a supported object literal."""


class _Parser:
    def __init__(self, text: str, pos: int = 0) -> None:
        self._text = text
        self._pos = pos

    def _error(self, message: str) -> JSLiteralError:
        line = self._text.count("\n", 0, self._pos) + 1
        return JSLiteralError(f"{message} (line {line})")

    def _skip_trivia(self) -> None:
        text = self._text
        while self._pos < len(text):
            char = text[self._pos]
            if char.isspace():
                self._pos += 1
            elif text.startswith("//", self._pos):
                end = text.find("\n", self._pos)
                self._pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self._pos):
                end = text.find("*/", self._pos + 2)
                if end == -1:
                    raise self._error("Unterminated block comment")
                self._pos = end + 2
            else:
                break

    def _peek(self) -> str:
        self._skip_trivia()
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            raise self._error(f"Expected {char!r}")
        self._pos += 1

    def parse_value(self) -> Any:
        char = self._peek()
        if not char:
            raise self._error("Unexpected end of input")
        if char == "{":
            return self._parse_object()
        if char == "[":
            return self._parse_array()
        if char in "'\"`":
            return self._parse_string()
        match = _NUMBER.match(self._text, self._pos)
        if match:
            self._pos = match.end()
            literal = match.group(0)
            if literal.lstrip("+-").lower().startswith("0x"):
                return int(literal, 16)
            if re.fullmatch(r"[-+]?\d+", literal):
                return int(literal)
            return float(literal)
        match = _IDENTIFIER.match(self._text, self._pos)
        if match and match.group(0) in _KEYWORDS:
            self._pos = match.end()
            return _KEYWORDS[match.group(0)]
        raise self._error(f"Unsupported value starting with {char!r}")

    def _parse_object(self) -> dict[str, Any]:
        self._expect("{")
        result: dict[str, Any] = {}
        while self._peek() != "}":
            if not self._peek():
                raise self._error("Unterminated object literal")
            key = self._parse_key()
            self._expect(":")
            result[key] = self.parse_value()
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != "}":
                raise self._error("Expected ',' or '}'")
        self._pos += 1
        return result

    def _parse_array(self) -> list[Any]:
        self._expect("[")
        items: list[Any] = []
        while self._peek() != "]":
            if not self._peek():
                raise self._error("Unterminated array literal")
            items.append(self.parse_value())
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != "]":
                raise self._error("Expected ',' or ']'")
        self._pos += 1
        return items

    def _parse_key(self) -> str:
        char = self._peek()
        if not char:
            raise self._error("Unexpected end of input")
        if char in "'\"`":
            return self._parse_string()
        match = _IDENTIFIER.match(self._text, self._pos) or _NUMBER.match(self._text, self._pos)
        if not match:
            raise self._error("Expected property name")
        self._pos = match.end()
        return match.group(0)

    def _parse_string(self) -> str:
        text = self._text
        quote = text[self._pos]
        self._pos += 1
        chunks: list[str] = []
        while True:
            if self._pos >= len(text):
                raise self._error("Unterminated string literal")
            char = text[self._pos]
            if char == quote:
                self._pos += 1
                return "".join(chunks)
            if char == "\\":
                chunks.append(self._parse_escape())
                continue
            if quote == "`" and text.startswith("${", self._pos):
                raise self._error("Template substitutions are not supported")
            if char == "\n" and quote != "`":
                raise self._error("Newline in string literal")
            chunks.append(char)
            self._pos += 1

    def _parse_escape(self) -> str:
        text = self._text
        self._pos += 1
        if self._pos >= len(text):
            raise self._error("Unterminated escape sequence")
        char = text[self._pos]
        self._pos += 1
        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char]
        if char == "x":
            return self._read_code_point(2)
        if char == "u":
            if text.startswith("{", self._pos):
                end = text.index("}", self._pos)
                code = text[self._pos + 1 : end]
                self._pos = end + 1
                return chr(int(code, 16))
            return self._read_code_point(4)
        if char == "\r" and text.startswith("\n", self._pos):
            self._pos += 1
            return ""
        if char in "\n\u2028\u2029":
            return ""
        return char

    def _read_code_point(self, width: int) -> str:
        digits = self._text[self._pos : self._pos + width]
        try:
            value = int(digits, 16)
        except ValueError as exc:
            raise self._error(f"Invalid escape \\{digits}") from exc
        self._pos += width
        return chr(value)


def parse_module(text: str) -> dict[str, Any]:
    """Return the object literal a module exports by default."""
    match = _EXPORT_PATTERN.search(text)
    if not match:
        raise JSLiteralError("Module has no `export default` or `module.exports` object")
    value = _Parser(text, match.end()).parse_value()
    if not isinstance(value, dict):
        raise JSLiteralError("Default export is not an object literal")
    return value


def format_key(key: str) -> str:
    if _IDENTIFIER.fullmatch(key):
        return key
    return json.dumps(key, ensure_ascii=False)


def format_string(value: str) -> str:
    """Quote a string for a module file.

    Values containing newlines or quote characters become template literals;
    everything else becomes a single-quoted literal.
    """
    escaped = value.replace("\\", "\\\\").replace("\r", "\\r")
    if "\n" in value or "'" in value or '"' in value:
        escaped = escaped.replace("`", "\\`").replace("${", "\\${")
        return f"`{escaped}`"
    return f"'{escaped}'"


def format_value(value: Any, indent: int = 4) -> str:
    if isinstance(value, str):
        return format_string(value)
    rendered = json.dumps(value, ensure_ascii=False, indent=2)
    return rendered.replace("\n", "\n" + " " * indent)


def format_module(tree: dict[str, Any]) -> str:
    lines = ["export default {"]
    for key, value in tree.items():
        lines.append(f"    {format_key(key)}: {format_value(value)},")
    lines.append("};")
    return "\n".join(lines) + "\n"
