# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tolerant JSON parser producing a position-annotated tree.

The parser never raises on bad input. Every deviation from strict JSON is
recorded as a :class:`ParseError` with its offset, and parsing resumes at the
next ``,``, ``}`` or ``]`` so one document can report several problems.
Comments are accepted (and only reported when ``disallow_comments`` is set);
trailing commas are recovered from but reported unless
``allow_trailing_comma`` is set.

Offsets and lengths are character offsets into the ``str`` that was parsed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class NodeType(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class ParseErrorCode(Enum):
    INVALID_SYMBOL = 1
    INVALID_NUMBER_FORMAT = 2
    PROPERTY_NAME_EXPECTED = 3
    VALUE_EXPECTED = 4
    COLON_EXPECTED = 5
    COMMA_EXPECTED = 6
    CLOSE_BRACE_EXPECTED = 7
    CLOSE_BRACKET_EXPECTED = 8
    END_OF_FILE_EXPECTED = 9
    INVALID_COMMENT_TOKEN = 10
    UNEXPECTED_END_OF_COMMENT = 11
    UNEXPECTED_END_OF_STRING = 12
    UNEXPECTED_END_OF_NUMBER = 13
    INVALID_UNICODE = 14
    INVALID_ESCAPE_CHARACTER = 15
    INVALID_CHARACTER = 16


_ERROR_PHRASES: Dict[ParseErrorCode, str] = {
    ParseErrorCode.INVALID_SYMBOL: "Invalid symbol",
    ParseErrorCode.INVALID_NUMBER_FORMAT: "Invalid number format",
    ParseErrorCode.PROPERTY_NAME_EXPECTED: "Property name expected",
    ParseErrorCode.VALUE_EXPECTED: "Value expected",
    ParseErrorCode.COLON_EXPECTED: "Colon expected",
    ParseErrorCode.COMMA_EXPECTED: "Comma expected",
    ParseErrorCode.CLOSE_BRACE_EXPECTED: "Closing brace expected",
    ParseErrorCode.CLOSE_BRACKET_EXPECTED: "Closing bracket expected",
    ParseErrorCode.END_OF_FILE_EXPECTED: "End of file expected",
    ParseErrorCode.INVALID_COMMENT_TOKEN: "Comments are not permitted",
    ParseErrorCode.UNEXPECTED_END_OF_COMMENT: "Unexpected end of comment",
    ParseErrorCode.UNEXPECTED_END_OF_STRING: "Unexpected end of string",
    ParseErrorCode.UNEXPECTED_END_OF_NUMBER: "Unexpected end of number",
    ParseErrorCode.INVALID_UNICODE: "Invalid unicode escape sequence",
    ParseErrorCode.INVALID_ESCAPE_CHARACTER: "Invalid escape character",
    ParseErrorCode.INVALID_CHARACTER: "Invalid character in string",
}


def print_parse_error_code(code: ParseErrorCode) -> str:
    """Human-readable phrase for a parse error code."""
    return _ERROR_PHRASES.get(code, "Unknown syntax error")


@dataclass(frozen=True)
class ParseError:
    error: ParseErrorCode
    offset: int
    length: int


@dataclass(frozen=True)
class ParseOptions:
    disallow_comments: bool = False
    allow_trailing_comma: bool = False
    allow_empty_content: bool = False


@dataclass
class ParseNode:
    """One syntactic element of the source.

    Object children alternate key node, value node; a property whose value
    could not be parsed contributes neither. Array children are the element
    nodes. ``value`` is set on leaves only.
    """

    type: NodeType
    offset: int
    length: int = 0
    children: List["ParseNode"] = field(default_factory=list)
    value: Any = None

    @property
    def end(self) -> int:
        return self.offset + self.length


class _Token(Enum):
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    OPEN_BRACKET = "["
    CLOSE_BRACKET = "]"
    COMMA = ","
    COLON = ":"
    NULL = "null"
    TRUE = "true"
    FALSE = "false"
    STRING = "string"
    NUMBER = "number"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    LINE_BREAK = "line_break"
    TRIVIA = "trivia"
    UNKNOWN = "unknown"
    EOF = "eof"


_PUNCTUATION = {
    "{": _Token.OPEN_BRACE,
    "}": _Token.CLOSE_BRACE,
    "[": _Token.OPEN_BRACKET,
    "]": _Token.CLOSE_BRACKET,
    ",": _Token.COMMA,
    ":": _Token.COLON,
}
_KEYWORDS = {"true": _Token.TRUE, "false": _Token.FALSE, "null": _Token.NULL}
_SIMPLE_ESCAPES = {'"': '"', "\\": "\\", "/": "/", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}

_WHITESPACE_RE = re.compile(r"[ \t\v\f\u00a0\u1680\u2000-\u200a\u202f\u205f\u3000\ufeff]+")
_DIGITS_RE = re.compile(r"[0-9]+")
_HEX4_RE = re.compile(r"[0-9a-fA-F]{4}")
# A run of characters that cannot start any other token.
_WORD_RE = re.compile(r"[^\s{}\[\],:\"/]+")


def _join_surrogates(value: str) -> str:
    try:
        return value.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError:
        # Lone surrogates stay as they are; JSON allows them in escapes.
        return value


def decode_string_literal(raw: str) -> Optional[str]:
    """Decode the inside of a JSON string literal, or ``None`` if it is malformed."""
    scanner = _Scanner('"' + raw + '"')
    if scanner.scan() is not _Token.STRING or scanner.error is not None or scanner.pos != len(raw) + 2:
        return None
    return scanner.value


class _Scanner:
    """Single-token scanner; ``error`` holds the problem found in the last token."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.token = _Token.UNKNOWN
        self.token_offset = 0
        self.value: str = ""
        self.error: Optional[ParseErrorCode] = None

    @property
    def token_length(self) -> int:
        return self.pos - self.token_offset

    def scan(self) -> _Token:
        self.token = self._scan()
        return self.token

    def _scan(self) -> _Token:
        text = self.text
        self.value = ""
        self.error = None
        self.token_offset = self.pos

        if self.pos >= len(text):
            return _Token.EOF

        ch = text[self.pos]

        match = _WHITESPACE_RE.match(text, self.pos)
        if match:
            self.pos = match.end()
            return _Token.TRIVIA

        if ch == "\n":
            self.pos += 1
            return _Token.LINE_BREAK
        if ch == "\r":
            self.pos += 1
            if self.pos < len(text) and text[self.pos] == "\n":
                self.pos += 1
            return _Token.LINE_BREAK

        if ch in _PUNCTUATION:
            self.pos += 1
            return _PUNCTUATION[ch]

        if ch == '"':
            return self._scan_string()

        if ch == "/":
            return self._scan_comment()

        if ch == "-" or (ch.isdigit() and ch.isascii()):
            return self._scan_number()

        match = _WORD_RE.match(text, self.pos)
        if not match:
            self.pos += 1
            self.value = ch
            return _Token.UNKNOWN
        self.pos = match.end()
        self.value = match.group()
        return _KEYWORDS.get(self.value, _Token.UNKNOWN)

    def _scan_string(self) -> _Token:
        text = self.text
        self.pos += 1
        start = self.pos
        chunks: List[str] = []

        while True:
            if self.pos >= len(text):
                chunks.append(text[start:self.pos])
                self.error = ParseErrorCode.UNEXPECTED_END_OF_STRING
                break

            ch = text[self.pos]
            if ch == '"':
                chunks.append(text[start:self.pos])
                self.pos += 1
                break

            if ch == "\\":
                chunks.append(text[start:self.pos])
                self.pos += 1
                if self.pos >= len(text):
                    self.error = ParseErrorCode.UNEXPECTED_END_OF_STRING
                    break
                escape = text[self.pos]
                self.pos += 1
                if escape in _SIMPLE_ESCAPES:
                    chunks.append(_SIMPLE_ESCAPES[escape])
                elif escape == "u":
                    hex_match = _HEX4_RE.match(text, self.pos)
                    if hex_match:
                        chunks.append(chr(int(hex_match.group(), 16)))
                        self.pos = hex_match.end()
                    else:
                        self.error = ParseErrorCode.INVALID_UNICODE
                else:
                    self.error = ParseErrorCode.INVALID_ESCAPE_CHARACTER
                start = self.pos
                continue

            if ch in "\r\n":
                # Strings cannot span lines; stop before the break.
                chunks.append(text[start:self.pos])
                self.error = ParseErrorCode.UNEXPECTED_END_OF_STRING
                break

            if ord(ch) < 0x20:
                self.error = ParseErrorCode.INVALID_CHARACTER
            self.pos += 1

        self.value = _join_surrogates("".join(chunks))
        return _Token.STRING

    def _scan_comment(self) -> _Token:
        text = self.text
        nxt = text[self.pos + 1] if self.pos + 1 < len(text) else ""

        if nxt == "/":
            self.pos += 2
            while self.pos < len(text) and text[self.pos] not in "\r\n":
                self.pos += 1
            return _Token.LINE_COMMENT

        if nxt == "*":
            close = text.find("*/", self.pos + 2)
            if close < 0:
                self.pos = len(text)
                self.error = ParseErrorCode.UNEXPECTED_END_OF_COMMENT
            else:
                self.pos = close + 2
            return _Token.BLOCK_COMMENT

        self.pos += 1
        self.value = "/"
        return _Token.UNKNOWN

    def _scan_number(self) -> _Token:
        text = self.text
        if text[self.pos] == "-":
            self.pos += 1
            if not _DIGITS_RE.match(text, self.pos):
                self.value = "-"
                return _Token.UNKNOWN

        if text[self.pos] == "0":
            self.pos += 1
        else:
            self.pos = _DIGITS_RE.match(text, self.pos).end()

        if self.pos < len(text) and text[self.pos] == ".":
            self.pos += 1
            digits = _DIGITS_RE.match(text, self.pos)
            if not digits:
                self.error = ParseErrorCode.UNEXPECTED_END_OF_NUMBER
                self.value = text[self.token_offset:self.pos]
                return _Token.NUMBER
            self.pos = digits.end()

        if self.pos < len(text) and text[self.pos] in "eE":
            self.pos += 1
            if self.pos < len(text) and text[self.pos] in "+-":
                self.pos += 1
            digits = _DIGITS_RE.match(text, self.pos)
            if not digits:
                self.error = ParseErrorCode.UNEXPECTED_END_OF_NUMBER
            else:
                self.pos = digits.end()

        self.value = text[self.token_offset:self.pos]
        return _Token.NUMBER


class _TreeBuilder:
    def __init__(self, text: str, options: ParseOptions):
        self._scanner = _Scanner(text)
        self._options = options
        self._consumed_end = 0
        self.errors: List[ParseError] = []

    @property
    def _token(self) -> _Token:
        return self._scanner.token

    def parse(self) -> Optional[ParseNode]:
        if self._scan_next() is _Token.EOF:
            if not self._options.allow_empty_content:
                self._record(ParseErrorCode.VALUE_EXPECTED)
            return None

        root = self._parse_value()
        if root is None:
            self._handle_error(ParseErrorCode.VALUE_EXPECTED)
        elif self._token is not _Token.EOF:
            self._handle_error(ParseErrorCode.END_OF_FILE_EXPECTED)
        return root

    def _scan_next(self) -> _Token:
        self._consumed_end = self._scanner.pos
        while True:
            token = self._scanner.scan()
            if self._scanner.error is not None:
                self._record(self._scanner.error)

            if token in (_Token.LINE_COMMENT, _Token.BLOCK_COMMENT):
                if self._options.disallow_comments:
                    self._record(ParseErrorCode.INVALID_COMMENT_TOKEN)
                continue
            if token is _Token.UNKNOWN:
                self._record(ParseErrorCode.INVALID_SYMBOL)
                continue
            if token in (_Token.TRIVIA, _Token.LINE_BREAK):
                continue
            return token

    def _record(self, code: ParseErrorCode) -> None:
        self.errors.append(ParseError(code, self._scanner.token_offset, self._scanner.token_length))

    def _handle_error(
        self,
        code: ParseErrorCode,
        skip_until_after: Sequence[_Token] = (),
        skip_until: Sequence[_Token] = (),
    ) -> None:
        self._record(code)
        if not skip_until_after and not skip_until:
            return
        token = self._token
        while token is not _Token.EOF:
            if token in skip_until_after:
                self._scan_next()
                break
            if token in skip_until:
                break
            token = self._scan_next()

    def _leaf(self, node_type: NodeType, value: Any) -> ParseNode:
        return ParseNode(
            type=node_type,
            offset=self._scanner.token_offset,
            length=self._scanner.token_length,
            value=value,
        )

    def _parse_value(self) -> Optional[ParseNode]:
        token = self._token
        if token is _Token.OPEN_BRACE:
            return self._parse_object()
        if token is _Token.OPEN_BRACKET:
            return self._parse_array()

        if token is _Token.STRING:
            node = self._leaf(NodeType.STRING, self._scanner.value)
        elif token is _Token.NUMBER:
            node = self._leaf(NodeType.NUMBER, self._number_value(self._scanner.value))
        elif token is _Token.TRUE:
            node = self._leaf(NodeType.BOOLEAN, True)
        elif token is _Token.FALSE:
            node = self._leaf(NodeType.BOOLEAN, False)
        elif token is _Token.NULL:
            node = self._leaf(NodeType.NULL, None)
        else:
            return None

        self._scan_next()
        return node

    def _number_value(self, raw: str) -> Any:
        try:
            if any(c in raw for c in ".eE"):
                return float(raw)
            return int(raw)
        except ValueError:
            self._record(ParseErrorCode.INVALID_NUMBER_FORMAT)
            return 0

    def _close(self, node: ParseNode, closing: _Token, code: ParseErrorCode) -> ParseNode:
        if self._token is closing:
            node.length = self._scanner.pos - node.offset
            self._scan_next()
        else:
            self._handle_error(code, skip_until_after=(closing,))
            node.length = max(self._consumed_end - node.offset, 1)
        return node

    def _parse_object(self) -> ParseNode:
        node = ParseNode(type=NodeType.OBJECT, offset=self._scanner.token_offset)
        self._scan_next()
        needs_comma = False

        while self._token not in (_Token.CLOSE_BRACE, _Token.EOF):
            if self._token is _Token.COMMA:
                if not needs_comma:
                    self._handle_error(ParseErrorCode.VALUE_EXPECTED)
                self._scan_next()
                if self._token is _Token.CLOSE_BRACE:
                    if not self._options.allow_trailing_comma:
                        self._record(ParseErrorCode.PROPERTY_NAME_EXPECTED)
                    break
            elif needs_comma:
                self._handle_error(ParseErrorCode.COMMA_EXPECTED)

            self._parse_property(node)
            needs_comma = True

        return self._close(node, _Token.CLOSE_BRACE, ParseErrorCode.CLOSE_BRACE_EXPECTED)

    def _parse_property(self, node: ParseNode) -> None:
        recover = (_Token.CLOSE_BRACE, _Token.COMMA)
        if self._token is not _Token.STRING:
            self._handle_error(ParseErrorCode.PROPERTY_NAME_EXPECTED, skip_until=recover)
            return

        key = self._leaf(NodeType.STRING, self._scanner.value)
        self._scan_next()

        if self._token is not _Token.COLON:
            self._handle_error(ParseErrorCode.COLON_EXPECTED, skip_until=recover)
            return

        self._scan_next()
        value = self._parse_value()
        if value is None:
            self._handle_error(ParseErrorCode.VALUE_EXPECTED, skip_until=recover)
            return
        node.children.extend((key, value))

    def _parse_array(self) -> ParseNode:
        node = ParseNode(type=NodeType.ARRAY, offset=self._scanner.token_offset)
        self._scan_next()
        needs_comma = False

        while self._token not in (_Token.CLOSE_BRACKET, _Token.EOF):
            if self._token is _Token.COMMA:
                if not needs_comma:
                    self._handle_error(ParseErrorCode.VALUE_EXPECTED)
                self._scan_next()
                if self._token is _Token.CLOSE_BRACKET:
                    if not self._options.allow_trailing_comma:
                        self._record(ParseErrorCode.VALUE_EXPECTED)
                    break
            elif needs_comma:
                self._handle_error(ParseErrorCode.COMMA_EXPECTED)

            value = self._parse_value()
            if value is None:
                self._handle_error(
                    ParseErrorCode.VALUE_EXPECTED,
                    skip_until=(_Token.CLOSE_BRACKET, _Token.COMMA),
                )
            else:
                node.children.append(value)
            needs_comma = True

        return self._close(node, _Token.CLOSE_BRACKET, ParseErrorCode.CLOSE_BRACKET_EXPECTED)


def parse_tree(text: str, options: Optional[ParseOptions] = None) -> Tuple[Optional[ParseNode], List[ParseError]]:
    """Parse ``text`` into a position-annotated tree.

    Nesting is parsed recursively, so documents nested deeper than roughly
    half of ``sys.getrecursionlimit()`` raise ``RecursionError``.
    :func:`~json_source_validator.validation.validator.validate_json` reports
    that as a single ``Parse error`` issue.

    Args:
        text: JSON source text
        options: Grammar relaxations; defaults to ``ParseOptions()``

    Returns:
        ``(tree, errors)``. ``tree`` is ``None`` when no value could be parsed
        at all, in which case ``errors`` is not empty unless empty content is
        allowed.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    builder = _TreeBuilder(text, options or ParseOptions())
    tree = builder.parse()
    if builder.errors:
        logger.debug(f"Parsed {len(text)} characters with {len(builder.errors)} syntax error(s)")
    return tree, builder.errors


def node_value(node: Optional[ParseNode]) -> Any:
    """Dematerialize a parse tree into plain dicts, lists and scalars.

    When a key occurs more than once in an object, the last value wins.
    """
    if node is None:
        return None

    if node.type is NodeType.OBJECT:
        result: Dict[str, Any] = {}
        children = node.children
        for idx in range(0, len(children) - 1, 2):
            result[children[idx].value] = node_value(children[idx + 1])
        return result

    if node.type is NodeType.ARRAY:
        return [node_value(child) for child in node.children]

    return node.value
