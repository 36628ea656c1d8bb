"""
Lexer for jsondrip - turns a character stream into tokens on demand.

The lexer is the shared cursor of a document: every composite stream parsed
from one input pulls from the same Lexer instance, and the lexer records which
composite currently owns it.
"""

import codecs
import io
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import IO, TYPE_CHECKING, Any, NamedTuple, Optional, TextIO, Union

from ..security.exceptions import (
    CursorOwnershipError,
    ErrorReporter,
    ParseError,
    SyntaxReason,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .constants import (
    DIGITS,
    INT64_MAX,
    INT64_MIN,
    WHITESPACE,
    get_structural_token_map,
)

if TYPE_CHECKING:
    from .streams import CompositeStream

logger = logging.getLogger(__name__)

Source = Union[str, bytes, bytearray, IO[str], IO[bytes]]


class TokenType(Enum):
    """Token types for JSON parsing."""

    OBJECT_BEGIN = "OBJECT_BEGIN"
    OBJECT_END = "OBJECT_END"
    ARRAY_BEGIN = "ARRAY_BEGIN"
    ARRAY_END = "ARRAY_END"
    COMMA = "COMMA"
    COLON = "COLON"

    STRING = "STRING"
    NUMBER = "NUMBER"

    END_OF_INPUT = "END_OF_INPUT"


@dataclass
class Position:
    """Position in source text (line and column)."""

    line: int
    column: int


class Token(NamedTuple):
    """Token with type, literal value and position information."""

    type: TokenType
    value: Optional[Union[int, float, str]]
    position: Position


class Mismatch(NamedTuple):
    """Result of try_consume when the next token is of another type."""

    expected: TokenType
    found: TokenType
    position: Position


def open_source(source: Source) -> TextIO:
    """Wrap any supported input in a readable text stream."""
    if isinstance(source, str):
        return io.StringIO(source)
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    if hasattr(source, "read"):
        if isinstance(source.read(0), bytes):
            return codecs.getreader("utf-8")(source)
        return source
    raise ValueError("Input must be a string, bytes or file-like object")


class Lexer:
    """Pull-based lexical analyzer over a chunked character stream."""

    def __init__(
        self,
        source: Source,
        config: Optional[ParseConfig] = None,
        validator: Optional[LimitValidator] = None,
    ) -> None:
        self.config = config or ParseConfig()
        self.stream = open_source(source)
        self.validator = validator or LimitValidator(self.config.limits)
        self.error_reporter = ErrorReporter(self.config.include_context)
        self.logger = self.config.logger or logger

        self.buffer = ""
        self.offset = 0
        self.eof_reached = False
        self.line = 1
        self.column = 1
        self._recent: deque[str] = deque(maxlen=self.config.max_error_context)
        self._owners: list["CompositeStream[Any]"] = []

    # Character level

    def _read_chunk(self) -> str:
        if self.eof_reached:
            return ""

        try:
            chunk = self.stream.read(self.config.buffer_size)
        except UnicodeDecodeError as exc:
            self.eof_reached = True
            raise self.error(
                SyntaxReason.INVALID_ENCODING,
                f"byte {exc.object[exc.start]:#04x} cannot be decoded",
            ) from exc

        if not chunk:
            self.eof_reached = True
            # the incremental decoder holds back an unfinished multi-byte sequence
            if getattr(self.stream, "bytebuffer", b""):
                raise self.error(
                    SyntaxReason.INVALID_ENCODING,
                    "input ends inside a multi-byte sequence",
                )
        return chunk

    def _ensure_buffer(self, min_chars: int) -> bool:
        while len(self.buffer) - self.offset < min_chars and not self.eof_reached:
            chunk = self._read_chunk()
            if not chunk:
                break
            self.buffer = self.buffer[self.offset:] + chunk
            self.offset = 0
        return len(self.buffer) - self.offset >= min_chars

    def peek_char(self, offset: int = 0) -> str:
        """Peek at the character at ``offset`` without consuming it."""
        if not self._ensure_buffer(offset + 1):
            return ""
        return self.buffer[self.offset + offset]

    def advance(self) -> str:
        """Consume and return one character, or "" at end of input."""
        if not self._ensure_buffer(1):
            return ""

        char = self.buffer[self.offset]
        self.offset += 1
        self._track(char)
        return char

    def _track(self, text: str) -> None:
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)
        self._recent.extend(text)

    def skip_whitespace(self) -> None:
        """Skip whitespace characters."""
        while self._ensure_buffer(1) and self.buffer[self.offset] in WHITESPACE:
            self.advance()

    def current_position(self) -> Position:
        """Get current position in the stream."""
        return Position(self.line, self.column)

    # Token level

    def peek_kind(self) -> TokenType:
        """Classify the next token without consuming it."""
        self.skip_whitespace()
        char = self.peek_char()

        if not char:
            return TokenType.END_OF_INPUT

        token_map = get_structural_token_map()
        if char in token_map:
            return token_map[char]
        if char == '"':
            return TokenType.STRING
        if char in DIGITS or char == "-":
            return TokenType.NUMBER

        raise self.error(SyntaxReason.UNEXPECTED_CHARACTER, repr(char))

    def next_token(self) -> Token:
        """Consume and return the next token."""
        kind = self.peek_kind()
        position = self.current_position()

        if kind == TokenType.STRING:
            return Token(kind, self._read_string(position), position)
        if kind == TokenType.NUMBER:
            return Token(kind, self._read_number(position), position)
        if kind != TokenType.END_OF_INPUT:
            self.advance()
        return Token(kind, None, position)

    def try_consume(self, expected: TokenType) -> Union[Token, Mismatch]:
        """Consume the next token only if it is of the ``expected`` type."""
        found = self.peek_kind()
        if found != expected:
            return Mismatch(expected, found, self.current_position())
        return self.next_token()

    def _read_string(self, start: Position) -> str:
        """Read a double-quoted string; backslashes are kept verbatim."""
        self.advance()
        parts: list[str] = []
        length = 0

        while True:
            if not self._ensure_buffer(1):
                raise self.error(SyntaxReason.UNTERMINATED_STRING, position=start)

            end = self.buffer.find('"', self.offset)
            stop = len(self.buffer) if end < 0 else end
            piece = self.buffer[self.offset:stop]
            self.offset = stop
            self._track(piece)
            parts.append(piece)
            length += len(piece)

            self.validator.check_string(length, start)

            if end >= 0:
                self.advance()
                return "".join(parts)

    def _read_number(self, start: Position) -> Union[int, float]:
        """Read an optionally negative decimal number without exponent."""
        lexeme = ""
        has_decimal = False
        has_digit = False

        if self.peek_char() == "-":
            lexeme += self.advance()

        while True:
            char = self.peek_char()
            if char == ".":
                if has_decimal:
                    raise self.error(
                        SyntaxReason.MULTIPLE_DECIMAL_POINTS, position=start
                    )
                has_decimal = True
            elif not char or char not in DIGITS:
                break
            else:
                has_digit = True

            lexeme += self.advance()
            self.validator.check_number(len(lexeme), start)

        if not has_digit:
            raise self.error(SyntaxReason.INVALID_NUMBER, repr(lexeme), start)
        if has_decimal:
            return float(lexeme)

        number = int(lexeme)
        if not INT64_MIN <= number <= INT64_MAX:
            raise self.error(SyntaxReason.NUMBER_OUT_OF_RANGE, lexeme, start)
        return number

    # Errors

    def error(
        self,
        reason: SyntaxReason,
        detail: Optional[str] = None,
        position: Optional[Position] = None,
        suggestions: Optional[list[str]] = None,
    ) -> ParseError:
        """Build a ParseError at the cursor with recent input as context."""
        window = self.config.max_error_context
        self._ensure_buffer(window)
        after = self.buffer[self.offset:self.offset + window]
        return self.error_reporter.create_parse_error(
            reason,
            position or self.current_position(),
            before="".join(self._recent),
            after=after,
            detail=detail,
            extra_suggestions=suggestions,
        )

    # Cursor ownership

    @property
    def owner(self) -> Optional["CompositeStream[Any]"]:
        """The innermost open composite, which alone may pull tokens."""
        return self._owners[-1] if self._owners else None

    @property
    def depth(self) -> int:
        """Number of composites currently open on this cursor."""
        return len(self._owners)

    def claim(self, stream: "CompositeStream[Any]") -> None:
        """Hand the cursor to a newly opened composite."""
        self.validator.open_composite(stream.structure_type, self.current_position())
        self._owners.append(stream)
        self.logger.debug(
            "Opened %s at depth %d", type(stream).__name__, len(self._owners)
        )

    def release(self, stream: "CompositeStream[Any]") -> None:
        """Return the cursor to the parent of a finished composite."""
        if self.owner is not stream:
            raise CursorOwnershipError(
                f"{type(stream).__name__} released a cursor it does not own",
                self.current_position(),
            )
        self._owners.pop()
        self.validator.close_composite()
        self.logger.debug(
            "Closed %s at depth %d", type(stream).__name__, len(self._owners) + 1
        )

    def is_open(self, stream: "CompositeStream[Any]") -> bool:
        """Whether ``stream`` is still on the ownership stack."""
        return any(owner is stream for owner in self._owners)
