"""
Lazy object and array streams.

An ObjectStream or ArrayStream is created the moment its opening delimiter is
consumed and parses one child per pull from the lexer it shares with every
other composite of the same document. Children come out in document order,
exactly once. Nested composites must be drained or skipped before their parent
pulls again; the lexer's ownership stack enforces this.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from ..security.exceptions import (
    CursorOwnershipError,
    ErrorSuggestionEngine,
    ParseError,
    SyntaxReason,
)
from ..utils.config import AbandonPolicy
from .tokenizer import Lexer, Mismatch, TokenType

if TYPE_CHECKING:
    from .values import Value

T = TypeVar("T")


class EndOfSequence:
    """Sentinel returned by pull() once a composite has no more children."""

    _instance = None

    def __new__(cls) -> "EndOfSequence":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "END_OF_SEQUENCE"


END_OF_SEQUENCE = EndOfSequence()


class CompositeStream(ABC, Generic[T]):
    """Single-pass, forward-only sequence of children parsed on demand.

    Callers must not advance the same stream from two places at once, and must
    drain or skip() a nested composite before pulling from its parent again.
    """

    opening: TokenType
    closing: TokenType
    missing_opening: SyntaxReason
    structure_type: str

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._first = True
        self._done = False
        self._count = 0
        lexer.claim(self)

    @classmethod
    def open(cls, lexer: Lexer) -> Any:
        """Consume the opening delimiter and return a stream bound to ``lexer``."""
        result = lexer.try_consume(cls.opening)
        if isinstance(result, Mismatch):
            raise lexer.error(cls.missing_opening, f"found {result.found.value}")
        return cls(lexer)

    @property
    def done(self) -> bool:
        """Whether the closing delimiter has been consumed."""
        return self._done

    @property
    def count(self) -> int:
        """Number of children pulled so far."""
        return self._count

    def pull(self) -> Union[T, EndOfSequence]:
        """Parse and return the next child, or END_OF_SEQUENCE."""
        if self._done:
            return END_OF_SEQUENCE

        self._take_cursor()

        if not isinstance(self._lexer.try_consume(self.closing), Mismatch):
            self._finish()
            return END_OF_SEQUENCE

        if not self._first:
            comma = self._lexer.try_consume(TokenType.COMMA)
            if isinstance(comma, Mismatch):
                raise self._mismatch_error(SyntaxReason.EXPECTED_COMMA, comma)
        self._first = False

        child = self._read_child()
        self._count += 1
        self._lexer.validator.check_children(
            self.structure_type, self._count, self._lexer.current_position()
        )
        return child

    def skip(self) -> None:
        """Consume the rest of this composite, nested composites included."""
        if self._done:
            return
        self._take_cursor(force=True)
        skipped = 0
        while True:
            child = self.pull()
            if child is END_OF_SEQUENCE:
                break
            nested = self._value_of(child)  # type: ignore[arg-type]
            if isinstance(nested, CompositeStream):
                nested.skip()
            skipped += 1
        if skipped:
            self._lexer.logger.debug(
                "Skipped %d remaining children of %s", skipped, type(self).__name__
            )

    def __iter__(self) -> "CompositeStream[T]":
        return self

    def __next__(self) -> T:
        child = self.pull()
        if child is END_OF_SEQUENCE:
            raise StopIteration
        return child  # type: ignore[return-value]

    def __copy__(self) -> Any:
        raise TypeError(f"{type(self).__name__} is single-pass and cannot be copied")

    def __deepcopy__(self, memo: Any) -> Any:
        raise TypeError(f"{type(self).__name__} is single-pass and cannot be copied")

    def __repr__(self) -> str:
        state = "done" if self._done else "open"
        return f"<{type(self).__name__} {state}, {self._count} pulled>"

    @abstractmethod
    def _read_child(self) -> T:
        """Parse one child after any separating comma."""

    @abstractmethod
    def _value_of(self, child: T) -> "Value":
        """The Value carried by a child."""

    def _take_cursor(self, force: bool = False) -> None:
        owner = self._lexer.owner
        if owner is self:
            return
        if not self._lexer.is_open(self):
            raise CursorOwnershipError(
                f"{type(self).__name__} is not open on this cursor",
                self._lexer.current_position(),
            )

        policy = self._lexer.config.abandoned_child
        if not force and policy is AbandonPolicy.RAISE:
            raise CursorOwnershipError(
                f"{type(self).__name__} cannot pull while a nested "
                f"{type(owner).__name__} is unfinished; drain it or call skip()",
                self._lexer.current_position(),
            )

        while self._lexer.owner is not self:
            abandoned = self._lexer.owner
            assert abandoned is not None
            self._lexer.logger.debug(
                "Skipping abandoned %s", type(abandoned).__name__
            )
            abandoned.skip()

    def _finish(self) -> None:
        self._done = True
        self._lexer.release(self)

    def _mismatch_error(self, reason: SyntaxReason, mismatch: Mismatch) -> ParseError:
        if mismatch.found == TokenType.END_OF_INPUT:
            return self._lexer.error(
                reason,
                f"input ended inside {self.structure_type}",
                suggestions=ErrorSuggestionEngine.suggest_for_unclosed_structure(
                    self.structure_type
                ),
            )
        return self._lexer.error(reason, f"found {mismatch.found.value}")


class ObjectStream(CompositeStream[tuple[str, "Value"]]):
    """Lazily parsed JSON object yielding ``(key, value)`` pairs."""

    opening = TokenType.OBJECT_BEGIN
    closing = TokenType.OBJECT_END
    missing_opening = SyntaxReason.EXPECTED_OPENING_BRACE
    structure_type = "object"

    def _read_child(self) -> tuple[str, "Value"]:
        key = self._lexer.try_consume(TokenType.STRING)
        if isinstance(key, Mismatch):
            raise self._mismatch_error(SyntaxReason.EXPECTED_KEY, key)

        colon = self._lexer.try_consume(TokenType.COLON)
        if isinstance(colon, Mismatch):
            raise self._mismatch_error(SyntaxReason.EXPECTED_COLON, colon)

        return str(key.value), parse_value(self._lexer)

    def _value_of(self, child: tuple[str, "Value"]) -> "Value":
        return child[1]


class ArrayStream(CompositeStream["Value"]):
    """Lazily parsed JSON array yielding values."""

    opening = TokenType.ARRAY_BEGIN
    closing = TokenType.ARRAY_END
    missing_opening = SyntaxReason.EXPECTED_OPENING_BRACKET
    structure_type = "array"

    def _read_child(self) -> "Value":
        return parse_value(self._lexer)

    def _value_of(self, child: "Value") -> "Value":
        return child


def parse_value(lexer: Lexer) -> "Value":
    """Parse one value; composites are opened, not traversed."""
    kind = lexer.peek_kind()
    lexer.validator.count_value(lexer.current_position())

    if kind in (TokenType.STRING, TokenType.NUMBER):
        token = lexer.next_token()
        if token.value is None:
            raise lexer.error(SyntaxReason.UNEXPECTED_TOKEN_TYPE, kind.value)
        return token.value
    if kind == TokenType.OBJECT_BEGIN:
        return ObjectStream.open(lexer)
    if kind == TokenType.ARRAY_BEGIN:
        return ArrayStream.open(lexer)

    if kind == TokenType.END_OF_INPUT:
        raise lexer.error(SyntaxReason.EXPECTED_VALUE, "input ended")
    raise lexer.error(SyntaxReason.EXPECTED_VALUE, f"found {kind.value}")
