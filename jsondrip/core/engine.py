"""
Entry points for jsondrip - lazy parsing, eager helpers and transcoding.
"""

from typing import Any, Optional, TextIO

from ..security.exceptions import SyntaxReason
from ..utils.config import ParseConfig, SerializeConfig
from .serializer import dump
from .streams import ArrayStream, ObjectStream, parse_value
from .tokenizer import Lexer, Source, TokenType
from .values import Value


def _open_document(
    source: Source, config: Optional[ParseConfig]
) -> tuple[Lexer, Value]:
    lexer = Lexer(source, config or ParseConfig())
    return lexer, parse_value(lexer)


def parse(source: Source, config: Optional[ParseConfig] = None) -> Value:
    """
    Parse the first value of a JSON document without reading past it.

    Scalars come back as ``int``, ``float`` or ``str``. Objects and arrays come
    back as ObjectStream / ArrayStream, whose children are parsed only when
    pulled.

    Args:
        source: str, bytes, or a text or binary file-like object
        config: Optional ParseConfig for limits, buffering and logging

    Returns:
        The parsed Value

    Raises:
        ParseError: If the input is not valid JSON
        SecurityError: If a configured limit is exceeded
    """
    _, value = _open_document(source, config)
    return value


def materialize(value: Value) -> Any:
    """Drain a Value into plain dicts, lists and scalars."""
    if isinstance(value, ObjectStream):
        return {key: materialize(child) for key, child in value}
    if isinstance(value, ArrayStream):
        return [materialize(child) for child in value]
    return value


def loads(source: Source, config: Optional[ParseConfig] = None) -> Any:
    """
    Parse a whole JSON document into plain Python objects.

    Unlike parse(), this reads to the end of the input and rejects anything
    after the top-level value.
    """
    lexer, value = _open_document(source, config)
    result = materialize(value)

    trailing = lexer.peek_kind()
    if trailing != TokenType.END_OF_INPUT:
        raise lexer.error(
            SyntaxReason.UNEXPECTED_TOKEN_TYPE, f"extra data: {trailing.value}"
        )
    return result


def load(fp: TextIO, config: Optional[ParseConfig] = None) -> Any:
    """Same as loads() but reads from a file-like object in chunks."""
    return loads(fp, config)


def transcode(
    source: Source,
    sink: TextIO,
    indent: int = 0,
    *,
    config: Optional[ParseConfig] = None,
    serialize_config: Optional[SerializeConfig] = None,
) -> None:
    """
    Stream one JSON value from ``source`` to ``sink`` with new indentation.

    Each element is written as soon as it is parsed, so memory use stays
    bounded by nesting depth rather than document size. One newline follows
    the value. Input after the first value is not read.
    """
    lexer, value = _open_document(source, config)
    dump(value, sink, indent, config=serialize_config)
    sink.write("\n")
    lexer.logger.debug("Transcoded document ending at line %d", lexer.line)
