"""
Incremental serializer for jsondrip values.

Serialization pulls children from live streams one at a time and yields text
as soon as each child is rendered, so parsing and output interleave.
"""

import math
from collections.abc import Iterable, Iterator
from decimal import Decimal
from typing import Any, Callable, Optional, TextIO

from ..utils.config import SerializeConfig
from .streams import ArrayStream, ObjectStream
from .values import ValueKind, kind_of


def format_float(value: float) -> str:
    """Shortest round-tripping positional decimal that always contains '.'."""
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"Out of range float values are not supported: {value!r}")

    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


def format_scalar(value: Any) -> str:
    """Render a string, integer or float value."""
    kind = kind_of(value)
    if kind == ValueKind.STRING:
        return f'"{value}"'
    if kind == ValueKind.INTEGER:
        return str(value)
    if kind == ValueKind.FLOAT:
        return format_float(value)
    raise TypeError(f"{kind.value} is not a scalar")


def _newline(config: SerializeConfig, level: int) -> str:
    if not config.indent:
        return ""
    return "\n" + " " * (config.indent * level)


def _serialize_container(
    children: Iterable[Any],
    brackets: tuple[str, str],
    config: SerializeConfig,
    level: int,
    render: Callable[[Any], Iterator[str]],
) -> Iterator[str]:
    opening, closing = brackets
    yield opening

    inner = _newline(config, level + 1)
    separator = ""
    for child in children:
        if separator or inner:
            yield separator + inner
        yield from render(child)
        separator = ","
    # the closing delimiter always starts its own line when indenting
    yield _newline(config, level) + closing


def _serialize(value: Any, config: SerializeConfig, level: int) -> Iterator[str]:
    if isinstance(value, (ObjectStream, dict)):
        pairs = value.items() if isinstance(value, dict) else value

        def render_pair(pair: tuple[str, Any]) -> Iterator[str]:
            key, child = pair
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, not {type(key).__name__}")
            yield f'"{key}"{config.key_separator}'
            yield from _serialize(child, config, level + 1)

        yield from _serialize_container(pairs, ("{", "}"), config, level, render_pair)

    elif isinstance(value, (ArrayStream, list, tuple)):

        def render_element(child: Any) -> Iterator[str]:
            return _serialize(child, config, level + 1)

        yield from _serialize_container(
            value, ("[", "]"), config, level, render_element
        )

    else:
        yield format_scalar(value)


def serialize(
    value: Any, indent: int = 0, *, config: Optional[SerializeConfig] = None
) -> Iterator[str]:
    """Lazily render ``value`` as JSON text chunks.

    Args:
        value: A jsondrip Value, or an already materialized dict/list/tuple
        indent: Spaces per nesting level; 0 renders compactly
        config: Full layout options; takes precedence over ``indent``

    Returns:
        Iterator of text chunks. Streams inside ``value`` are consumed as the
        iterator advances.
    """
    if config is None:
        config = SerializeConfig(indent=indent)
    return _serialize(value, config, 0)


def dumps(
    value: Any, indent: int = 0, *, config: Optional[SerializeConfig] = None
) -> str:
    """Serialize ``value`` to a str."""
    return "".join(serialize(value, indent, config=config))


def dump(
    value: Any,
    fp: TextIO,
    indent: int = 0,
    *,
    config: Optional[SerializeConfig] = None,
) -> None:
    """Serialize ``value`` to a text stream, writing chunks as they are produced."""
    for chunk in serialize(value, indent, config=config):
        fp.write(chunk)
