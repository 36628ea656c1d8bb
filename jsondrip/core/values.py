"""
The jsondrip value model.

A Value is one of five kinds. Scalars are plain Python ``int``, ``float`` and
``str``; objects and arrays are live streams over the shared lexer rather than
materialized collections.
"""

from enum import Enum
from typing import Any, Union

from .streams import ArrayStream, ObjectStream

Value = Union[int, float, str, ObjectStream, ArrayStream]


class ValueKind(Enum):
    """The closed set of value kinds."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


def kind_of(value: Any) -> ValueKind:
    """Classify a Value, rejecting anything outside the model."""
    # bool is an int subclass but not part of the model
    if isinstance(value, bool):
        raise TypeError("bool is not a jsondrip value")
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, ObjectStream):
        return ValueKind.OBJECT
    if isinstance(value, ArrayStream):
        return ValueKind.ARRAY
    raise TypeError(f"{type(value).__name__} is not a jsondrip value")


def is_composite(value: Any) -> bool:
    """Whether a value is a live object or array stream."""
    return isinstance(value, (ObjectStream, ArrayStream))
