"""
jsondrip - streaming JSON that is parsed only as far as it is read.

jsondrip exposes JSON objects and arrays as live, single-pass streams over one
shared cursor. Nothing is parsed until something pulls it, and the serializer
pulls through the same streams, so a document can flow from input to output
without ever being held in memory.

Quick Start:
    import jsondrip

    value = jsondrip.parse('{"a": [1, 2.5, "x"]}')
    for key, child in value:           # pairs are parsed as they are pulled
        print(key, jsondrip.materialize(child))

    # Re-indent a large file with bounded memory
    with open("big.json") as src:
        jsondrip.transcode(src, sys.stdout, indent=2)

    # Eager helpers
    data = jsondrip.loads('[1, 2, 3]')
    text = jsondrip.dumps(data, indent=2)

Limitations: backslash escapes inside strings are not interpreted and numbers
have no exponent form.
"""

from .core.engine import load, loads, materialize, parse, transcode
from .core.serializer import dump, dumps, serialize
from .core.streams import END_OF_SEQUENCE, ArrayStream, CompositeStream, ObjectStream
from .core.values import Value, ValueKind, kind_of
from .security.exceptions import (
    CursorOwnershipError,
    JsonDripError,
    ParseError,
    SecurityError,
    SyntaxReason,
)
from .utils.config import (
    AbandonPolicy,
    ErrorReporting,
    ParseConfig,
    ParseLimits,
    SerializeConfig,
)

__version__ = "0.1.0"
__author__ = "jsondrip contributors"

__all__ = [
    # Parsing and serialization
    "parse", "loads", "load", "materialize", "transcode",
    "serialize", "dumps", "dump",
    # Value model
    "Value", "ValueKind", "kind_of",
    "CompositeStream", "ObjectStream", "ArrayStream", "END_OF_SEQUENCE",
    # Configuration classes
    "ParseConfig", "ParseLimits", "ErrorReporting", "SerializeConfig",
    "AbandonPolicy",
    # Exception classes
    "JsonDripError", "ParseError", "SecurityError", "CursorOwnershipError",
    "SyntaxReason",
]
