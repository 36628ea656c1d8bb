"""
jsondrip Core Parsing Engine.

This module provides the lexer, the lazy composite streams and the serializer.
"""

from .engine import load, loads, materialize, parse, transcode
from .serializer import dump, dumps, serialize
from .streams import END_OF_SEQUENCE, ArrayStream, CompositeStream, ObjectStream, parse_value
from .tokenizer import Lexer, Mismatch, Position, Token, TokenType
from .values import Value, ValueKind, kind_of

__all__ = [
    'parse', 'loads', 'load', 'materialize', 'transcode',
    'serialize', 'dumps', 'dump',
    'CompositeStream', 'ObjectStream', 'ArrayStream', 'END_OF_SEQUENCE', 'parse_value',
    'Lexer', 'Mismatch', 'Position', 'Token', 'TokenType',
    'Value', 'ValueKind', 'kind_of',
]
