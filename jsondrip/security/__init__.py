"""
jsondrip Errors and Resource Limits.

This module provides the exception hierarchy and limit validation.
"""

from .exceptions import (
    CursorOwnershipError,
    ErrorReporter,
    JsonDripError,
    ParseError,
    SecurityError,
    SyntaxReason,
)
from .limits import LimitValidator

__all__ = [
    'JsonDripError', 'ParseError', 'SecurityError', 'CursorOwnershipError',
    'SyntaxReason', 'ErrorReporter', 'LimitValidator',
]
