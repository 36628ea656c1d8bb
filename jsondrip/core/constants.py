"""
Common constants and mappings used across the jsondrip library.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokenizer import TokenType

WHITESPACE = " \t\n\r\v\f"
DIGITS = "0123456789"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def get_structural_token_map() -> dict[str, "TokenType"]:
    """Get the mapping of single-character tokens to TokenType enums."""
    # Import here to avoid circular imports
    from .tokenizer import TokenType  # pylint: disable=import-outside-toplevel

    return {
        "{": TokenType.OBJECT_BEGIN,
        "}": TokenType.OBJECT_END,
        "[": TokenType.ARRAY_BEGIN,
        "]": TokenType.ARRAY_END,
        ",": TokenType.COMMA,
        ":": TokenType.COLON,
    }
