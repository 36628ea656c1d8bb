"""
Resource accounting for one streamed document.

A LimitValidator belongs to a single Lexer. Depth follows the lexer's
ownership stack, and the value count covers everything parsed from that
input, so every check happens at the position where the limit is crossed.
"""

from typing import TYPE_CHECKING

from ..utils.config import ParseLimits
from .exceptions import SecurityError

if TYPE_CHECKING:
    from ..core.tokenizer import Position

_CHILD_NOUNS = {"object": "keys", "array": "items"}


class LimitValidator:
    """Checks a document against ParseLimits as it streams through."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits
        self.depth = 0
        self.values_seen = 0

    def check_string(self, length: int, start: "Position") -> None:
        """Fail once a string literal starting at ``start`` grows too long."""
        if length > self.limits.max_string_length:
            raise SecurityError(
                f"String longer than {self.limits.max_string_length} characters",
                start,
            )

    def check_number(self, length: int, start: "Position") -> None:
        """Fail once a number lexeme starting at ``start`` grows too long."""
        if length > self.limits.max_number_length:
            raise SecurityError(
                f"Number longer than {self.limits.max_number_length} characters",
                start,
            )

    def open_composite(self, structure_type: str, position: "Position") -> None:
        """Account for a newly opened object or array."""
        if self.depth >= self.limits.max_nesting_depth:
            raise SecurityError(
                f"Opening {structure_type} would nest deeper than "
                f"{self.limits.max_nesting_depth} levels",
                position,
            )
        self.depth += 1

    def close_composite(self) -> None:
        self.depth -= 1

    def check_children(
        self, structure_type: str, count: int, position: "Position"
    ) -> None:
        """Fail when one composite yields more children than allowed."""
        limit = self.limits.max_children(structure_type)
        if count > limit:
            raise SecurityError(
                f"{structure_type.capitalize()} has more than {limit} "
                f"{_CHILD_NOUNS[structure_type]}",
                position,
            )

    def count_value(self, position: "Position") -> None:
        """Count one more value toward the document total."""
        self.values_seen += 1
        if self.values_seen > self.limits.max_total_items:
            raise SecurityError(
                f"Document has more than {self.limits.max_total_items} values",
                position,
            )
