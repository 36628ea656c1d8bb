"""
Configuration and limits for jsondrip parsing and serialization.

This module defines resource limits and configuration options for streaming
JSON parsing.
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ParseLimits:
    """Resource limits applied while a document streams through.

    Nothing is known about the input up front, so each limit is checked when
    the token or child that would exceed it is read. Child limits apply per
    composite; ``max_total_items`` counts every value in the document.
    """

    max_string_length: int = 1024 * 1024
    max_number_length: int = 100
    max_nesting_depth: int = 100
    max_object_keys: int = 10000
    max_array_items: int = 100000
    max_total_items: int = 1000000

    def __post_init__(self) -> None:
        for field in fields(self):
            if getattr(self, field.name) <= 0:
                raise ValueError(f"{field.name} must be positive")

    def max_children(self, structure_type: str) -> int:
        """Per-composite child limit for an "object" or an "array"."""
        if structure_type == "object":
            return self.max_object_keys
        return self.max_array_items


class AbandonPolicy(Enum):
    """What a composite does when a child it produced was left open."""

    RAISE = "raise"
    SKIP = "skip"


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""
    include_context: bool = True
    max_error_context: int = 50


@dataclass
class ParseConfig:
    """Configuration options for jsondrip parsing."""

    limits: Optional[ParseLimits] = None
    error_reporting: Optional[ErrorReporting] = None
    buffer_size: int = 8192
    abandoned_child: AbandonPolicy = AbandonPolicy.RAISE
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = ParseLimits()
        if self.error_reporting is None:
            self.error_reporting = ErrorReporting()
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")

    @property
    def include_context(self) -> bool:
        """Whether errors carry a context excerpt."""
        assert self.error_reporting is not None
        return self.error_reporting.include_context

    @property
    def max_error_context(self) -> int:
        """Characters of recently read text kept for error context."""
        assert self.error_reporting is not None
        return self.error_reporting.max_error_context


@dataclass
class SerializeConfig:
    """Layout options for the serializer."""

    indent: int = 0
    key_separator: str = ": "

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ValueError("indent must not be negative")
