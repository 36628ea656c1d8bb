"""
Exception hierarchy and error reporting for jsondrip.

Every syntax problem surfaces as a ParseError whose ``reason`` names the rule
that was broken, so callers can match on it instead of on message text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.tokenizer import Position


class SyntaxReason(Enum):
    """Distinct, matchable causes of a JSON syntax error."""

    UNEXPECTED_CHARACTER = "unexpected_character"
    UNTERMINATED_STRING = "unterminated_string"
    MULTIPLE_DECIMAL_POINTS = "multiple_decimal_points"
    INVALID_NUMBER = "invalid_number"
    NUMBER_OUT_OF_RANGE = "number_out_of_range"
    EXPECTED_OPENING_BRACE = "expected_opening_brace"
    EXPECTED_OPENING_BRACKET = "expected_opening_bracket"
    EXPECTED_COMMA = "expected_comma"
    EXPECTED_KEY = "expected_key"
    EXPECTED_COLON = "expected_colon"
    EXPECTED_VALUE = "expected_value"
    UNEXPECTED_TOKEN_TYPE = "unexpected_token_type"
    INVALID_ENCODING = "invalid_encoding"


REASON_MESSAGES = {
    SyntaxReason.UNEXPECTED_CHARACTER: "Unexpected character",
    SyntaxReason.UNTERMINATED_STRING: "Unterminated string",
    SyntaxReason.MULTIPLE_DECIMAL_POINTS: "Multiple decimal points in number",
    SyntaxReason.INVALID_NUMBER: "Invalid number",
    SyntaxReason.NUMBER_OUT_OF_RANGE: "Integer out of 64-bit range",
    SyntaxReason.EXPECTED_OPENING_BRACE: "Expected '{'",
    SyntaxReason.EXPECTED_OPENING_BRACKET: "Expected '['",
    SyntaxReason.EXPECTED_COMMA: "Expected ','",
    SyntaxReason.EXPECTED_KEY: "Expected string key",
    SyntaxReason.EXPECTED_COLON: "Expected ':' after key",
    SyntaxReason.EXPECTED_VALUE: "Expected value",
    SyntaxReason.UNEXPECTED_TOKEN_TYPE: "Unexpected token type",
    SyntaxReason.INVALID_ENCODING: "Input is not valid UTF-8",
}


@dataclass
class ErrorContext:
    """Excerpt of the input around an error."""

    text: str
    position: "Position"
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class JsonDripError(Exception):
    """Base exception for all jsondrip errors."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.position is not None:
            parts[0] += f" at line {self.position.line}, column {self.position.column}"

        if self.context is not None:
            parts.append("Context:")
            parts.append(f"  {self.context.line_text}")
            parts.append(f"  {self.context.column_indicator}")

        if self.suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ParseError(JsonDripError):
    """The input violates the JSON grammar."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        reason: Optional[SyntaxReason] = None,
    ):
        self.reason = reason
        super().__init__(message, position, context, suggestions)


class SecurityError(JsonDripError):
    """A configured resource limit was exceeded."""


class CursorOwnershipError(JsonDripError):
    """A composite tried to pull while a nested composite owns the cursor."""


class ErrorSuggestionEngine:
    """Produces short hints for common syntax errors."""

    _SUGGESTIONS = {
        SyntaxReason.UNEXPECTED_CHARACTER: [
            "Remove the stray character or wrap the text in double quotes",
            "Literals such as true, false and null are not supported",
        ],
        SyntaxReason.UNTERMINATED_STRING: [
            "Add the missing closing double quote",
        ],
        SyntaxReason.MULTIPLE_DECIMAL_POINTS: [
            "A number may contain at most one '.'",
        ],
        SyntaxReason.INVALID_NUMBER: [
            "A '-' must be followed by at least one digit",
        ],
        SyntaxReason.NUMBER_OUT_OF_RANGE: [
            "Integers must fit in a signed 64-bit value",
            "Write the number with a '.' to read it as a float",
        ],
        SyntaxReason.EXPECTED_COMMA: [
            "Separate elements with ','",
        ],
        SyntaxReason.EXPECTED_KEY: [
            "Object keys must be double-quoted strings",
            "Remove the trailing ',' before '}'",
        ],
        SyntaxReason.EXPECTED_COLON: [
            "Add ':' between the key and its value",
        ],
        SyntaxReason.EXPECTED_VALUE: [
            "Add a value or remove the trailing ','",
        ],
        SyntaxReason.INVALID_ENCODING: [
            "Save the document as UTF-8 or pass already decoded text",
        ],
    }

    @staticmethod
    def suggest(reason: SyntaxReason) -> list[str]:
        """Return hints for a syntax reason, possibly none."""
        return list(ErrorSuggestionEngine._SUGGESTIONS.get(reason, []))

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        """Return hints for an object or array that never closed."""
        if structure_type == "object":
            return ["Add the missing '}' to close the object"]
        if structure_type == "array":
            return ["Add the missing ']' to close the array"]
        return []


class ErrorReporter:
    """Builds errors with context taken from the lexer's recent text window."""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context

    def build_context(
        self, position: "Position", before: str, after: str
    ) -> ErrorContext:
        """Build an ErrorContext from text just before and after the cursor."""
        line_before = before.rsplit("\n", 1)[-1]
        line_after = after.split("\n", 1)[0]
        return ErrorContext(
            text=before + after,
            position=position,
            context_before=before,
            context_after=after,
            error_char=after[:1],
            line_text=line_before + line_after,
            column_indicator=" " * len(line_before) + "^",
        )

    def create_parse_error(
        self,
        reason: SyntaxReason,
        position: "Position",
        before: str = "",
        after: str = "",
        detail: Optional[str] = None,
        extra_suggestions: Optional[list[str]] = None,
    ) -> ParseError:
        """Create a ParseError for ``reason`` with context and suggestions."""
        message = REASON_MESSAGES[reason]
        if detail:
            message = f"{message}: {detail}"

        context = None
        if self.include_context and (before or after):
            context = self.build_context(position, before, after)

        suggestions = (extra_suggestions or []) + ErrorSuggestionEngine.suggest(reason)
        return ParseError(
            message,
            position,
            context=context,
            suggestions=suggestions,
            reason=reason,
        )
