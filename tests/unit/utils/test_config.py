"""
Test cases for parse and serialize configuration.
"""

import dataclasses
import logging
import unittest

from jsondrip.utils.config import (
    AbandonPolicy,
    ErrorReporting,
    ParseConfig,
    ParseLimits,
    SerializeConfig,
)


class TestParseLimits(unittest.TestCase):
    """Test limit construction."""

    def test_defaults(self):
        """Default limits are generous but finite."""
        limits = ParseLimits()
        self.assertEqual(limits.max_nesting_depth, 100)
        self.assertEqual(limits.max_string_length, 1024 * 1024)
        self.assertEqual(limits.max_number_length, 100)

    def test_partial_override(self):
        """Unspecified limits keep their defaults."""
        limits = ParseLimits(max_nesting_depth=3, max_string_length=10)
        self.assertEqual(limits.max_nesting_depth, 3)
        self.assertEqual(limits.max_string_length, 10)
        self.assertEqual(limits.max_array_items, 100000)

    def test_children_limit_by_composite(self):
        """Objects and arrays look up their own child limit."""
        limits = ParseLimits(max_object_keys=7, max_array_items=9)
        self.assertEqual(limits.max_children("object"), 7)
        self.assertEqual(limits.max_children("array"), 9)

    def test_limits_are_immutable(self):
        """Limits shared between configs cannot be changed in place."""
        limits = ParseLimits()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            limits.max_nesting_depth = 1

    def test_invalid_limits(self):
        """Every limit must be positive."""
        for name in ("max_nesting_depth", "max_number_length", "max_total_items"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError) as cm:
                    ParseLimits(**{name: 0})
                self.assertIn(name, str(cm.exception))


class TestParseConfig(unittest.TestCase):
    """Test parser configuration."""

    def test_defaults(self):
        """Missing groups are filled in."""
        config = ParseConfig()
        self.assertIsInstance(config.limits, ParseLimits)
        self.assertTrue(config.include_context)
        self.assertEqual(config.max_error_context, 50)
        self.assertIs(config.abandoned_child, AbandonPolicy.RAISE)
        self.assertIsNone(config.logger)

    def test_custom_values(self):
        """Explicit values are kept."""
        logger = logging.getLogger("jsondrip.tests.config")
        config = ParseConfig(
            error_reporting=ErrorReporting(include_context=False, max_error_context=10),
            buffer_size=16,
            abandoned_child=AbandonPolicy.SKIP,
            logger=logger,
        )
        self.assertFalse(config.include_context)
        self.assertEqual(config.max_error_context, 10)
        self.assertEqual(config.buffer_size, 16)
        self.assertIs(config.logger, logger)

    def test_invalid_buffer_size(self):
        """The read chunk size must be positive."""
        with self.assertRaises(ValueError):
            ParseConfig(buffer_size=0)


class TestSerializeConfig(unittest.TestCase):
    """Test serializer configuration."""

    def test_defaults(self):
        """Compact output with ': ' after keys by default."""
        config = SerializeConfig()
        self.assertEqual(config.indent, 0)
        self.assertEqual(config.key_separator, ": ")

    def test_negative_indent(self):
        """Negative indents are rejected."""
        with self.assertRaises(ValueError):
            SerializeConfig(indent=-2)


if __name__ == '__main__':
    unittest.main()
