"""
Test cases for the jsondrip entry points.
"""

import io
import logging
import unittest

import jsondrip
from jsondrip import load, loads, materialize, parse, transcode
from jsondrip.security.exceptions import ParseError, SyntaxReason
from jsondrip.utils.config import ParseConfig


class TestParse(unittest.TestCase):
    """Test lazy parsing of the first value."""

    def test_numeric_discrimination(self):
        """A '.' decides between int and float."""
        self.assertEqual(parse("3"), 3)
        self.assertIs(type(parse("3")), int)
        self.assertEqual(parse("3.0"), 3.0)
        self.assertIs(type(parse("3.0")), float)
        self.assertEqual(parse("-3.5"), -3.5)

    def test_strings(self):
        """Strings parse to str."""
        self.assertEqual(parse('  "hello"  '), "hello")

    def test_trailing_input_is_not_read(self):
        """parse stops after the first value."""
        self.assertEqual(parse("1 garbage"), 1)

    def test_scalar_errors(self):
        """Scalar syntax errors surface from parse itself."""
        test_cases = [
            ('"abc', SyntaxReason.UNTERMINATED_STRING),
            ("1.2.3", SyntaxReason.MULTIPLE_DECIMAL_POINTS),
            ("", SyntaxReason.EXPECTED_VALUE),
            ("}", SyntaxReason.EXPECTED_VALUE),
            (":", SyntaxReason.EXPECTED_VALUE),
            ("x", SyntaxReason.UNEXPECTED_CHARACTER),
        ]
        for text, reason in test_cases:
            with self.subTest(text=text):
                with self.assertRaises(ParseError) as cm:
                    parse(text)
                self.assertEqual(cm.exception.reason, reason)

    def test_composites_are_streams(self):
        """Objects and arrays are returned unparsed."""
        value = parse("[1, 2 3]")
        self.assertIsInstance(value, jsondrip.ArrayStream)
        self.assertEqual(value.count, 0)


class TestEagerHelpers(unittest.TestCase):
    """Test materialize, loads and load."""

    def test_materialize_nested(self):
        """materialize drains everything into plain containers."""
        value = parse('{"a": [1, 2.5, "x"], "b": {"c": []}}')
        self.assertEqual(
            materialize(value), {"a": [1, 2.5, "x"], "b": {"c": []}}
        )
        self.assertTrue(value.done)

    def test_materialize_scalar(self):
        """Scalars materialize to themselves."""
        self.assertEqual(materialize(7), 7)

    def test_duplicate_keys_last_wins(self):
        """Duplicate keys are not detected; the last pair wins."""
        self.assertEqual(loads('{"a": 1, "a": 2}'), {"a": 2})

    def test_loads(self):
        """loads returns plain Python data."""
        self.assertEqual(loads("[[], {}, -1]"), [[], {}, -1])

    def test_loads_rejects_extra_data(self):
        """Anything after the top-level value is an error."""
        with self.assertRaises(ParseError) as cm:
            loads("[1] [2]")
        self.assertEqual(cm.exception.reason, SyntaxReason.UNEXPECTED_TOKEN_TYPE)
        self.assertIn("extra data", str(cm.exception))

        with self.assertRaises(ParseError) as cm:
            loads("[1] x")
        self.assertEqual(cm.exception.reason, SyntaxReason.UNEXPECTED_CHARACTER)

    def test_loads_allows_trailing_whitespace(self):
        """Whitespace after the value is fine."""
        self.assertEqual(loads("  {}  \n"), {})

    def test_load_file_object(self):
        """load reads from a file-like object."""
        self.assertEqual(load(io.StringIO('{"k": "v"}')), {"k": "v"})


class TestTranscode(unittest.TestCase):
    """Test streaming from a source to a sink."""

    def test_reindent(self):
        """transcode re-indents and appends one newline."""
        out = io.StringIO()
        transcode(io.StringIO('{"k": [1, 2]}'), out, 2)
        self.assertEqual(out.getvalue(), '{\n  "k": [\n    1,\n    2\n  ]\n}\n')

    def test_compact(self):
        """indent 0 produces compact output."""
        out = io.StringIO()
        transcode(b"[ 1 , 2 ]", out)
        self.assertEqual(out.getvalue(), "[1,2]\n")

    def test_error_after_partial_output(self):
        """Output already written stays written when a later error occurs."""
        out = io.StringIO()
        with self.assertRaises(ParseError):
            transcode("[1, 2,]", out)
        self.assertEqual(out.getvalue(), "[1,2")

    def test_invalid_utf8_is_a_parse_error(self):
        """Bad bytes surface through the library's own exceptions."""
        with self.assertRaises(jsondrip.JsonDripError):
            parse(b'["\xff"]')

        out = io.StringIO()
        with self.assertRaises(ParseError) as cm:
            transcode(io.BytesIO(b'[1, "\xff"]'), out, config=ParseConfig(buffer_size=3))
        self.assertEqual(cm.exception.reason, SyntaxReason.INVALID_ENCODING)
        self.assertEqual(out.getvalue(), "[1")


class TestLogging(unittest.TestCase):
    """Test debug logging of composite lifecycles."""

    def test_default_logger(self):
        """Composite open and close are logged at DEBUG."""
        with self.assertLogs("jsondrip.core.tokenizer", level="DEBUG") as logs:
            loads("[[1]]")
        output = "\n".join(logs.output)
        self.assertIn("Opened ArrayStream at depth 2", output)
        self.assertIn("Closed ArrayStream at depth 1", output)

    def test_configured_logger(self):
        """A logger passed in ParseConfig receives the records."""
        custom = logging.getLogger("jsondrip.tests.custom")
        with self.assertLogs(custom, level="DEBUG") as logs:
            loads("{}", ParseConfig(logger=custom))
        self.assertTrue(any("ObjectStream" in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
