"""
Tests for streaming behaviour on long and deep documents.
"""

import io
import unittest

from jsondrip import loads, parse, transcode
from jsondrip.utils.config import ParseConfig, ParseLimits


class RecordingSource(io.StringIO):
    """StringIO that counts how many characters have been handed out."""

    def __init__(self, text):
        super().__init__(text)
        self.delivered = 0

    def read(self, size=-1):
        chunk = super().read(size)
        self.delivered += len(chunk)
        return chunk


class RecordingSink(io.StringIO):
    """StringIO that remembers how much input was read before each write."""

    def __init__(self, source):
        super().__init__()
        self.source = source
        self.writes = []

    def write(self, s):
        self.writes.append((s, self.source.delivered))
        return super().write(s)


class TestStreaming(unittest.TestCase):
    """Test that input and output interleave."""

    def test_output_starts_before_input_ends(self):
        """The first element is written long before the input is exhausted."""
        text = "[" + ", ".join(str(i) for i in range(200)) + "]"
        source = RecordingSource(text)
        sink = RecordingSink(source)

        transcode(source, sink, config=ParseConfig(buffer_size=4))

        first_element = next(w for w in sink.writes if w[0] == "0")
        self.assertLess(first_element[1], 16)
        self.assertEqual(source.delivered, len(text))
        self.assertEqual(sink.getvalue(), text.replace(" ", "") + "\n")

    def test_long_array(self):
        """Many elements stream through small buffers."""
        text = "[" + ",".join(str(i) for i in range(5000)) + "]"
        self.assertEqual(loads(text, ParseConfig(buffer_size=7)), list(range(5000)))

    def test_deep_nesting(self):
        """Deep documents work within the configured depth."""
        depth = 200
        text = "[" * depth + "]" * depth
        config = ParseConfig(limits=ParseLimits(max_nesting_depth=depth))
        out = io.StringIO()
        transcode(text, out, config=config)
        self.assertEqual(out.getvalue(), text + "\n")

    def test_partial_consumption_of_large_document(self):
        """Reading the head of a document does not read the tail."""
        text = '{"head": 1, "tail": [' + ",".join(["0"] * 10000) + "]}"
        source = RecordingSource(text)
        value = parse(source, ParseConfig(buffer_size=32))
        self.assertEqual(next(value), ("head", 1))
        self.assertLess(source.delivered, 100)


if __name__ == '__main__':
    unittest.main()
