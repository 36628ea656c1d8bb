"""
Streaming functionality demonstration for jsondrip.
"""

import io
import sys

import jsondrip
from jsondrip import ParseConfig, ParseLimits


def main():
    print("jsondrip - Streaming Features Demo")
    print("=" * 40)

    # Example 1: Re-indent a binary stream without loading it
    print("\n1. Transcoding a Binary Stream")
    source = io.BytesIO(b'{"name": "sensor-7", "readings": [20.5, 21, 19.75], "tags": []}')
    jsondrip.transcode(source, sys.stdout, indent=2, config=ParseConfig(buffer_size=16))

    # Example 2: Read only the part of a document you need
    print("\n2. Partial Consumption")
    document = jsondrip.parse(
        '{"header": {"version": 3, "rows": 2}, "rows": [[1, 2], [3, 4]], "footer": "end"}'
    )
    key, header = next(document)
    print(f"✓ {key}: {jsondrip.materialize(header)}")

    key, rows = next(document)
    first_row = next(rows)
    print(f"✓ first of {key}: {list(first_row)}")
    rows.skip()
    print(f"✓ skipped the remaining rows: {rows!r}")
    print(f"✓ next pair: {next(document)}")

    # Example 3: Limits are enforced while the document streams
    print("\n3. Streaming Limits")
    config = ParseConfig(limits=ParseLimits(max_array_items=3))
    numbers = jsondrip.parse("[1, 2, 3, 4, 5]", config)
    try:
        for number in numbers:
            print(f"  got {number}")
    except jsondrip.SecurityError as e:
        print(f"✗ {e}")

    # Example 4: Errors point at the offending input
    print("\n4. Error Reporting")
    try:
        jsondrip.loads('{"a": 1, "b" 2}')
    except jsondrip.ParseError as e:
        print(f"✗ {e.reason.name}")
        print(e)

    print("\n" + "=" * 40)
    print("Streaming demo completed!")


if __name__ == "__main__":
    main()
