#!/usr/bin/env python3
"""
Pure Python tests for the incremental JSON object scanner.

Run: python3 tests/test_json_scanner.py

No external dependencies required beyond the project itself.
"""

import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from streaming.scanner import JsonObjectScanner


GEMINI_STREAM = (
    '{"candidates":[{"content":{"parts":[{"text":"Hel'
    + 'lo"}]}}]}{"candidates":[{"content":{"parts":[{"text":" world"}]}}]}'
)


def scan_in_pieces(text: str, cuts: list) -> list:
    """Feed text split at the given offsets, collect all objects."""
    scanner = JsonObjectScanner()
    objects = []
    last = 0
    for cut in cuts + [len(text)]:
        objects.extend(scanner.feed(text[last:cut]))
        last = cut
    return objects


def test_single_feed_concatenated_objects():
    print("=" * 60)
    print("TEST: Concatenated objects in one feed")
    print("=" * 60)

    objects = scan_in_pieces(GEMINI_STREAM, [])

    assert len(objects) == 2
    assert json.loads(objects[0])["candidates"][0]["content"]["parts"][0]["text"] == "Hello"
    assert json.loads(objects[1])["candidates"][0]["content"]["parts"][0]["text"] == " world"

    print("  ✅ PASSED\n")


def test_every_split_point_gives_same_objects():
    """
    Test: one cut at every offset, including inside string literals
    """
    print("=" * 60)
    print("TEST: Split at every byte offset")
    print("=" * 60)

    expected = scan_in_pieces(GEMINI_STREAM, [])
    for cut in range(len(GEMINI_STREAM) + 1):
        assert scan_in_pieces(GEMINI_STREAM, [cut]) == expected, f"cut at {cut}"

    print(f"  checked {len(GEMINI_STREAM) + 1} split points")
    print("  ✅ PASSED\n")


def test_two_split_points_give_same_objects():
    expected = scan_in_pieces(GEMINI_STREAM, [])
    step = 3
    for first in range(0, len(GEMINI_STREAM), step):
        for second in range(first, len(GEMINI_STREAM), step):
            assert scan_in_pieces(GEMINI_STREAM, [first, second]) == expected


def test_one_character_at_a_time():
    scanner = JsonObjectScanner()
    objects = []
    for char in GEMINI_STREAM:
        objects.extend(scanner.feed(char))
    assert objects == scan_in_pieces(GEMINI_STREAM, [])


def test_braces_inside_strings_are_ignored():
    text = '{"text":"a } b { c"}{"text":"}}}"}'
    objects = scan_in_pieces(text, [5])
    assert objects == ['{"text":"a } b { c"}', '{"text":"}}}"}']


def test_escaped_quotes_do_not_end_string():
    text = r'{"text":"say \"}\" now"}'
    objects = scan_in_pieces(text, [])
    assert objects == [text]
    assert json.loads(objects[0])["text"] == 'say "}" now'


def test_escaped_backslash_before_quote_ends_string():
    # "\\" is a complete escape, so the following quote closes the string
    text = r'{"text":"dir\\"}{"text":"next"}'
    objects = scan_in_pieces(text, [])
    assert len(objects) == 2
    assert json.loads(objects[0])["text"] == "dir\\"
    assert json.loads(objects[1])["text"] == "next"


def test_escape_split_across_feeds():
    text = r'{"text":"a\"}b"}'
    cut = text.index("\\") + 1  # feed ends right after the backslash
    assert scan_in_pieces(text, [cut]) == [text]


def test_nested_objects_return_only_top_level():
    text = '{"a":{"b":{"c":1}},"d":[{"e":2}]}'
    assert scan_in_pieces(text, [4, 12]) == [text]


def test_array_wrapper_and_separators_skipped():
    text = '[{"n":1}\n,\r\n{"n":2}\n]'
    objects = scan_in_pieces(text, [3])
    assert [json.loads(o)["n"] for o in objects] == [1, 2]


def test_stray_closing_brace_skipped():
    text = '{"n":1}}  }{"n":2}'
    objects = scan_in_pieces(text, [])
    assert [json.loads(o)["n"] for o in objects] == [1, 2]


def test_pending_holds_only_incomplete_object():
    scanner = JsonObjectScanner()
    assert scanner.feed('junk {"n":1} more {"n":') == ['{"n":1}']
    assert scanner.pending == '{"n":'
    assert scanner.feed("2}") == ['{"n":2}']
    assert scanner.pending == ""


def test_no_object_yet_keeps_nothing():
    scanner = JsonObjectScanner()
    assert scanner.feed("[\n ,") == []
    assert scanner.pending == ""


if __name__ == "__main__":
    test_single_feed_concatenated_objects()
    test_every_split_point_gives_same_objects()
    test_two_split_points_give_same_objects()
    test_one_character_at_a_time()
    test_braces_inside_strings_are_ignored()
    test_escaped_quotes_do_not_end_string()
    test_escaped_backslash_before_quote_ends_string()
    test_escape_split_across_feeds()
    test_nested_objects_return_only_top_level()
    test_array_wrapper_and_separators_skipped()
    test_stray_closing_brace_skipped()
    test_pending_holds_only_incomplete_object()
    test_no_object_yet_keeps_nothing()
    print("All scanner tests passed.")
