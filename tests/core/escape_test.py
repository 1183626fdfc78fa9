import ast
import io
from array import array

import pytest

from nanobytes.core.byte_str import ByteStr
from nanobytes.core.byte_string import ByteString
from nanobytes.core.escape import (
    ESCAPE_TABLE,
    escape_bytes,
    format_debug,
    format_display,
    write_debug,
    write_display,
)

ALL_BYTES = (
    'b"'
    "\\x00\\x01\\x02\\x03\\x04\\x05\\x06\\x07\\x08\\t\\n\\x0b\\x0c\\r\\x0e\\x0f"
    "\\x10\\x11\\x12\\x13\\x14\\x15\\x16\\x17\\x18\\x19\\x1a\\x1b\\x1c\\x1d\\x1e\\x1f"
    " !\\\"#$%&\\'()*+,-./"
    "0123456789:;<=>?"
    "@ABCDEFGHIJKLMNO"
    "PQRSTUVWXYZ[\\\\]^_"
    "`abcdefghijklmno"
    "pqrstuvwxyz{|}~\\x7f"
    "\\x80\\x81\\x82\\x83\\x84\\x85\\x86\\x87\\x88\\x89\\x8a\\x8b\\x8c\\x8d\\x8e\\x8f"
    "\\x90\\x91\\x92\\x93\\x94\\x95\\x96\\x97\\x98\\x99\\x9a\\x9b\\x9c\\x9d\\x9e\\x9f"
    "\\xa0\\xa1\\xa2\\xa3\\xa4\\xa5\\xa6\\xa7\\xa8\\xa9\\xaa\\xab\\xac\\xad\\xae\\xaf"
    "\\xb0\\xb1\\xb2\\xb3\\xb4\\xb5\\xb6\\xb7\\xb8\\xb9\\xba\\xbb\\xbc\\xbd\\xbe\\xbf"
    "\\xc0\\xc1\\xc2\\xc3\\xc4\\xc5\\xc6\\xc7\\xc8\\xc9\\xca\\xcb\\xcc\\xcd\\xce\\xcf"
    "\\xd0\\xd1\\xd2\\xd3\\xd4\\xd5\\xd6\\xd7\\xd8\\xd9\\xda\\xdb\\xdc\\xdd\\xde\\xdf"
    "\\xe0\\xe1\\xe2\\xe3\\xe4\\xe5\\xe6\\xe7\\xe8\\xe9\\xea\\xeb\\xec\\xed\\xee\\xef"
    "\\xf0\\xf1\\xf2\\xf3\\xf4\\xf5\\xf6\\xf7\\xf8\\xf9\\xfa\\xfb\\xfc\\xfd\\xfe\\xff"
    '"'
)

SAMPLES = [
    b"",
    b"Hello, world!",
    b'a"b',
    b"it's",
    b"C:\\path\\to",
    b"\x00\x01\x7f\x80\xff",
    b"line 1\nline 2\r\n\tindented",
    "h\u00e9llo \u2603".encode("utf-8"),
    bytes(range(256)),
]


def test_empty():
    assert format_debug(b"") == 'b""'
    assert format_display(b"") == ""


def test_hello_world():
    assert format_debug(b"Hello, world!") == 'b"Hello, world!"'
    assert format_display(b"Hello, world!") == "Hello, world!"


def test_double_quote_is_escaped():
    assert format_debug(b'a"b') == 'b"a\\"b"'


def test_single_quote_and_backslash_are_escaped():
    assert format_display(b"'") == "\\'"
    assert format_display(b"\\") == "\\\\"


def test_nul_byte_hex_escape():
    assert "\\x00" in format_debug(b"a\x00b")
    assert format_display(b"\x00") == "\\x00"


def test_common_control_escapes_take_precedence():
    out = format_debug(b"a\nb\rc\td")
    assert out == 'b"a\\nb\\rc\\td"'
    assert "\n" not in out
    assert "\\x0a" not in out


def test_space_is_literal_and_del_is_escaped():
    assert format_display(b" ") == " "
    assert format_display(b"~\x7f") == "~\\x7f"


def test_high_bytes_use_lowercase_hex():
    assert format_display(b"\xab\xcd\xef") == "\\xab\\xcd\\xef"


def test_all_bytes_reference():
    assert format_debug(bytes(range(256))) == ALL_BYTES


def test_table_covers_every_byte():
    assert sorted(ESCAPE_TABLE) == list(range(256))
    for i, text in ESCAPE_TABLE.items():
        assert 1 <= len(text) <= 4, i


@pytest.mark.parametrize("data", SAMPLES)
def test_debug_output_evaluates_back_to_input(data):
    assert ast.literal_eval(format_debug(data)) == data


@pytest.mark.parametrize("data", SAMPLES)
def test_display_is_debug_without_delimiters(data):
    debug = format_debug(data)
    assert debug.startswith('b"') and debug.endswith('"')
    assert format_display(data) == debug[2:-1]


@pytest.mark.parametrize("data", SAMPLES)
def test_output_is_printable_ascii(data):
    out = format_debug(data)
    assert all(0x20 <= ord(c) < 0x7F for c in out)


def test_deterministic():
    data = bytes(range(256)) * 3
    assert format_debug(data) == format_debug(bytes(data))
    assert escape_bytes(data) == escape_bytes(bytearray(data))


def test_accepts_bytes_like_and_wrappers():
    expected = 'b"ab\\n"'
    assert format_debug(bytearray(b"ab\n")) == expected
    assert format_debug(memoryview(b"ab\n")) == expected
    assert format_debug(array("B", b"ab\n")) == expected
    assert format_debug(ByteStr.new(b"ab\n")) == expected
    assert format_debug(ByteString(b"ab\n")) == expected


def test_strided_view():
    view = memoryview(b"a-b-c")[::2]
    assert format_display(view) == "abc"


def test_rejects_str_and_non_bytes():
    with pytest.raises(TypeError):
        format_debug("text")
    with pytest.raises(TypeError):
        format_debug(42)


def test_write_to_text_sink():
    sink = io.StringIO()
    write_debug(b"x\x00", sink)
    sink.write(" | ")
    write_display(b"x\x00", sink)
    assert sink.getvalue() == 'b"x\\x00" | x\\x00'
