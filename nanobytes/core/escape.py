"""
Escape raw bytes into byte-string literal text.

Every byte maps to a fixed piece of printable ASCII:

    \\t \\n \\r         ->  \\t \\n \\r
    " ' \\             ->  \\" \\' \\\\
    0x20..0x7e         ->  the character itself
    anything else      ->  \\xNN (lowercase hex)

The debug rendering wraps the escaped body as `b"..."`, which is also a valid
Python bytes literal for the same content. The display rendering is the body alone.
"""

from typing import Dict

from nanobytes.utils import as_byte_view

DEBUG_PREFIX = 'b"'
DEBUG_SUFFIX = '"'

_SPECIAL_ESCAPES = {
    ord("\t"): "\\t",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord('"'): '\\"',
    ord("'"): "\\'",
    ord("\\"): "\\\\",
}


def _build_escape_table() -> Dict[int, str]:
    table = {}
    for i in range(256):
        if i in _SPECIAL_ESCAPES:
            table[i] = _SPECIAL_ESCAPES[i]
        elif 0x20 <= i < 0x7F:
            table[i] = chr(i)
        else:
            table[i] = f"\\x{i:02x}"
    return table


ESCAPE_TABLE = _build_escape_table()


def escape_bytes(data) -> str:
    # latin-1 maps each byte to the code point of the same value
    return bytes(as_byte_view(data)).decode("latin-1").translate(ESCAPE_TABLE)


def format_debug(data) -> str:
    return DEBUG_PREFIX + escape_bytes(data) + DEBUG_SUFFIX


def format_display(data) -> str:
    return escape_bytes(data)


def write_debug(data, sink) -> None:
    sink.write(DEBUG_PREFIX)
    sink.write(escape_bytes(data))
    sink.write(DEBUG_SUFFIX)


def write_display(data, sink) -> None:
    sink.write(escape_bytes(data))
