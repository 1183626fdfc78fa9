from nanobytes.core.buffer import Buffer
from nanobytes.core.byte_str import ByteStr
from nanobytes.core.byte_string import ByteString
from nanobytes.core.escape import (
    escape_bytes,
    format_debug,
    format_display,
    write_debug,
    write_display,
)

__all__ = [
    "Buffer",
    "ByteStr",
    "ByteString",
    "escape_bytes",
    "format_debug",
    "format_display",
    "write_debug",
    "write_display",
]
