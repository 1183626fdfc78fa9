from operator import index as _index


def normalize_index(i: int, n: int) -> int:
    if n < 0:
        raise ValueError(f"length must be >= 0, got {n}")
    i = _index(i)
    if i < 0:
        i += n
    if i < 0 or i >= n:
        raise IndexError(f"index {i} out of range for length {n}")
    return i


def check_byte(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"byte value must be int, got {type(value).__name__}")
    if not (0 <= value <= 0xFF):
        raise ValueError(f"byte value must be in [0, 256), got {value}")
    return value


def as_byte_view(obj) -> memoryview:
    """
    Return a flat unsigned-byte view over any buffer-protocol object without copying.

    `Buffer` instances are unwrapped to their own view first.
    """
    to_memoryview = getattr(obj, "to_memoryview", None)
    if to_memoryview is not None:
        return to_memoryview()
    if isinstance(obj, str):
        raise TypeError("str is not bytes-like; encode it first")
    try:
        view = memoryview(obj)
    except TypeError:
        raise TypeError(f"a bytes-like object is required, not {type(obj).__name__}") from None
    if view.format != "B" or view.ndim != 1:
        if not view.c_contiguous:
            raise TypeError("non-contiguous buffers cannot be viewed as bytes")
        view = view.cast("B")
    return view
