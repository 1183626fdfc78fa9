from dataclasses import dataclass
from logging import getLogger
from typing import Optional, Union
from weakref import WeakValueDictionary

from nanobytes.core.buffer import Buffer
from nanobytes.utils import as_byte_view, check_byte, normalize_index

logger = getLogger(__name__)


@dataclass(eq=False, repr=False)
class ByteStr(Buffer):
    """
    A borrowed, zero-copy view over bytes owned by someone else.

    The view wraps a flat unsigned-byte `memoryview`, so slicing and in-place writes
    go straight to the source object. While the view is alive the source cannot be
    resized (`bytearray` raises `BufferError`); call `release()` or use the view as a
    context manager to end the borrow early.

    >>> data = bytearray(b"hello\\n")
    >>> with ByteStr.new_mut(data) as view:
    ...     view[0] = ord("H")
    ...     repr(view)
    'b"Hello\\\\n"'
    >>> data
    bytearray(b'Hello\\n')
    """

    data: memoryview

    def __post_init__(self):
        if not isinstance(self.data, memoryview):
            raise TypeError(f"`ByteStr` wraps a memoryview, got {type(self.data).__name__}")
        if self.data.format != "B" or self.data.ndim != 1:
            raise ValueError(
                f"`ByteStr` needs a 1-D unsigned byte view, got format={self.data.format!r} ndim={self.data.ndim}"
            )
        self._released = False
        self._borrows: Optional[WeakValueDictionary] = None

    @classmethod
    def new(cls, obj) -> "ByteStr":
        view = cls(as_byte_view(obj).toreadonly())
        if isinstance(obj, ByteStr):
            obj._track(view)
        return view

    @classmethod
    def new_mut(cls, obj) -> "ByteStr":
        view = as_byte_view(obj)
        if view.readonly:
            raise TypeError(f"cannot borrow read-only {type(obj).__name__} mutably")
        out = cls(memoryview(view))
        if isinstance(obj, ByteStr):
            obj._track(out)
        return out

    @classmethod
    def from_memoryview(cls, data: memoryview) -> "ByteStr":
        return cls(as_byte_view(data))

    @classmethod
    def empty(cls) -> "ByteStr":
        return cls(memoryview(b""))

    @property
    def readonly(self) -> bool:
        return self.data.readonly

    @property
    def released(self) -> bool:
        return self._released

    def _track(self, view: "ByteStr") -> "ByteStr":
        # views derived from a borrowed view keep the owner borrowed
        if self._borrows is not None:
            view._borrows = self._borrows
            self._borrows[id(view)] = view
        return view

    def to_memoryview(self) -> memoryview:
        return self.data

    def __getitem__(self, key: Union[int, slice]):
        if isinstance(key, int):
            return self.data[normalize_index(key, len(self.data))]

        if isinstance(key, slice):
            return self._track(ByteStr(self.data[key]))

        raise TypeError(f"Invalid index type: {type(key).__name__}")

    def __setitem__(self, key: Union[int, slice], value):
        if self.data.readonly:
            raise TypeError("`ByteStr` view is read-only")

        if isinstance(key, int):
            self.data[normalize_index(key, len(self.data))] = check_byte(value)
            return

        if isinstance(key, slice):
            source = as_byte_view(value)
            start, stop, step = key.indices(len(self.data))
            target_length = len(range(start, stop, step))
            if len(source) != target_length:
                raise ValueError(
                    f"`ByteStr` cannot be resized: slice has {target_length} bytes, value has {len(source)}"
                )
            self.data[key] = source
            return

        raise TypeError(f"Invalid index type: {type(key).__name__}")

    def slice(self, offset: int, length: int) -> "ByteStr":
        if offset < 0 or length < 0 or offset + length > len(self.data):
            raise ValueError("slice out of bounds")
        return self._track(ByteStr(self.data[offset:offset + length]))

    def release(self) -> None:
        self.data.release()
        self._released = True
        logger.debug("Released `ByteStr` view")

    def __enter__(self) -> "ByteStr":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()
