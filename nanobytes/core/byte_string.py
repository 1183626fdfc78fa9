from contextlib import contextmanager
from logging import getLogger
from typing import Iterable, Iterator, Union
from weakref import WeakValueDictionary

from nanobytes.core.buffer import Buffer
from nanobytes.core.byte_str import ByteStr
from nanobytes.utils import as_byte_view, check_byte, normalize_index

logger = getLogger(__name__)


def _to_chunk(values) -> bytes:
    # copy first so that a view over the target never aliases the write
    try:
        view = as_byte_view(values)
    except TypeError:
        view = None
    if view is None:
        return bytes(check_byte(v) for v in values)
    return view.tobytes()


class ByteString(Buffer):
    """
    An owned, growable byte buffer backed by a private `bytearray`.

    Construction always copies. Views handed out by `as_byte_str()`, `as_byte_str_mut()`
    and `slice()` borrow the storage. Any number of read-only views may be alive at once,
    or a single writable one (plus the views derived from it). While any view is alive,
    every write through the `ByteString` itself raises `BufferError`, so a borrowed view
    never sees its content change underneath it.
    """

    def __init__(self, data=b""):
        self._data = bytearray(_to_chunk(data))
        self._borrows = WeakValueDictionary()

    @classmethod
    def from_iter(cls, values: Iterable[int]) -> "ByteString":
        out = cls()
        out._data = bytearray(check_byte(v) for v in values)
        return out

    def _live_borrows(self):
        return [view for view in self._borrows.values() if not view.released]

    def _refuse(self, op: str, cause=None):
        logger.debug(f"Refused to {op} a {len(self._data)}-byte `ByteString`: views are still borrowed")
        raise BufferError(
            f"cannot {op} `ByteString` while borrowed `ByteStr` views are alive; release them first"
        ) from cause

    def _check_unborrowed(self, op: str) -> None:
        if self._live_borrows():
            self._refuse(op)

    @contextmanager
    def _resizing(self, op: str):
        self._check_unborrowed(op)
        try:
            yield
        except BufferError as e:
            self._refuse(op, e)

    def _borrow(self, view: ByteStr) -> ByteStr:
        view._borrows = self._borrows
        self._borrows[id(view)] = view
        return view

    def to_memoryview(self) -> memoryview:
        return memoryview(self._data)

    def as_byte_str(self) -> ByteStr:
        if any(not view.readonly for view in self._live_borrows()):
            self._refuse("borrow")
        return self._borrow(ByteStr.new(self._data))

    def as_byte_str_mut(self) -> ByteStr:
        self._check_unborrowed("mutably borrow")
        return self._borrow(ByteStr.new_mut(self._data))

    def slice(self, offset: int, length: int) -> ByteStr:
        return self.as_byte_str().slice(offset, length)

    def into_bytearray(self) -> bytearray:
        data, self._data = self._data, bytearray()
        self._borrows = WeakValueDictionary()
        logger.debug(f"Moved {len(data)} bytes out of `ByteString`")
        return data

    def copy(self) -> "ByteString":
        return ByteString(self._data)

    def __copy__(self) -> "ByteString":
        return self.copy()

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def __getitem__(self, key: Union[int, slice]):
        if isinstance(key, int):
            return self._data[normalize_index(key, len(self._data))]

        if isinstance(key, slice):
            return ByteString(self._data[key])

        raise TypeError(f"Invalid index type: {type(key).__name__}")

    def __setitem__(self, key: Union[int, slice], value):
        if isinstance(key, int):
            index = normalize_index(key, len(self._data))
            value = check_byte(value)
            self._check_unborrowed("write to")
            self._data[index] = value
            return

        if isinstance(key, slice):
            chunk = _to_chunk(value)
            with self._resizing("assign to a slice of"):
                self._data[key] = chunk
            return

        raise TypeError(f"Invalid index type: {type(key).__name__}")

    def __delitem__(self, key: Union[int, slice]):
        if isinstance(key, int):
            key = normalize_index(key, len(self._data))
        elif not isinstance(key, slice):
            raise TypeError(f"Invalid index type: {type(key).__name__}")

        with self._resizing("delete from"):
            del self._data[key]

    def append(self, value: int) -> "ByteString":
        value = check_byte(value)
        with self._resizing("append to"):
            self._data.append(value)
        return self

    def extend(self, values) -> "ByteString":
        chunk = _to_chunk(values)
        with self._resizing("extend"):
            self._data.extend(chunk)
        return self

    def __iadd__(self, other):
        return self.extend(other)

    def insert(self, index: int, value: int) -> "ByteString":
        value = check_byte(value)
        with self._resizing("insert into"):
            self._data.insert(index, value)
        return self

    def pop(self, index: int = -1) -> int:
        if not self._data:
            raise IndexError("pop from empty `ByteString`")
        index = normalize_index(index, len(self._data))
        with self._resizing("pop from"):
            return self._data.pop(index)

    def remove(self, value: int) -> "ByteString":
        value = check_byte(value)
        if value not in self._data:
            raise ValueError(f"byte {value} not in `ByteString`")
        with self._resizing("remove from"):
            self._data.remove(value)
        return self

    def reverse(self) -> "ByteString":
        self._check_unborrowed("reverse")
        self._data.reverse()
        return self

    def truncate(self, length: int) -> "ByteString":
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        if length < len(self._data):
            with self._resizing("truncate"):
                del self._data[length:]
        return self

    def resize(self, length: int, fill: int = 0) -> "ByteString":
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        fill = check_byte(fill)
        current = len(self._data)
        if length < current:
            return self.truncate(length)
        if length > current:
            with self._resizing("resize"):
                self._data.extend(bytes([fill]) * (length - current))
        return self

    def clear(self) -> "ByteString":
        with self._resizing("clear"):
            self._data.clear()
        return self
