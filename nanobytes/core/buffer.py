from abc import ABC, abstractmethod
from operator import index as _index
from typing import Iterator, Optional

from nanobytes.core.escape import format_debug, format_display
from nanobytes.utils import as_byte_view, normalize_index


class Buffer(ABC):
    """
    Shared behavior of `ByteStr` and `ByteString`.

    Subclasses only say where their bytes live (`to_memoryview`) and how item access
    behaves. Comparison, hashing and formatting are all derived from the content,
    so a `ByteStr`, a `ByteString` and a plain `bytes` with the same content are
    equal to each other and hash the same.
    """

    @abstractmethod
    def to_memoryview(self) -> memoryview:
        raise NotImplementedError

    @abstractmethod
    def __getitem__(self, key):
        raise NotImplementedError

    def __buffer__(self, flags: int) -> memoryview:
        return memoryview(self.to_memoryview())

    def __len__(self) -> int:
        return len(self.to_memoryview())

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_memoryview())

    def __contains__(self, item) -> bool:
        if isinstance(item, int):
            value = _index(item)
            if not (0 <= value <= 0xFF):
                raise ValueError(f"byte must be in range(0, 256), got {value}")
            return value in self.to_memoryview()
        return self.to_bytes().find(bytes(as_byte_view(item))) != -1

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def byte_at(self, i: int) -> int:
        view = self.to_memoryview()
        return view[normalize_index(i, len(view))]

    def to_bytes(self) -> bytes:
        return self.to_memoryview().tobytes()

    def startswith(self, prefix) -> bool:
        return self.to_bytes().startswith(bytes(as_byte_view(prefix)))

    def endswith(self, suffix) -> bool:
        return self.to_bytes().endswith(bytes(as_byte_view(suffix)))

    @staticmethod
    def _coerce(other) -> Optional[memoryview]:
        if isinstance(other, (Buffer, bytes, bytearray, memoryview)):
            return as_byte_view(other)
        return None

    def __eq__(self, other):
        view = self._coerce(other)
        if view is None:
            return NotImplemented
        return self.to_memoryview() == view

    def __ne__(self, other):
        view = self._coerce(other)
        if view is None:
            return NotImplemented
        return self.to_memoryview() != view

    def __lt__(self, other):
        view = self._coerce(other)
        if view is None:
            return NotImplemented
        return self.to_bytes() < view.tobytes()

    def __le__(self, other):
        view = self._coerce(other)
        if view is None:
            return NotImplemented
        return self.to_bytes() <= view.tobytes()

    def __gt__(self, other):
        view = self._coerce(other)
        if view is None:
            return NotImplemented
        return self.to_bytes() > view.tobytes()

    def __ge__(self, other):
        view = self._coerce(other)
        if view is None:
            return NotImplemented
        return self.to_bytes() >= view.tobytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return format_debug(self.to_memoryview())

    def __str__(self) -> str:
        return format_display(self.to_memoryview())

    def __format__(self, format_spec: str) -> str:
        if format_spec == "":
            return str(self)
        if format_spec == "r":
            return repr(self)
        raise ValueError(f"Unknown format code '{format_spec}' for object of type '{type(self).__name__}'")
