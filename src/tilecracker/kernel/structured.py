import struct
from collections.abc import Callable, Sequence
from typing import IO, Generic, TypeVar

from tilecracker.errors import ShortReadError

T = TypeVar('T')


def read_exact(stream: IO[bytes], size: int) -> bytes:
    offset = stream.tell()
    data = stream.read(size)
    if len(data) != size:
        raise ShortReadError(size, len(data), offset)
    return data


class StructuredTuple(Generic[T]):
    """Fixed-layout binary record.

    Fields are decoded with an explicit `struct` format, so the number of
    bytes consumed is always `struct.size`, no matter the host alignment.
    Formats should start with `<`: multi-byte fields are little-endian.
    """

    __slots__ = ('names', 'struct', 'factory')

    def __init__(
        self,
        names: Sequence[str],
        structure: struct.Struct,
        factory: Callable[..., T],
    ) -> None:
        self.names = tuple(names)
        self.struct = structure
        self.factory = factory

    @property
    def size(self) -> int:
        return self.struct.size

    def unpack_from(self, buffer: bytes, offset: int = 0) -> T:
        values = self.struct.unpack_from(buffer, offset)
        return self.factory(**dict(zip(self.names, values, strict=True)))

    def unpack(self, stream: IO[bytes]) -> T:
        return self.unpack_from(read_exact(stream, self.size))


UINT16LE = struct.Struct('<H')


def read_uint16le(stream: IO[bytes]) -> int:
    return UINT16LE.unpack(read_exact(stream, UINT16LE.size))[0]
