import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO, ClassVar, Protocol, Self, TypedDict, cast

import numpy as np

from tilecracker.errors import ChunkError
from tilecracker.kernel.structured import read_exact


class HeaderDType(Protocol):
    itemsize: ClassVar[int]
    names: ClassVar[tuple[str, str]]

    def tobytes(self) -> bytes: ...


class ChunkHeaderDict(TypedDict):
    tag: int
    size: int


class ChunkHeader:
    __slots__ = ('_header',)
    dtype: ClassVar[type[HeaderDType]]

    def __init__(self, header: HeaderDType) -> None:
        self._header = header

    @classmethod
    def itemsize(cls) -> int:
        return cls.dtype.itemsize

    @classmethod
    def from_buffer(cls, buffer: bytes) -> Self:
        chunk_header = np.frombuffer(buffer, dtype=cls.dtype, count=1)[0]
        return cls(chunk_header)

    @classmethod
    def read(cls, stream: IO[bytes]) -> Self:
        return cls.from_buffer(read_exact(stream, cls.itemsize()))

    def __bytes__(self) -> bytes:
        return self._header.tobytes()

    @property
    def tag(self) -> int:
        return int(cast(ChunkHeaderDict, self._header)['tag'])

    @property
    def size(self) -> int:
        return int(cast(ChunkHeaderDict, self._header)['size'])


class AsepriteChunkHeader(ChunkHeader):
    dtype = cast(
        type[HeaderDType],
        np.dtype(
            [
                ('size', '<u4'),  # chunk size, header included
                ('tag', '<u2'),  # chunk type
            ],
        ),
    )


@dataclass(frozen=True)
class ChunkSettings:
    header_dtype: type[ChunkHeader]
    inclheader: bool = True


@dataclass(frozen=True, slots=True)
class Chunk:
    offset: int
    header: ChunkHeader

    @property
    def tag(self) -> int:
        return self.header.tag

    @property
    def size(self) -> int:
        return self.header.size

    @property
    def end(self) -> int:
        return self.offset + self.size

    def __repr__(self) -> str:
        return f'Chunk<0x{self.tag:04x}>[{self.size}]@0x{self.offset:x}'


def read_chunks(
    cfg: ChunkSettings,
    stream: IO[bytes],
    size: int,
) -> Iterator[Chunk]:
    """Walk `size` bytes of chunks starting at the current stream position.

    Each chunk is yielded with the stream positioned right after its header.
    Whatever the consumer reads (or leaves unread), the stream is moved to
    the end declared by the chunk header before the next chunk is read.
    """
    consumed = 0
    while consumed < size:
        offset = stream.tell()
        chunk = Chunk(offset, cfg.header_dtype.read(stream))
        length = chunk.size if cfg.inclheader else chunk.size + cfg.header_dtype.itemsize()
        if length < cfg.header_dtype.itemsize():
            raise ChunkError(offset, chunk.size)
        getattr(cfg, 'logger', logging).debug(f'reading {chunk!r}')
        yield chunk
        stream.seek(offset + length)
        consumed += length
