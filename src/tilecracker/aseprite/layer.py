import struct
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO

import numpy as np
from numpy.typing import NDArray

from tilecracker.kernel.structured import StructuredTuple

from .schema import LayerFlags, LayerType

TileIndexBuffer = NDArray[np.uint8]


@dataclass(frozen=True)
class LayerInfo:
    flags: int
    type: int

    @property
    def visible(self) -> bool:
        return bool(self.flags & LayerFlags.VISIBLE)

    @property
    def valid(self) -> bool:
        return self.type == LayerType.NORMAL and self.visible


# rest of the layer chunk (blend mode, opacity, name, ...) is not needed
LAYER_INFO = StructuredTuple(
    ('flags', 'type'),
    struct.Struct('<2H'),
    LayerInfo,
)


class LayerRegistry:
    """Layers of the first frame, in document order.

    Every layer chunk takes an index, as cels refer to layers by it, but only
    visible normal layers get a tile index buffer.
    """

    __slots__ = ('shape', 'count', '_buffers')

    def __init__(self, shape: tuple[int, int]) -> None:
        self.shape = shape
        self.count = 0
        self._buffers: dict[int, TileIndexBuffer] = {}

    def register(self, info: LayerInfo) -> int:
        index = self.count
        if info.valid:
            self._buffers[index] = np.zeros(self.shape, dtype=np.uint8)
        self.count += 1
        return index

    def read(self, stream: IO[bytes]) -> int:
        return self.register(LAYER_INFO.unpack(stream))

    def get(self, index: int) -> TileIndexBuffer | None:
        return self._buffers.get(index)

    def __contains__(self, index: object) -> bool:
        return index in self._buffers

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self) -> Iterator[TileIndexBuffer]:
        return iter(self._buffers.values())

    def indices(self) -> list[int]:
        return list(self._buffers)
