import struct
import zlib
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO

import numpy as np
from numpy.typing import NDArray

from tilecracker.errors import CelBoundsError, DecompressionError
from tilecracker.kernel.preset import ConverterSettings
from tilecracker.kernel.structured import StructuredTuple, read_exact
from tilecracker.tic.tiles import TileSet

from .layer import TileIndexBuffer
from .schema import CelType


@dataclass(frozen=True)
class CelInfo:
    layer_index: int
    x: int
    y: int
    opacity: int
    type: int
    z_index: int


@dataclass(frozen=True)
class CelSize:
    width: int
    height: int


CEL_INFO = StructuredTuple(
    ('layer_index', 'x', 'y', 'opacity', 'type', 'z_index'),
    struct.Struct('<H2hBHh5x'),
    CelInfo,
)

CEL_SIZE = StructuredTuple(
    ('width', 'height'),
    struct.Struct('<2H'),
    CelSize,
)


def decompress_cel(data: bytes, width: int, height: int) -> NDArray[np.uint8]:
    size = width * height
    pixels = b''
    if size:
        try:
            # max_length=0 would mean unbounded
            pixels = zlib.decompressobj().decompress(data, size)
        except zlib.error as exc:
            raise DecompressionError(f'malformed cel data: {exc}') from exc
    if len(pixels) != size:
        raise DecompressionError(
            f'cel data too short: got {len(pixels)} pixels, expected {size}'
        )
    return np.frombuffer(pixels, dtype=np.uint8).reshape(height, width)


class CelCompositor:
    """Paste cels on a document sized canvas and cut it to tiles."""

    __slots__ = ('cfg', 'canvas', 'tiles')

    def __init__(
        self,
        cfg: ConverterSettings,
        width: int,
        height: int,
        tiles: TileSet,
    ) -> None:
        self.cfg = cfg
        self.canvas = np.zeros((height, width), dtype=np.uint8)
        self.tiles = tiles

    def check_bounds(self, cel: CelInfo, width: int, height: int) -> None:
        canvas_height, canvas_width = self.canvas.shape
        if (
            cel.x < 0
            or cel.y < 0
            or cel.x + width > canvas_width
            or cel.y + height > canvas_height
        ):
            raise CelBoundsError(
                cel.layer_index,
                (cel.x, cel.y, width, height),
                (canvas_width, canvas_height),
            )

    def paste(self, cel: CelInfo, pixels: NDArray[np.uint8]) -> None:
        height, width = pixels.shape
        self.check_bounds(cel, width, height)
        self.canvas.fill(0)
        self.canvas[cel.y : cel.y + height, cel.x : cel.x + width] = pixels

    def blocks(self) -> Iterator[tuple[int, int, bytes]]:
        size = self.cfg.tile_size
        rows, cols = (dim // size for dim in self.canvas.shape)
        grid = self.canvas.reshape(rows, size, cols, size).swapaxes(1, 2)
        for row in range(rows):
            for col in range(cols):
                yield row, col, grid[row, col].tobytes()

    def slice_into(self, target: TileIndexBuffer) -> None:
        for row, col, block in self.blocks():
            target[row, col] = self.tiles.intern(block)

    def composite(
        self,
        stream: IO[bytes],
        end: int,
        cel: CelInfo,
        target: TileIndexBuffer,
    ) -> bool:
        """Read the cel payload up to `end` and write its tiles to `target`.

        Returns False for cel types that carry no compressed image.
        """
        if cel.type != CelType.COMPRESSED:
            self.cfg.logger.warning(
                f'skipping cel of layer {cel.layer_index}: '
                f'unsupported cel type {cel.type}'
            )
            return False
        size = CEL_SIZE.unpack(stream)
        self.check_bounds(cel, size.width, size.height)
        data = read_exact(stream, max(end - stream.tell(), 0))
        pixels = decompress_cel(data, size.width, size.height)
        self.paste(cel, pixels)
        self.slice_into(target)
        return True
