import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import IO

from tilecracker.kernel.chunk import Chunk
from tilecracker.kernel.preset import Preset, aseprite
from tilecracker.tic.tiles import TileSet

from .cel import CEL_INFO, CelCompositor
from .header import (
    FRAME_HEADER,
    FileHeader,
    FrameHeader,
    read_frame_header,
    read_header,
)
from .layer import LayerRegistry
from .palette import read_palette
from .schema import ChunkType, chunk_name

logger = logging.getLogger(__name__)

PaletteCallback = Callable[[bytes], None]


@dataclass
class SpriteDocument:
    header: FileHeader
    frame: FrameHeader
    layers: LayerRegistry
    tiles: TileSet
    palette: bytes | None = None

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height


def frame_chunks(cfg: Preset, stream: IO[bytes], frame: FrameHeader) -> Iterator[Chunk]:
    return cfg.read_chunks(stream, frame.frame_bytes - FRAME_HEADER.size)


def read_document(
    cfg: Preset,
    stream: IO[bytes],
    on_palette: PaletteCallback | None = None,
) -> SpriteDocument:
    """Parse the first frame of an aseprite file into tiles and layer maps.

    `on_palette` is called with each palette table as soon as it is read,
    before the rest of the frame is parsed.
    """
    header = read_header(cfg, stream)
    frame = read_frame_header(stream)

    size = cfg.tile_size
    doc = SpriteDocument(
        header=header,
        frame=frame,
        layers=LayerRegistry((header.height // size, header.width // size)),
        tiles=TileSet(cfg.max_tiles),
    )
    compositor = CelCompositor(cfg, header.width, header.height, doc.tiles)

    for chunk in frame_chunks(cfg, stream, frame):
        if chunk.tag == ChunkType.PALETTE:
            doc.palette = read_palette(stream)
            if on_palette:
                on_palette(doc.palette)
        elif chunk.tag == ChunkType.LAYER:
            doc.layers.read(stream)
        elif chunk.tag == ChunkType.CEL:
            cel = CEL_INFO.unpack(stream)
            target = doc.layers.get(cel.layer_index)
            if target is None:
                logger.debug(f'skipping cel of hidden layer {cel.layer_index}')
                continue
            compositor.composite(stream, chunk.end, cel, target)
        else:
            logger.debug(f'skipping {chunk_name(chunk.tag)} chunk')

    return doc


def from_path(
    path: str | os.PathLike[str],
    cfg: Preset = aseprite,
    on_palette: PaletteCallback | None = None,
) -> SpriteDocument:
    with open(path, 'rb') as stream:
        return read_document(cfg, stream, on_palette=on_palette)


def list_chunks(cfg: Preset, stream: IO[bytes]) -> Iterator[Chunk]:
    read_header(cfg, stream)
    frame = read_frame_header(stream)
    yield from frame_chunks(cfg, stream, frame)


def render_chunks(chunks: Iterator[Chunk], stream: IO[str] | None = None) -> None:
    print('<FRAME index="0">', file=stream)
    for chunk in chunks:
        print(
            f'    <{chunk_name(chunk.tag)} offset="0x{chunk.offset:x}" '
            f'size="{chunk.size}" />',
            file=stream,
        )
    print('</FRAME>', file=stream)
