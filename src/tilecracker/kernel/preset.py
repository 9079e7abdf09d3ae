import logging
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Self

from tilecracker.kernel.chunk import AsepriteChunkHeader, ChunkSettings, read_chunks


@dataclass(frozen=True)
class _DefaultOverride:
    def __call__(self, **kwargs: Any) -> Self:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConverterSettings(ChunkSettings):
    tile_size: int = 8
    color_depth: int = 8
    max_width: int = 15360
    max_height: int = 8704
    max_colors: int = 16
    max_tiles: int = 255
    # TIC-80 map, in tiles
    map_width: int = 240
    map_height: int = 136
    errors: Literal['strict', 'ignore'] = 'ignore'
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger('tilecracker'),
    )


@dataclass(frozen=True)
class Preset(ConverterSettings, _DefaultOverride):
    read_chunks = read_chunks


aseprite = Preset(
    header_dtype=AsepriteChunkHeader,
    inclheader=True,
)
