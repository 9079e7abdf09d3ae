import logging
import struct
from dataclasses import dataclass
from typing import IO

from tilecracker.errors import FrameValidationError, ValidationError
from tilecracker.kernel.preset import ConverterSettings
from tilecracker.kernel.structured import StructuredTuple

from .schema import FILE_MAGIC, FRAME_MAGIC

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileHeader:
    file_size: int
    magic: int
    frames: int
    width: int
    height: int
    color_depth: int
    flags: int
    speed: int
    transparent_index: int
    num_colors: int
    pixel_width: int
    pixel_height: int
    grid_x: int
    grid_y: int
    grid_width: int
    grid_height: int


@dataclass(frozen=True)
class FrameHeader:
    frame_bytes: int
    magic: int
    old_num_chunks: int
    duration: int
    num_chunks: int


FILE_HEADER = StructuredTuple(
    (
        'file_size',
        'magic',
        'frames',
        'width',
        'height',
        'color_depth',
        'flags',
        'speed',
        'transparent_index',
        'num_colors',
        'pixel_width',
        'pixel_height',
        'grid_x',
        'grid_y',
        'grid_width',
        'grid_height',
    ),
    struct.Struct('<I5HIH8xB3xH2B2h2H84x'),
    FileHeader,
)

FRAME_HEADER = StructuredTuple(
    ('frame_bytes', 'magic', 'old_num_chunks', 'duration', 'num_chunks'),
    struct.Struct('<I3H2xI'),
    FrameHeader,
)


def validate_header(cfg: ConverterSettings, header: FileHeader) -> FileHeader:
    if header.magic != FILE_MAGIC:
        raise ValidationError(
            f'bad magic number 0x{header.magic:04x}, is the input an .aseprite file?'
        )
    if header.width > cfg.max_width or header.height > cfg.max_height:
        raise ValidationError(
            f'canvas too large ({header.width}x{header.height}), '
            f'must not exceed {cfg.max_width}x{cfg.max_height}'
        )
    if header.color_depth != cfg.color_depth:
        raise ValidationError(
            f'color depth {header.color_depth} not supported, '
            'only INDEXED color mode is'
        )
    if header.num_colors > cfg.max_colors:
        raise ValidationError(
            f'too many colors ({header.num_colors}), '
            f'must use at most {cfg.max_colors}'
        )
    if header.width % cfg.tile_size or header.height % cfg.tile_size:
        raise ValidationError(
            f'canvas size {header.width}x{header.height} '
            f'must be divisible by {cfg.tile_size}'
        )
    return header


def validate_frame(frame: FrameHeader) -> FrameHeader:
    logger.debug(f'first frame magic 0x{frame.magic:04x}')
    if frame.magic != FRAME_MAGIC:
        raise FrameValidationError(
            'failed to read first frame, check that the file is not corrupted '
            'and has at least 1 frame'
        )
    return frame


def read_header(cfg: ConverterSettings, stream: IO[bytes]) -> FileHeader:
    return validate_header(cfg, FILE_HEADER.unpack(stream))


def read_frame_header(stream: IO[bytes]) -> FrameHeader:
    return validate_frame(FRAME_HEADER.unpack(stream))
