"""Build small aseprite files in memory."""

import struct
import zlib
from collections.abc import Sequence

FILE_HEADER = struct.Struct('<I5HIH8xB3xH2B2h2H84x')
FRAME_HEADER = struct.Struct('<I3H2xI')
CHUNK_HEADER = struct.Struct('<IH')
CEL_INFO = struct.Struct('<H2hBHh5x')

LAYER = 0x2004
CEL = 0x2005
PALETTE = 0x2019
OLD_PALETTE = 0x0004
TAGS = 0x2018


def file_header(
    width: int,
    height: int,
    *,
    magic: int = 0xA5E0,
    color_depth: int = 8,
    num_colors: int = 16,
) -> bytes:
    return FILE_HEADER.pack(
        0, magic, 1, width, height, color_depth, 1, 100, 0, num_colors, 1, 1, 0, 0, 16, 16
    )


def chunk(tag: int, body: bytes) -> bytes:
    return CHUNK_HEADER.pack(CHUNK_HEADER.size + len(body), tag) + body


def frame(chunks: Sequence[bytes], *, magic: int = 0xF1FA) -> bytes:
    body = b''.join(chunks)
    return FRAME_HEADER.pack(
        FRAME_HEADER.size + len(body), magic, len(chunks), 100, len(chunks)
    ) + body


def sprite(width: int, height: int, chunks: Sequence[bytes], **kwargs) -> bytes:
    frame_magic = kwargs.pop('frame_magic', 0xF1FA)
    return file_header(width, height, **kwargs) + frame(chunks, magic=frame_magic)


def layer(*, visible: bool = True, layer_type: int = 0, name: bytes = b'Layer') -> bytes:
    flags = 1 | 2 if visible else 2
    body = struct.pack('<2H', flags, layer_type)
    # child level, default width/height, blend mode, opacity
    body += struct.pack('<4HB3x', 0, 0, 0, 0, 255)
    body += struct.pack('<H', len(name)) + name
    return chunk(LAYER, body)


def pixels_bytes(rows: Sequence[Sequence[int]]) -> bytes:
    return b''.join(bytes(row) for row in rows)


def cel(
    layer_index: int,
    rows: Sequence[Sequence[int]],
    *,
    x: int = 0,
    y: int = 0,
    cel_type: int = 2,
    payload: bytes | None = None,
) -> bytes:
    height = len(rows)
    width = len(rows[0]) if rows else 0
    data = pixels_bytes(rows)
    if payload is None:
        payload = zlib.compress(data) if cel_type == 2 else data
    body = CEL_INFO.pack(layer_index, x, y, 255, cel_type, 0)
    body += struct.pack('<2H', width, height) + payload
    return chunk(CEL, body)


def solid(width: int, height: int, color: int) -> list[list[int]]:
    return [[color] * width for _ in range(height)]


def palette(
    colors: Sequence[tuple[int, int, int]],
    names: dict[int, bytes] | None = None,
) -> bytes:
    names = names or {}
    body = struct.pack('<3I8x', len(colors), 0, max(len(colors) - 1, 0))
    for idx, (red, green, blue) in enumerate(colors):
        name = names.get(idx)
        body += struct.pack('<H4B', 1 if name is not None else 0, red, green, blue, 255)
        if name is not None:
            body += struct.pack('<H', len(name)) + name
    return chunk(PALETTE, body)
