from collections.abc import Iterable
from typing import IO

from tilecracker.aseprite.palette import format_palette

from .tiles import TileSet, format_tile


def render_block(
    tag: str,
    lines: Iterable[tuple[int, str]],
    stream: IO[str] | None = None,
) -> None:
    print(f'// <{tag}>', file=stream)
    for idx, line in lines:
        print(f'// {idx:03d}:{line}', file=stream)
    print(f'// </{tag}>', file=stream)
    print(file=stream)


def render_palette(table: bytes, stream: IO[str] | None = None) -> None:
    render_block('PALETTE', [(0, format_palette(table))], stream=stream)


def render_tiles(tiles: TileSet, stream: IO[str] | None = None) -> None:
    render_block(
        'TILES',
        ((tile_id, format_tile(block)) for tile_id, block in tiles),
        stream=stream,
    )


def render_map(rows: Iterable[str], stream: IO[str] | None = None) -> None:
    render_block('MAP', enumerate(rows), stream=stream)
