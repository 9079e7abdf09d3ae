"""Pack layer tile maps into TIC-80 map rows.

Layers are laid out side by side in the 240 tiles wide map, as many as fit,
then the next group of layers starts below. Each map cell holds the sprite
sheet coordinate of its tile, x then y, one hex digit each.
"""

from collections.abc import Iterator, Sequence

import numpy as np
from numpy.typing import NDArray

from tilecracker.errors import MapCapacityError
from tilecracker.kernel.preset import ConverterSettings

SHEET_COLUMNS = 16


def layers_per_row(cfg: ConverterSettings, width: int) -> int:
    capacity = cfg.map_width * cfg.tile_size // width
    if not capacity:
        raise MapCapacityError(
            f'canvas width {width} does not fit in the '
            f'{cfg.map_width * cfg.tile_size} pixels wide map'
        )
    return capacity


def encode_cell(tile_id: int) -> str:
    return f'{tile_id % SHEET_COLUMNS:x}{tile_id // SHEET_COLUMNS:x}'


def encode_row(
    layers: Sequence[NDArray[np.uint8]],
    row: int,
    line_width: int,
) -> str:
    cells = ''.join(
        encode_cell(tile_id) for layer in layers for tile_id in layer[row].tolist()
    )
    return cells.ljust(line_width, '0')


def count_rows(cfg: ConverterSettings, nlayers: int, width: int, height: int) -> int:
    capacity = layers_per_row(cfg, width)
    groups = -(-nlayers // capacity)
    return groups * (height // cfg.tile_size)


def check_capacity(cfg: ConverterSettings, rows: int) -> None:
    if rows <= cfg.map_height:
        return
    message = f'map needs {rows} rows but TIC-80 map only has {cfg.map_height}'
    if cfg.errors == 'strict':
        raise MapCapacityError(message)
    cfg.logger.warning(message)


def encode_map(
    cfg: ConverterSettings,
    layers: Sequence[NDArray[np.uint8]],
    width: int,
    height: int,
) -> Iterator[str]:
    capacity = layers_per_row(cfg, width)
    check_capacity(cfg, count_rows(cfg, len(layers), width, height))
    line_width = 2 * cfg.map_width
    for start in range(0, len(layers), capacity):
        group = layers[start : start + capacity]
        for row in range(height // cfg.tile_size):
            yield encode_row(group, row, line_width)
