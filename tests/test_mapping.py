import numpy as np
import pytest

from tilecracker.errors import MapCapacityError
from tilecracker.tic.mapping import (
    count_rows,
    encode_cell,
    encode_map,
    encode_row,
    layers_per_row,
)


def layer_map(rows: int, cols: int, fill: int = 0) -> np.ndarray:
    return np.full((rows, cols), fill, dtype=np.uint8)


@pytest.mark.parametrize(
    ('tile_id', 'cell'),
    [(0, '00'), (1, '10'), (15, 'f0'), (16, '01'), (33, '12'), (255, 'ff')],
)
def test_encode_cell(tile_id, cell):
    assert encode_cell(tile_id) == cell


@pytest.mark.parametrize(
    ('width', 'capacity'),
    [(8, 240), (240, 8), (960, 2), (1000, 1), (1920, 1)],
)
def test_layers_per_row(cfg, width, capacity):
    assert layers_per_row(cfg, width) == capacity


def test_wider_than_map(cfg):
    with pytest.raises(MapCapacityError, match='does not fit'):
        layers_per_row(cfg, 1928)


def test_single_tile_document(cfg):
    (line,) = encode_map(cfg, [layer_map(1, 1, 1)], 8, 8)
    assert len(line) == 480
    assert line == '10' + '0' * 478


def test_encode_row_order(cfg):
    first = np.array([[1, 2], [3, 4]], dtype=np.uint8)
    second = np.array([[17, 18], [19, 20]], dtype=np.uint8)
    assert encode_row([first, second], 1, 12) == '3040' + '3141' + '0000'


def test_groups_of_layers(cfg):
    layers = [layer_map(2, 120, n) for n in (1, 2, 3)]
    rows = list(encode_map(cfg, layers, 960, 16))
    assert len(rows) == 4
    assert rows[0] == '10' * 120 + '20' * 120
    assert rows[1] == rows[0]
    assert rows[2] == '30' * 120 + '0' * 240
    assert rows[3] == rows[2]
    assert all(len(row) == 480 for row in rows)


def test_no_layers(cfg):
    assert list(encode_map(cfg, [], 16, 16)) == []


def test_count_rows(cfg):
    assert count_rows(cfg, 3, 960, 16) == 4
    assert count_rows(cfg, 0, 960, 16) == 0
    assert count_rows(cfg, 240, 8, 8) == 1


def test_too_many_rows_warns(cfg, caplog):
    layers = [layer_map(137, 1)]
    rows = list(encode_map(cfg, layers, 8, 137 * 8))
    assert len(rows) == 137
    assert 'map needs 137 rows' in caplog.text


def test_too_many_rows_strict(cfg):
    layers = [layer_map(137, 1)]
    with pytest.raises(MapCapacityError, match='map needs 137 rows'):
        list(encode_map(cfg(errors='strict'), layers, 8, 137 * 8))
