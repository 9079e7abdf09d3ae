import logging

import pytest

import aseprite_builder as ab
from tilecracker.kernel.preset import aseprite


@pytest.fixture
def cfg():
    return aseprite()


@pytest.fixture
def two_tile_sprite():
    """16x8 sprite, one visible layer, left tile color 1, right tile color 2."""
    rows = [[1] * 8 + [2] * 8 for _ in range(8)]
    return ab.sprite(
        16,
        8,
        [
            ab.palette([(0, 0, 0), (255, 0, 77), (41, 173, 255)]),
            ab.layer(),
            ab.cel(0, rows),
        ],
    )


@pytest.fixture
def sprite_file(tmp_path, two_tile_sprite):
    path = tmp_path / 'sprite.aseprite'
    path.write_bytes(two_tile_sprite)
    return path


@pytest.fixture(autouse=True)
def _propagate_logs(caplog):
    caplog.set_level(logging.DEBUG, logger='tilecracker')
