import io

import pytest

import aseprite_builder as ab
from tilecracker.aseprite.palette import format_palette, read_palette
from tilecracker.errors import ValidationError


def palette_body(data: bytes) -> io.BytesIO:
    # drop the chunk header
    return io.BytesIO(data[6:])


def test_unused_slots_are_zero():
    table = read_palette(palette_body(ab.palette([(1, 2, 3), (250, 251, 252)])))
    assert len(table) == 48
    assert table[:6] == bytes([1, 2, 3, 250, 251, 252])
    assert table[6:] == bytes(42)


def test_names_are_skipped():
    colors = [(10, 20, 30), (40, 50, 60), (70, 80, 90)]
    stream = palette_body(ab.palette(colors, names={1: b'skin tone'}))
    table = read_palette(stream)
    assert table[:9] == bytes([10, 20, 30, 40, 50, 60, 70, 80, 90])
    assert stream.read() == b''


def test_too_many_entries():
    with pytest.raises(ValidationError, match='palette has 17 entries'):
        read_palette(palette_body(ab.palette([(0, 0, 0)] * 17)))


def test_format_palette():
    table = bytes([0x1A, 0x1C, 0x2C, 0x05]) + bytes(44)
    line = format_palette(table)
    assert len(line) == 96
    assert line.startswith('1a1c2c05')
    assert line == line.lower()
