import struct
from dataclasses import dataclass
from typing import IO

from tilecracker.errors import ValidationError
from tilecracker.kernel.structured import StructuredTuple, read_exact, read_uint16le

from .schema import PaletteEntryFlags

PALETTE_SLOTS = 16


@dataclass(frozen=True)
class PaletteHeader:
    size: int
    first: int
    last: int


@dataclass(frozen=True)
class PaletteEntry:
    flags: int
    red: int
    green: int
    blue: int
    alpha: int

    @property
    def has_name(self) -> bool:
        return bool(self.flags & PaletteEntryFlags.HAS_NAME)


PALETTE_HEADER = StructuredTuple(
    ('size', 'first', 'last'),
    struct.Struct('<3I8x'),
    PaletteHeader,
)

PALETTE_ENTRY = StructuredTuple(
    ('flags', 'red', 'green', 'blue', 'alpha'),
    struct.Struct('<H4B'),
    PaletteEntry,
)


def read_palette(stream: IO[bytes], slots: int = PALETTE_SLOTS) -> bytes:
    """Read a palette chunk body into a `slots * 3` bytes RGB table.

    All `size` entries are read starting at slot 0, the first/last index
    range is not applied. Slots past the last entry stay black.
    """
    header = PALETTE_HEADER.unpack(stream)
    if header.size > slots:
        raise ValidationError(
            f'palette has {header.size} entries, at most {slots} are supported'
        )
    table = bytearray(3 * slots)
    for idx in range(header.size):
        entry = PALETTE_ENTRY.unpack(stream)
        if entry.has_name:
            read_exact(stream, read_uint16le(stream))
        table[3 * idx : 3 * idx + 3] = bytes((entry.red, entry.green, entry.blue))
    return bytes(table)


def format_palette(table: bytes) -> str:
    return table.hex()
