"""Aseprite file format constants.

Only the parts needed to extract the first frame of an indexed sprite are
decoded; see https://github.com/aseprite/aseprite/blob/main/docs/ase-file-specs.md
"""

from enum import IntEnum, IntFlag

FILE_MAGIC = 0xA5E0
FRAME_MAGIC = 0xF1FA


class ChunkType(IntEnum):
    OLD_PALETTE_A = 0x0004
    OLD_PALETTE_B = 0x0011
    LAYER = 0x2004
    CEL = 0x2005
    CEL_EXTRA = 0x2006
    COLOR_PROFILE = 0x2007
    EXTERNAL_FILES = 0x2008
    MASK = 0x2016
    PATH = 0x2017
    TAGS = 0x2018
    PALETTE = 0x2019
    USER_DATA = 0x2020
    SLICES = 0x2022
    TILESET = 0x2023


def chunk_name(tag: int) -> str:
    try:
        return ChunkType(tag).name
    except ValueError:
        return f'UNKNOWN_{tag:04X}'


class LayerType(IntEnum):
    NORMAL = 0
    GROUP = 1
    TILEMAP = 2


class LayerFlags(IntFlag):
    VISIBLE = 1
    EDITABLE = 2
    LOCK_MOVEMENT = 4
    BACKGROUND = 8
    PREFER_LINKED_CELS = 16
    COLLAPSED = 32
    REFERENCE = 64


class CelType(IntEnum):
    RAW = 0
    LINKED = 1
    COMPRESSED = 2
    COMPRESSED_TILEMAP = 3


class PaletteEntryFlags(IntFlag):
    HAS_NAME = 1
