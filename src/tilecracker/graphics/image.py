import numpy as np
from PIL import Image

from tilecracker.tic.tiles import TileSet

TImage = Image.Image

SHEET_TILES = 16
TILE_SIZE = 8


def convert_to_pil_image(
    pixels: np.ndarray,
    palette: bytes | None = None,
) -> TImage:
    npp = np.ascontiguousarray(pixels, dtype=np.uint8)
    height, width = npp.shape
    im = Image.frombytes('P', (width, height), npp.tobytes())
    if palette:
        im.putpalette(palette)
    return im


def tile_sheet(tiles: TileSet, palette: bytes | None = None) -> TImage:
    """Lay tiles out like the TIC-80 sprite sheet, id n at (n % 16, n // 16)."""
    side = SHEET_TILES * TILE_SIZE
    sheet = np.zeros((side, side), dtype=np.uint8)
    for tile_id, block in tiles:
        y, x = divmod(tile_id, SHEET_TILES)
        sheet[
            y * TILE_SIZE : (y + 1) * TILE_SIZE,
            x * TILE_SIZE : (x + 1) * TILE_SIZE,
        ] = np.frombuffer(block, dtype=np.uint8).reshape(TILE_SIZE, TILE_SIZE)
    return convert_to_pil_image(sheet, palette)
