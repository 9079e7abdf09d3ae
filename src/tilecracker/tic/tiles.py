from collections.abc import Iterator

from tilecracker.errors import CapacityExceededError

TILE_BYTES = 8 * 8
MAX_TILES = 255


class TileSet:
    """Unique 8x8 blocks keyed by their pixels.

    Ids start at 1 and follow first-seen order, 0 means "no tile".
    """

    __slots__ = ('limit', '_ids')

    def __init__(self, limit: int = MAX_TILES) -> None:
        self.limit = limit
        self._ids: dict[bytes, int] = {}

    def intern(self, block: bytes) -> int:
        block = bytes(block)
        if len(block) != TILE_BYTES:
            raise ValueError(f'tile must be {TILE_BYTES} bytes, got {len(block)}')
        tile_id = self._ids.get(block)
        if tile_id is None:
            if len(self._ids) >= self.limit:
                raise CapacityExceededError(self.limit)
            tile_id = len(self._ids) + 1
            self._ids[block] = tile_id
        return tile_id

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, block: object) -> bool:
        return block in self._ids

    def __iter__(self) -> Iterator[tuple[int, bytes]]:
        return ((tile_id, block) for block, tile_id in self._ids.items())


def format_tile(block: bytes) -> str:
    return ''.join(f'{px:x}' for px in block)
