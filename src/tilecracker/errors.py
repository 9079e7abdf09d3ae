class TileCrackerError(Exception):
    pass


class ValidationError(TileCrackerError):
    pass


class FrameValidationError(ValidationError):
    pass


class ChunkError(ValidationError):
    def __init__(self, offset: int, size: int) -> None:
        super().__init__(f'invalid chunk size {size} at offset 0x{offset:x}')
        self.offset = offset
        self.size = size


class CelBoundsError(ValidationError):
    def __init__(
        self,
        layer: int,
        box: tuple[int, int, int, int],
        canvas: tuple[int, int],
    ) -> None:
        x, y, width, height = box
        super().__init__(
            f'cel of layer {layer} at ({x}, {y}) sized {width}x{height} '
            f'does not fit in {canvas[0]}x{canvas[1]} canvas'
        )
        self.layer = layer
        self.box = box
        self.canvas = canvas


class MapCapacityError(ValidationError):
    pass


class DecompressionError(TileCrackerError):
    pass


class CapacityExceededError(TileCrackerError):
    def __init__(self, limit: int) -> None:
        super().__init__(f'more than {limit} unique 8x8 tiles')
        self.limit = limit


class ShortReadError(OSError):
    def __init__(self, expected: int, got: int, offset: int | None = None) -> None:
        where = f' at offset 0x{offset:x}' if offset is not None else ''
        super().__init__(f'unexpected end of stream{where}: {got} != {expected}')
        self.expected = expected
        self.got = got
        self.offset = offset
