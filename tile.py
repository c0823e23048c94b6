"""8x8 indexed pixel surface with 4bpp planar import/export."""

import numpy as np

from events import Emitter, PixelChanged, TileCleared, TileReplaced

TILE_SIZE = 8
NUM_COLORS = 16
PLANES = 4
PLANAR_SIZE = TILE_SIZE * PLANES  # 32 bytes


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < TILE_SIZE and 0 <= y < TILE_SIZE


def clamp_coord(value: int) -> int:
    """Pin a coordinate to within one tile width of the tile.

    Bounds the work a single line or rectangle can do while still letting
    endpoints sit off the tile.
    """
    return max(-TILE_SIZE, min(2 * TILE_SIZE - 1, value))


class Tile:
    """An 8x8 grid of color indices (0-15).

    Reads outside the grid return 0 and writes outside the grid (or with an
    index above 15) are ignored, so callers never have to range-check.
    Storage is a ``uint8`` array indexed ``[y, x]``.
    """

    def __init__(self):
        self._pixels = np.zeros((TILE_SIZE, TILE_SIZE), dtype=np.uint8)
        self.events = Emitter()

    def get(self, x: int, y: int) -> int:
        if not in_bounds(x, y):
            return 0
        return int(self._pixels[y, x])

    def set(self, x: int, y: int, color: int):
        if not in_bounds(x, y) or not 0 <= color < NUM_COLORS:
            return
        self._pixels[y, x] = color
        self.events.emit(PixelChanged(x, y, color))

    def clear(self):
        self._pixels[:] = 0
        self.events.emit(TileCleared())

    def pixels(self) -> list[list[int]]:
        """Row-major copy of the color indices."""
        return self._pixels.tolist()

    # --- Planar codec ---

    def to_planar(self) -> bytes:
        """Encode as 32 bytes: four 8-byte bit planes, plane 0 = LSB.

        Each byte is one row; bit 7 is the leftmost pixel.
        """
        planes = [np.packbits((self._pixels >> p) & 1, axis=1).ravel()
                  for p in range(PLANES)]
        return np.concatenate(planes).tobytes()

    def load_planar(self, data: bytes):
        """Replace every pixel from a 32-byte planar dump."""
        self._pixels[:] = _decode_planar(data)
        self.events.emit(TileReplaced())

    @classmethod
    def from_planar(cls, data: bytes) -> "Tile":
        tile = cls()
        tile._pixels[:] = _decode_planar(data)
        return tile

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return bool(np.array_equal(self._pixels, other._pixels))

    def __repr__(self) -> str:
        return f"Tile({self.to_planar().hex()})"


def _decode_planar(data: bytes) -> np.ndarray:
    if len(data) != PLANAR_SIZE:
        raise ValueError(f"Planar tile data must be {PLANAR_SIZE} bytes, got {len(data)}")
    raw = np.frombuffer(bytes(data), dtype=np.uint8).reshape(PLANES, TILE_SIZE, 1)
    bits = np.unpackbits(raw, axis=2)  # (plane, row, column)
    pixels = np.zeros((TILE_SIZE, TILE_SIZE), dtype=np.uint8)
    for p in range(PLANES):
        pixels |= bits[p] << p
    return pixels
