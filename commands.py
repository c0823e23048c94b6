"""Reversible edit commands for the tile and palette.

Every command records what it is about to overwrite when it is built, not
when it is executed, so ``undo`` can always restore the exact prior state.
The set of commands is closed: SetPixel, Fill, Line, Rectangle and Clear
act on a Tile; SetColor acts on a Palette.
"""

from abc import ABC, abstractmethod

from palette import Color, Palette
from tile import TILE_SIZE, Tile, in_bounds

# (x, y, old_color)
PixelChange = tuple[int, int, int]


class Command(ABC):
    @abstractmethod
    def execute(self):
        ...

    @abstractmethod
    def undo(self):
        ...

    @abstractmethod
    def describe(self) -> str:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.describe()}>"


class _PixelDiffCommand(Command):
    """Paints one color over a captured set of pixels."""

    def __init__(self, tile: Tile, color: int, changes: list[PixelChange]):
        self.tile = tile
        self.color = color
        self.changes: tuple[PixelChange, ...] = tuple(changes)

    def execute(self):
        for x, y, _ in self.changes:
            self.tile.set(x, y, self.color)

    def undo(self):
        for x, y, old in self.changes:
            self.tile.set(x, y, old)


class SetPixel(_PixelDiffCommand):
    def __init__(self, tile: Tile, x: int, y: int, color: int):
        self.x, self.y = x, y
        super().__init__(tile, color, [(x, y, tile.get(x, y))])

    def describe(self) -> str:
        return f"Set pixel ({self.x}, {self.y}) to color {self.color}"


class Fill(_PixelDiffCommand):
    """4-connected flood fill from a seed pixel."""

    def __init__(self, tile: Tile, x: int, y: int, color: int):
        self.x, self.y = x, y
        super().__init__(tile, color, self._capture(tile, x, y, color))

    @staticmethod
    def _capture(tile: Tile, start_x: int, start_y: int, color: int) -> list[PixelChange]:
        target = tile.get(start_x, start_y)
        if target == color:
            return []

        # Explicit stack rather than recursion
        changes = []
        stack = [(start_x, start_y)]
        visited = set()
        while stack:
            x, y = stack.pop()
            if (x, y) in visited:
                continue
            if not in_bounds(x, y):
                continue
            if tile.get(x, y) != target:
                continue

            visited.add((x, y))
            changes.append((x, y, target))

            stack.append((x + 1, y))
            stack.append((x - 1, y))
            stack.append((x, y + 1))
            stack.append((x, y - 1))
        return changes

    def describe(self) -> str:
        return (f"Fill from ({self.x}, {self.y}) with color {self.color} "
                f"({len(self.changes)} pixels)")


def bresenham(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    """Integer points from (x0, y0) to (x1, y1), both ends included."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    points = []
    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return points


class Line(_PixelDiffCommand):
    def __init__(self, tile: Tile, x0: int, y0: int, x1: int, y1: int, color: int):
        self.start = (x0, y0)
        self.end = (x1, y1)
        changes = [(x, y, tile.get(x, y)) for x, y in bresenham(x0, y0, x1, y1)
                   if in_bounds(x, y)]
        super().__init__(tile, color, changes)

    def describe(self) -> str:
        return f"Draw line from {self.start} to {self.end}"


class Rectangle(_PixelDiffCommand):
    """Filled axis-aligned rectangle; corners may be given in any order."""

    def __init__(self, tile: Tile, x0: int, y0: int, x1: int, y1: int, color: int):
        self.start = (x0, y0)
        self.end = (x1, y1)
        min_x, max_x = min(x0, x1), max(x0, x1)
        min_y, max_y = min(y0, y1), max(y0, y1)
        # Only the part of the rectangle that overlaps the tile
        changes = [(x, y, tile.get(x, y))
                   for y in range(max(min_y, 0), min(max_y, TILE_SIZE - 1) + 1)
                   for x in range(max(min_x, 0), min(max_x, TILE_SIZE - 1) + 1)]
        super().__init__(tile, color, changes)

    def describe(self) -> str:
        return f"Draw rectangle from {self.start} to {self.end}"


class Clear(Command):
    """Reset every pixel to 0.

    Unlike the other tile commands this keeps a snapshot of the whole tile
    (its 32-byte planar dump) instead of a per-pixel diff.
    """

    def __init__(self, tile: Tile):
        self.tile = tile
        self.snapshot = tile.to_planar()

    def execute(self):
        self.tile.clear()

    def undo(self):
        self.tile.load_planar(self.snapshot)

    def describe(self) -> str:
        return "Clear tile"


class SetColor(Command):
    def __init__(self, palette: Palette, sub_palette: int, index: int, color: Color):
        self.palette = palette
        self.sub_palette = sub_palette
        self.index = index
        self.color = color
        self.old_color = palette.get_color(sub_palette, index)

    def execute(self):
        self.palette.set_color(self.sub_palette, self.index, self.color)

    def undo(self):
        self.palette.set_color(self.sub_palette, self.index, self.old_color)

    def describe(self) -> str:
        r, g, b = self.color.to_rgb888()
        return f"Set palette {self.sub_palette} color {self.index} to rgb({r}, {g}, {b})"
