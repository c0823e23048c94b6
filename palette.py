"""RGB555 color table: 16 sub-palettes of 16 colors, plus the paint selection."""

from dataclasses import dataclass

from events import ColorChanged, ColorSelected, Emitter, SubPaletteChanged

SUB_PALETTES = 16
COLORS_PER_PALETTE = 16
CHANNEL_MAX = 31


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class Color:
    """A 15-bit color, 5 bits per channel."""
    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        # frozen, so bypass __setattr__ to clamp
        for name in ("r", "g", "b"):
            object.__setattr__(self, name, clamp(int(getattr(self, name)), 0, CHANNEL_MAX))

    def to_rgb555(self) -> int:
        return (self.r << 10) | (self.g << 5) | self.b

    @classmethod
    def from_rgb555(cls, value: int) -> "Color":
        return cls((value >> 10) & 0x1F, (value >> 5) & 0x1F, value & 0x1F)

    def to_rgb888(self) -> tuple[int, int, int]:
        """Expand to 8 bits per channel, replicating the high bits into the low ones."""
        return tuple((c << 3) | (c >> 2) for c in (self.r, self.g, self.b))

    @classmethod
    def from_rgb888(cls, r: int, g: int, b: int) -> "Color":
        return cls(clamp(r, 0, 255) >> 3, clamp(g, 0, 255) >> 3, clamp(b, 0, 255) >> 3)


class Palette:
    def __init__(self):
        self._colors = [[Color() for _ in range(COLORS_PER_PALETTE)]
                        for _ in range(SUB_PALETTES)]
        self.active_sub_palette = 0
        self.selected_color = 1
        self.events = Emitter()

    def get_color(self, sub_palette: int, index: int) -> Color:
        return self._colors[sub_palette % SUB_PALETTES][index % COLORS_PER_PALETTE]

    def set_color(self, sub_palette: int, index: int, color: Color):
        sub_palette %= SUB_PALETTES
        index %= COLORS_PER_PALETTE
        self._colors[sub_palette][index] = color
        self.events.emit(ColorChanged(sub_palette, index, color.to_rgb555()))

    def set_active_sub_palette(self, sub_palette: int):
        self.active_sub_palette = clamp(sub_palette, 0, SUB_PALETTES - 1)
        self.events.emit(SubPaletteChanged(self.active_sub_palette))

    def select_color(self, index: int):
        self.selected_color = clamp(index, 0, COLORS_PER_PALETTE - 1)
        self.events.emit(ColorSelected(self.selected_color))

    def resolve(self, index: int) -> tuple[int, int, int]:
        """RGB888 for a color index in the active sub-palette."""
        return self.get_color(self.active_sub_palette, index).to_rgb888()


# Sub-palette 0 in RGB888; index 0 doubles as transparent
BASIC_COLORS = [
    (0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0),
    (0, 0, 255), (255, 255, 0), (255, 0, 255), (0, 255, 255),
    (128, 128, 128), (255, 128, 0), (128, 0, 255), (0, 128, 128),
    (128, 64, 0), (255, 192, 203), (64, 64, 64), (192, 192, 192),
]


def default_palette() -> Palette:
    """Basic colors plus warm, cool, green and grayscale ramps in sub-palettes 0-4."""
    palette = Palette()
    for i, rgb in enumerate(BASIC_COLORS):
        palette.set_color(0, i, Color.from_rgb888(*rgb))
    for i in range(COLORS_PER_PALETTE):
        t = i / (COLORS_PER_PALETTE - 1)
        palette.set_color(1, i, Color.from_rgb888(int(128 + t * 127), int(t * 128), 0))
        palette.set_color(2, i, Color.from_rgb888(0, int(t * 128), int(128 + t * 127)))
        palette.set_color(3, i, Color.from_rgb888(0, int(t * 255), 0))
        gray = int(t * 255)
        palette.set_color(4, i, Color.from_rgb888(gray, gray, gray))
    return palette
