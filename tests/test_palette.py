from events import ColorChanged, ColorSelected, SubPaletteChanged
from palette import Color, Palette, default_palette


class TestColor:
    def test_channels_clamp_to_five_bits(self):
        assert Color(40, -3, 31) == Color(31, 0, 31)

    def test_rgb555_packing(self):
        color = Color(15, 20, 25)
        assert color.to_rgb555() == (15 << 10) | (20 << 5) | 25
        assert Color.from_rgb555(color.to_rgb555()) == color

    def test_rgb888_expansion(self):
        assert Color(31, 31, 31).to_rgb888() == (255, 255, 255)
        assert Color(0, 0, 0).to_rgb888() == (0, 0, 0)
        assert Color(16, 1, 0).to_rgb888() == (132, 8, 0)

    def test_from_rgb888_drops_low_bits(self):
        assert Color.from_rgb888(255, 128, 7) == Color(31, 16, 0)


class TestPalette:
    def test_defaults(self, palette):
        assert palette.get_color(3, 9) == Color()
        assert palette.active_sub_palette == 0
        assert palette.selected_color == 1

    def test_indices_wrap(self, palette):
        palette.set_color(17, 18, Color(1, 2, 3))
        assert palette.get_color(1, 2) == Color(1, 2, 3)

    def test_selection_clamps(self, palette):
        palette.select_color(20)
        assert palette.selected_color == 15
        palette.set_active_sub_palette(-4)
        assert palette.active_sub_palette == 0

    def test_resolve_uses_active_sub_palette(self, palette):
        palette.set_color(2, 5, Color(31, 0, 0))
        assert palette.resolve(5) == (0, 0, 0)
        palette.set_active_sub_palette(2)
        assert palette.resolve(5) == (255, 0, 0)

    def test_events(self, palette):
        seen = []
        palette.events.subscribe(seen.append)
        palette.set_color(1, 2, Color(0, 0, 31))
        palette.set_active_sub_palette(4)
        palette.select_color(7)
        assert seen == [ColorChanged(1, 2, 31), SubPaletteChanged(4), ColorSelected(7)]


def test_default_palette():
    palette = default_palette()
    assert palette.get_color(0, 0).to_rgb888() == (0, 0, 0)
    assert palette.get_color(0, 1).to_rgb888() == (255, 255, 255)
    assert palette.get_color(0, 2).to_rgb888() == (255, 0, 0)
    assert palette.get_color(4, 15).to_rgb888() == (255, 255, 255)
    assert palette.get_color(3, 0) == Color(0, 0, 0)
    assert palette.selected_color == 1
