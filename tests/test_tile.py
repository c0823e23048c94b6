import pytest

from events import PixelChanged, TileCleared, TileReplaced
from tile import PLANAR_SIZE, Tile, clamp_coord


class TestPixelAccess:
    def test_new_tile_is_empty(self, tile):
        assert tile.pixels() == [[0] * 8 for _ in range(8)]

    def test_set_and_get(self, tile):
        tile.set(3, 4, 7)
        assert tile.get(3, 4) == 7
        assert tile.pixels()[4][3] == 7
        assert tile.get(4, 3) == 0

    def test_out_of_range_reads_default_to_zero(self, tile):
        assert tile.get(8, 0) == 0
        assert tile.get(0, 8) == 0
        assert tile.get(-1, 3) == 0

    def test_out_of_range_writes_are_ignored(self, tile):
        tile.set(8, 0, 5)
        tile.set(-1, 0, 5)
        tile.set(0, 0, 16)
        tile.set(0, 0, -1)
        assert tile.pixels() == Tile().pixels()

    def test_clear(self, tile):
        tile.set(1, 1, 9)
        tile.clear()
        assert tile.get(1, 1) == 0


@pytest.mark.parametrize("value, expected", [
    (3, 3), (-8, -8), (15, 15), (-9, -8), (16, 15), (10**9, 15), (-10**9, -8),
])
def test_clamp_coord(value, expected):
    assert clamp_coord(value) == expected


class TestPlanar:
    def test_empty_tile_is_all_zero_bytes(self, tile):
        assert tile.to_planar() == bytes(PLANAR_SIZE)

    def test_top_left_color_15_sets_bit_7_in_every_plane(self, tile):
        tile.set(0, 0, 15)
        data = tile.to_planar()
        for plane in range(4):
            assert data[plane * 8] == 0b10000000
        assert sum(data) == 4 * 0b10000000

    def test_bits_are_spread_across_planes(self, tile):
        # 0b0101 at the rightmost pixel of row 2
        tile.set(7, 2, 5)
        data = tile.to_planar()
        assert data[2] == 0b00000001
        assert data[8 + 2] == 0
        assert data[16 + 2] == 0b00000001
        assert data[24 + 2] == 0

    def test_round_trip(self, tile):
        for i in range(64):
            tile.set(i % 8, i // 8, i % 16)
        assert Tile.from_planar(tile.to_planar()) == tile

    def test_load_planar_replaces_in_place(self, tile):
        source = Tile()
        source.set(2, 5, 11)
        tile.set(0, 0, 3)
        tile.load_planar(source.to_planar())
        assert tile == source

    @pytest.mark.parametrize("size", [0, 31, 33])
    def test_wrong_length_is_rejected(self, size):
        with pytest.raises(ValueError):
            Tile.from_planar(bytes(size))


class TestEvents:
    def test_set_emits_pixel_changed(self, tile):
        seen = []
        tile.events.subscribe(seen.append)
        tile.set(1, 2, 3)
        tile.set(9, 9, 3)
        assert seen == [PixelChanged(1, 2, 3)]

    def test_clear_and_load_emit(self, tile):
        seen = []
        tile.events.subscribe(seen.append)
        tile.clear()
        tile.load_planar(bytes(PLANAR_SIZE))
        assert seen == [TileCleared(), TileReplaced()]

    def test_unsubscribe(self, tile):
        seen = []
        unsubscribe = tile.events.subscribe(seen.append)
        unsubscribe()
        tile.set(0, 0, 1)
        assert seen == []
        assert len(tile.events) == 0
