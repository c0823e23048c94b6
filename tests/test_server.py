import threading

import pygame
import pytest

from editor_state import Tool
from server import (
    PointerTracker, dispatch, key_to_action, render_tile, screen_to_tile, snapshot_surface,
)

ORIGIN = (10, 50)


def mouse(kind, pos, **extra):
    return pygame.event.Event(kind, pos=pos, **extra)


class TestScreenToTile:
    def test_floor_division_by_zoom(self):
        assert screen_to_tile((10, 50), ORIGIN, 16) == (0, 0)
        assert screen_to_tile((10 + 16 * 3 + 15, 50 + 16 * 7), ORIGIN, 16) == (3, 7)

    def test_outside_is_none(self):
        assert screen_to_tile((9, 50), ORIGIN, 16) is None
        assert screen_to_tile((10 + 16 * 8, 60), ORIGIN, 16) is None


class TestPointerTracker:
    def test_press_drag_release(self):
        tracker = PointerTracker()
        zoom = 4
        down = tracker.handle(mouse(pygame.MOUSEBUTTONDOWN, (10, 50), button=1), ORIGIN, zoom)
        assert down == [{"action": "pointer_down", "x": 0, "y": 0}]
        # Still inside pixel (0, 0): no new sample
        assert tracker.handle(mouse(pygame.MOUSEMOTION, (12, 52)), ORIGIN, zoom) == []
        move = tracker.handle(mouse(pygame.MOUSEMOTION, (15, 50)), ORIGIN, zoom)
        assert move == [{"action": "pointer_move", "x": 1, "y": 0}]
        up = tracker.handle(mouse(pygame.MOUSEBUTTONUP, (15, 50), button=1), ORIGIN, zoom)
        assert up == [{"action": "pointer_up", "x": 1, "y": 0}]
        assert not tracker.pressed

    def test_leaving_the_tile_ends_the_gesture(self):
        tracker = PointerTracker()
        tracker.handle(mouse(pygame.MOUSEBUTTONDOWN, (10, 50), button=1), ORIGIN, 4)
        out = tracker.handle(mouse(pygame.MOUSEMOTION, (500, 500)), ORIGIN, 4)
        assert out == [{"action": "pointer_leave"}]
        assert tracker.handle(mouse(pygame.MOUSEMOTION, (11, 51)), ORIGIN, 4) == []

    def test_motion_without_press_is_ignored(self):
        tracker = PointerTracker()
        assert tracker.handle(mouse(pygame.MOUSEMOTION, (11, 51)), ORIGIN, 4) == []

    def test_press_outside_is_ignored(self):
        tracker = PointerTracker()
        assert tracker.handle(mouse(pygame.MOUSEBUTTONDOWN, (0, 0), button=1), ORIGIN, 4) == []
        assert not tracker.pressed


class TestKeys:
    @pytest.mark.parametrize("key, tool", [
        (pygame.K_p, Tool.PENCIL), (pygame.K_f, Tool.FILL),
        (pygame.K_l, Tool.LINE), (pygame.K_r, Tool.RECTANGLE),
    ])
    def test_tool_keys(self, editor, key, tool):
        assert key_to_action(key, 0, editor) == {"action": "set_tool", "tool": tool.value}

    def test_undo_redo_shortcuts(self, editor):
        assert key_to_action(pygame.K_z, pygame.KMOD_LCTRL, editor) == {"action": "undo"}
        assert key_to_action(pygame.K_y, pygame.KMOD_LCTRL, editor) == {"action": "redo"}
        shifted = pygame.KMOD_LCTRL | pygame.KMOD_LSHIFT
        assert key_to_action(pygame.K_z, shifted, editor) == {"action": "redo"}

    def test_grid_zoom_color(self, editor):
        assert key_to_action(pygame.K_g, 0, editor) == {"action": "set_grid", "enabled": False}
        assert key_to_action(pygame.K_EQUALS, 0, editor) == {"action": "set_zoom", "zoom": 18}
        assert key_to_action(pygame.K_MINUS, 0, editor) == {"action": "set_zoom", "zoom": 14}
        assert key_to_action(pygame.K_7, 0, editor) == {"action": "select_color", "index": 7}
        assert key_to_action(pygame.K_q, 0, editor) is None


class TestRendering:
    def test_render_uses_active_sub_palette(self, editor):
        editor.execute({"action": "set_zoom", "zoom": 2})
        editor.execute({"action": "draw_pixel", "x": 1, "y": 0, "color": 2})
        surface = pygame.Surface((16, 16))
        render_tile(surface, editor)
        assert tuple(surface.get_at((2, 0)))[:3] == (255, 0, 0)
        assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 0)

    def test_snapshot_size(self, editor):
        editor.execute({"action": "set_zoom", "zoom": 3})
        assert snapshot_surface(editor).get_size() == (24, 24)


class TestDispatch:
    def test_errors_are_logged_not_raised(self, editor, caplog):
        dispatch({"action": "nope"}, editor)
        assert "Unknown action: nope" in caplog.text

    def test_request_bridge(self, editor):
        event = threading.Event()
        result = {}
        dispatch({"action": "export_planar", "_event": event, "_result": result}, editor)
        assert event.is_set()
        assert result["data"] == "00" * 32

    def test_unknown_request(self, editor):
        event = threading.Event()
        result = {}
        dispatch({"action": "get_nothing", "_event": event, "_result": result}, editor)
        assert event.is_set()
        assert "error" in result
