"""Tile editor: owns the tile, palette, mode state, history and drawing session."""

import logging

from commands import Clear, Fill, Line, Rectangle, SetColor, SetPixel
from editor_state import EditorState
from history import DEFAULT_MAX_HISTORY, CommandHistory
from palette import COLORS_PER_PALETTE, Color, clamp, default_palette
from session import DrawingSession
from tile import Tile, clamp_coord

log = logging.getLogger(__name__)


class TileEditor:
    def __init__(self, history_size: int = DEFAULT_MAX_HISTORY, zoom: int = 16):
        self.tile = Tile()
        self.palette = default_palette()
        self.state = EditorState(zoom=zoom)
        self.history = CommandHistory(history_size)
        self.session = DrawingSession(self.tile, self.palette, self.state, self.history)

    def execute(self, cmd: dict):
        action = cmd.get("action")
        method = getattr(self, f"_do_{action}", None)
        if method is None:
            raise ValueError(f"Unknown action: {action}")
        method(cmd)

    # --- Mode and palette selection (not journalled) ---

    def _do_set_tool(self, cmd: dict):
        self.state.set_tool(cmd["tool"])

    def _do_set_zoom(self, cmd: dict):
        self.state.set_zoom(cmd["zoom"])

    def _do_set_grid(self, cmd: dict):
        self.state.set_grid_enabled(cmd["enabled"])

    def _do_select_color(self, cmd: dict):
        self.palette.select_color(cmd["index"])

    def _do_set_sub_palette(self, cmd: dict):
        self.palette.set_active_sub_palette(cmd["sub_palette"])

    def _do_set_history_size(self, cmd: dict):
        self.history.set_max_history_size(cmd["size"])

    # --- Pointer gestures ---

    @staticmethod
    def _point(cmd: dict, x_key: str = "x", y_key: str = "y") -> tuple[int, int]:
        return clamp_coord(cmd[x_key]), clamp_coord(cmd[y_key])

    def _do_pointer_down(self, cmd: dict):
        self.session.start(*self._point(cmd))

    def _do_pointer_move(self, cmd: dict):
        self.session.move(*self._point(cmd))

    def _do_pointer_up(self, cmd: dict):
        self.session.end(*self._point(cmd))

    def _do_pointer_leave(self, cmd: dict):
        if "x" in cmd and "y" in cmd:
            self.session.leave(*self._point(cmd))
        else:
            self.session.leave()

    # --- Direct edits (journalled, bypass the active tool) ---

    def _color(self, cmd: dict) -> int:
        if "color" not in cmd:
            return self.palette.selected_color
        return clamp(cmd["color"], 0, COLORS_PER_PALETTE - 1)

    def _do_draw_pixel(self, cmd: dict):
        self.history.execute_command(
            SetPixel(self.tile, *self._point(cmd), self._color(cmd)))

    def _do_draw_line(self, cmd: dict):
        self.history.execute_command(
            Line(self.tile, *self._point(cmd, "x1", "y1"), *self._point(cmd, "x2", "y2"),
                 self._color(cmd)))

    def _do_draw_rect(self, cmd: dict):
        self.history.execute_command(
            Rectangle(self.tile, *self._point(cmd, "x1", "y1"), *self._point(cmd, "x2", "y2"),
                      self._color(cmd)))

    def _do_flood_fill(self, cmd: dict):
        self.history.execute_command(
            Fill(self.tile, *self._point(cmd), self._color(cmd)))

    def _do_clear(self, cmd: dict):
        self.history.execute_command(Clear(self.tile))

    def _do_set_palette_color(self, cmd: dict):
        color = Color.from_rgb888(cmd["r"], cmd["g"], cmd["b"])
        self.history.execute_command(
            SetColor(self.palette, cmd["sub_palette"], cmd["index"], color))

    def _do_undo(self, cmd: dict):
        self.history.undo()

    def _do_redo(self, cmd: dict):
        self.history.redo()

    def _do_import_planar(self, cmd: dict):
        """Load a hex planar dump; like opening a file, this resets the history."""
        self.tile.load_planar(bytes.fromhex(cmd["data"]))
        self.history.clear()
        log.info("Imported tile, history cleared")

    # --- Read-only operations ---

    def get_pixels(self) -> list[list[int]]:
        return self.tile.pixels()

    def export_planar(self) -> str:
        return self.tile.to_planar().hex()

    def get_info(self) -> dict:
        return {
            "tool": self.state.tool.value,
            "zoom": self.state.zoom,
            "grid": self.state.grid_enabled,
            "selected_color": self.palette.selected_color,
            "sub_palette": self.palette.active_sub_palette,
            "can_undo": self.history.can_undo(),
            "can_redo": self.history.can_redo(),
            "undo_size": self.history.undo_size,
            "redo_size": self.history.redo_size,
            "max_history_size": self.history.max_history_size,
            "drawing": self.session.active,
        }
