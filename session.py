"""Pointer gesture state machine that turns start/move/end into history commands."""

from commands import Fill, Line, Rectangle, SetPixel
from editor_state import EditorState, Tool
from history import CommandHistory
from palette import Palette
from tile import Tile, in_bounds


class DrawingSession:
    """Idle until ``start``; Active(tool) until ``end`` or ``leave``.

    The tool is read from the editor state once, at ``start``, and held for
    the rest of the gesture. Pencil emits one SetPixel per on-tile sample,
    Fill acts on ``start``, Line and Rectangle remember the start point and
    emit on ``end``. Every command goes through ``history.execute_command``.
    """

    def __init__(self, tile: Tile, palette: Palette, state: EditorState,
                 history: CommandHistory):
        self.tile = tile
        self.palette = palette
        self.state = state
        self.history = history
        self.tool: Tool | None = None
        self._start: tuple[int, int] | None = None
        self._last: tuple[int, int] | None = None

    @property
    def active(self) -> bool:
        return self.tool is not None

    def _color(self) -> int:
        return self.palette.selected_color

    def _sample(self, x: int, y: int):
        if in_bounds(x, y):
            self._last = (x, y)

    def start(self, x: int, y: int):
        self.tool = self.state.tool
        self._start = (x, y)
        self._last = None
        self._sample(x, y)

        # Off-tile samples still start the gesture but never journal an edit
        if not in_bounds(x, y):
            return
        if self.tool is Tool.PENCIL:
            self.history.execute_command(SetPixel(self.tile, x, y, self._color()))
        elif self.tool is Tool.FILL:
            self.history.execute_command(Fill(self.tile, x, y, self._color()))

    def move(self, x: int, y: int):
        if not self.active:
            return
        self._sample(x, y)
        if self.tool is Tool.PENCIL and in_bounds(x, y):
            self.history.execute_command(SetPixel(self.tile, x, y, self._color()))

    def end(self, x: int, y: int):
        if not self.active:
            return
        x0, y0 = self._start
        if self.tool is Tool.LINE:
            self.history.execute_command(Line(self.tile, x0, y0, x, y, self._color()))
        elif self.tool is Tool.RECTANGLE:
            self.history.execute_command(Rectangle(self.tile, x0, y0, x, y, self._color()))
        self._reset()

    def leave(self, x: int | None = None, y: int | None = None):
        """Pointer left the surface: finish the gesture like ``end``.

        Without a position the last in-bounds sample (or the start point)
        closes a Line or Rectangle.
        """
        if not self.active:
            return
        if x is None or y is None:
            x, y = self._last or self._start
        self.end(x, y)

    def _reset(self):
        self.tool = None
        self._start = None
        self._last = None
