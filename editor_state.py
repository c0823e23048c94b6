"""Editor mode state: active tool, zoom factor and grid visibility."""

from enum import Enum

from events import Emitter, GridToggled, ToolChanged, ZoomChanged

MIN_ZOOM = 1
MAX_ZOOM = 32


class Tool(str, Enum):
    PENCIL = "pencil"
    FILL = "fill"
    LINE = "line"
    RECTANGLE = "rectangle"


class EditorState:
    """Observable holder for the editor's mode settings.

    Setters clamp or validate their input, store it, then emit one event.
    """

    def __init__(self, tool: Tool = Tool.PENCIL, zoom: int = 16, grid_enabled: bool = True):
        self.events = Emitter()
        self._tool = Tool(tool)
        self._zoom = self._clamp_zoom(zoom)
        self._grid_enabled = bool(grid_enabled)

    @staticmethod
    def _clamp_zoom(zoom) -> int:
        return max(MIN_ZOOM, min(MAX_ZOOM, int(zoom // 1)))

    @property
    def tool(self) -> Tool:
        return self._tool

    def set_tool(self, tool):
        """Accepts a Tool or its string value; raises ValueError for unknown names."""
        self._tool = Tool(tool)
        self.events.emit(ToolChanged(self._tool.value))

    @property
    def zoom(self) -> int:
        return self._zoom

    def set_zoom(self, zoom):
        self._zoom = self._clamp_zoom(zoom)
        self.events.emit(ZoomChanged(self._zoom))

    @property
    def grid_enabled(self) -> bool:
        return self._grid_enabled

    def set_grid_enabled(self, enabled: bool):
        self._grid_enabled = bool(enabled)
        self.events.emit(GridToggled(self._grid_enabled))
