"""MCP tool definitions. Pushes editor actions onto a thread-safe queue."""

import json
import queue
import threading
from mcp.server.fastmcp import FastMCP

from editor_state import MAX_ZOOM, MIN_ZOOM, Tool
from palette import COLORS_PER_PALETTE, SUB_PALETTES
from tile import TILE_SIZE, clamp_coord

REQUEST_TIMEOUT = 5.0


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def create_mcp_server(command_queue: queue.Queue) -> FastMCP:
    mcp = FastMCP("semitile-mcp")

    def _request_response(cmd: dict, timeout: float = REQUEST_TIMEOUT):
        """Send a command to the main thread and wait for a response."""
        event = threading.Event()
        result: dict = {}
        cmd["_event"] = event
        cmd["_result"] = result
        command_queue.put(cmd)
        if not event.wait(timeout):
            raise TimeoutError("Main thread did not respond in time")
        if "error" in result:
            raise RuntimeError(result["error"])
        return result["data"]

    @mcp.tool()
    def get_editor_info() -> str:
        """Get the active tool, zoom, grid flag, selected color and undo/redo state."""
        return json.dumps(_request_response({"action": "get_info"}))

    @mcp.tool()
    def set_tool(tool: str) -> str:
        """Select the drawing tool: pencil, fill, line or rectangle."""
        names = [t.value for t in Tool]
        if tool not in names:
            return f"Unknown tool '{tool}'. Choose one of: {', '.join(names)}"
        command_queue.put({"action": "set_tool", "tool": tool})
        return f"Tool set to {tool}"

    @mcp.tool()
    def set_zoom(zoom: int) -> str:
        """Set the zoom factor (screen pixels per tile pixel, 1-32)."""
        zoom = clamp(zoom, MIN_ZOOM, MAX_ZOOM)
        command_queue.put({"action": "set_zoom", "zoom": zoom})
        return f"Zoom set to {zoom}x"

    @mcp.tool()
    def set_grid(enabled: bool) -> str:
        """Show or hide the pixel grid."""
        command_queue.put({"action": "set_grid", "enabled": enabled})
        return f"Grid {'shown' if enabled else 'hidden'}"

    @mcp.tool()
    def select_color(index: int) -> str:
        """Select the color index (0-15) the tools paint with. Index 0 is transparent."""
        index = clamp(index, 0, COLORS_PER_PALETTE - 1)
        command_queue.put({"action": "select_color", "index": index})
        return f"Selected color {index}"

    @mcp.tool()
    def set_sub_palette(sub_palette: int) -> str:
        """Choose which of the 16 sub-palettes is used to display the tile."""
        sub_palette = clamp(sub_palette, 0, SUB_PALETTES - 1)
        command_queue.put({"action": "set_sub_palette", "sub_palette": sub_palette})
        return f"Active sub-palette set to {sub_palette}"

    @mcp.tool()
    def set_palette_color(sub_palette: int, index: int, r: int, g: int, b: int) -> str:
        """Set one palette entry (RGB, each 0-255; stored as 5 bits per channel). Undoable."""
        sub_palette = clamp(sub_palette, 0, SUB_PALETTES - 1)
        index = clamp(index, 0, COLORS_PER_PALETTE - 1)
        r, g, b = clamp(r, 0, 255), clamp(g, 0, 255), clamp(b, 0, 255)
        command_queue.put({
            "action": "set_palette_color",
            "sub_palette": sub_palette, "index": index, "r": r, "g": g, "b": b,
        })
        return f"Palette {sub_palette} color {index} set to rgb({r}, {g}, {b})"

    @mcp.tool()
    def stroke(points: list[list[int]]) -> str:
        """Run one pointer gesture with the active tool through a list of [x, y] tile coordinates.

        The first point presses, every later point is a move sample and the
        last point also releases. Pencil paints every point, fill acts on the
        first point, line and rectangle span first to last."""
        if not points:
            return "No points given"
        points = [(clamp_coord(x), clamp_coord(y)) for x, y in points]
        first, last = points[0], points[-1]
        command_queue.put({"action": "pointer_down", "x": first[0], "y": first[1]})
        for x, y in points[1:]:
            command_queue.put({"action": "pointer_move", "x": x, "y": y})
        command_queue.put({"action": "pointer_up", "x": last[0], "y": last[1]})
        return f"Stroke through {len(points)} points"

    @mcp.tool()
    def draw_pixel(x: int, y: int) -> str:
        """Set a single pixel at (x, y) to the selected color."""
        x, y = clamp_coord(x), clamp_coord(y)
        command_queue.put({"action": "draw_pixel", "x": x, "y": y})
        return f"Drew pixel at ({x}, {y})"

    @mcp.tool()
    def draw_line(x1: int, y1: int, x2: int, y2: int) -> str:
        """Draw a one-pixel line from (x1, y1) to (x2, y2)."""
        x1, y1, x2, y2 = (clamp_coord(v) for v in (x1, y1, x2, y2))
        command_queue.put({"action": "draw_line", "x1": x1, "y1": y1, "x2": x2, "y2": y2})
        return f"Drew line from ({x1}, {y1}) to ({x2}, {y2})"

    @mcp.tool()
    def draw_rect(x1: int, y1: int, x2: int, y2: int) -> str:
        """Draw a filled rectangle between two opposite corners (inclusive)."""
        x1, y1, x2, y2 = (clamp_coord(v) for v in (x1, y1, x2, y2))
        command_queue.put({"action": "draw_rect", "x1": x1, "y1": y1, "x2": x2, "y2": y2})
        return f"Drew rectangle from ({x1}, {y1}) to ({x2}, {y2})"

    @mcp.tool()
    def flood_fill(x: int, y: int) -> str:
        """Bucket-fill the 4-connected area at (x, y) with the selected color."""
        x, y = clamp_coord(x), clamp_coord(y)
        command_queue.put({"action": "flood_fill", "x": x, "y": y})
        return f"Flood filled at ({x}, {y})"

    @mcp.tool()
    def clear_tile() -> str:
        """Reset every pixel to color 0. Undoable."""
        command_queue.put({"action": "clear"})
        return "Tile cleared"

    @mcp.tool()
    def undo() -> str:
        """Undo the last edit."""
        command_queue.put({"action": "undo"})
        return "Undo performed"

    @mcp.tool()
    def redo() -> str:
        """Redo the last undone edit."""
        command_queue.put({"action": "redo"})
        return "Redo performed"

    @mcp.tool()
    def set_history_size(size: int) -> str:
        """Set how many edits can be undone (at least 1). Older edits are dropped."""
        size = max(1, size)
        command_queue.put({"action": "set_history_size", "size": size})
        return f"History size set to {size}"

    @mcp.tool()
    def get_tile_pixels() -> str:
        """Return the 8x8 color indices as a JSON 2D array (row-major)."""
        return json.dumps(_request_response({"action": "get_pixels"}))

    @mcp.tool()
    def export_planar() -> str:
        """Return the tile as 32 bytes of 4bpp planar data, hex encoded."""
        return _request_response({"action": "export_planar"})

    @mcp.tool()
    def import_planar(data: str) -> str:
        """Load a tile from 32 bytes of hex-encoded 4bpp planar data. Clears the undo history."""
        try:
            raw = bytes.fromhex(data)
        except ValueError:
            return "Invalid hex data"
        if len(raw) != 4 * TILE_SIZE:
            return f"Expected {4 * TILE_SIZE} bytes, got {len(raw)}"
        command_queue.put({"action": "import_planar", "data": raw.hex()})
        return "Tile imported"

    @mcp.tool()
    def save_png(file_path: str) -> str:
        """Save the rendered tile (active sub-palette, current zoom) to a PNG file."""
        return _request_response({"action": "save_file", "path": file_path})

    return mcp
