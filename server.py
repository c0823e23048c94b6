"""Entry point: starts MCP server thread + pygame tile editor window."""

import os
# Suppress pygame welcome message before importing; it prints to stdout
# which would corrupt the MCP stdio JSON-RPC stream.
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import sys
import queue
import logging
import threading

import pygame
from editor import TileEditor
from editor_state import MAX_ZOOM, Tool
from history import DEFAULT_MAX_HISTORY
from tile import TILE_SIZE
from tools import create_mcp_server

log = logging.getLogger("semitile")

TOOLBAR_H = 40
MARGIN = 16
WIDTH = max(360, TILE_SIZE * MAX_ZOOM + 2 * MARGIN)
HEIGHT = TOOLBAR_H + TILE_SIZE * MAX_ZOOM + 2 * MARGIN
FPS = 30
TILE_ORIGIN = (MARGIN, TOOLBAR_H + MARGIN)
ZOOM_STEP = 2

# Environment overrides
HISTORY_SIZE = int(os.environ.get("SEMITILE_HISTORY_SIZE", DEFAULT_MAX_HISTORY))
START_ZOOM = int(os.environ.get("SEMITILE_ZOOM", 16))

# Colours
BG = (40, 40, 40)
TB_BG = (220, 220, 220)
TB_TEXT = (30, 30, 30)
TB_DISABLED = (150, 150, 150)
GRID = (90, 90, 90)

TOOL_KEYS = {
    pygame.K_p: Tool.PENCIL,
    pygame.K_f: Tool.FILL,
    pygame.K_l: Tool.LINE,
    pygame.K_r: Tool.RECTANGLE,
}


def run_mcp_server(mcp_server):
    """Target for the daemon thread: runs the MCP stdio server."""
    mcp_server.run(transport="stdio")


def screen_to_tile(pos: tuple[int, int], origin: tuple[int, int], zoom: int):
    """Map a window position to tile coordinates, or None outside the tile."""
    x = (pos[0] - origin[0]) // zoom
    y = (pos[1] - origin[1]) // zoom
    if 0 <= x < TILE_SIZE and 0 <= y < TILE_SIZE:
        return x, y
    return None


def render_tile(target: pygame.Surface, editor: TileEditor, origin: tuple[int, int] = (0, 0),
                grid: bool | None = None):
    """Paint the tile at the current zoom using the active sub-palette."""
    zoom = editor.state.zoom
    if grid is None:
        grid = editor.state.grid_enabled
    ox, oy = origin
    for y, row in enumerate(editor.get_pixels()):
        for x, index in enumerate(row):
            rect = (ox + x * zoom, oy + y * zoom, zoom, zoom)
            pygame.draw.rect(target, editor.palette.resolve(index), rect)
    if grid and zoom > 2:
        size = TILE_SIZE * zoom
        for i in range(TILE_SIZE + 1):
            pygame.draw.line(target, GRID, (ox + i * zoom, oy), (ox + i * zoom, oy + size))
            pygame.draw.line(target, GRID, (ox, oy + i * zoom), (ox + size, oy + i * zoom))


def snapshot_surface(editor: TileEditor) -> pygame.Surface:
    """The tile alone at the current zoom, without grid lines."""
    size = TILE_SIZE * editor.state.zoom
    surface = pygame.Surface((size, size))
    render_tile(surface, editor, grid=False)
    return surface


def key_to_action(key: int, mod: int, editor: TileEditor) -> dict | None:
    """Translate a key press into an editor action dict."""
    ctrl = mod & (pygame.KMOD_CTRL | pygame.KMOD_META)
    shift = mod & pygame.KMOD_SHIFT
    if ctrl and key == pygame.K_z:
        return {"action": "redo"} if shift else {"action": "undo"}
    if ctrl and key == pygame.K_y:
        return {"action": "redo"}
    if ctrl:
        return None
    if key in TOOL_KEYS:
        return {"action": "set_tool", "tool": TOOL_KEYS[key].value}
    if key == pygame.K_g:
        return {"action": "set_grid", "enabled": not editor.state.grid_enabled}
    if key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
        return {"action": "set_zoom", "zoom": editor.state.zoom + ZOOM_STEP}
    if key in (pygame.K_MINUS, pygame.K_KP_MINUS):
        return {"action": "set_zoom", "zoom": editor.state.zoom - ZOOM_STEP}
    if key == pygame.K_DELETE:
        return {"action": "clear"}
    if pygame.K_0 <= key <= pygame.K_9:
        return {"action": "select_color", "index": key - pygame.K_0}
    return None


class PointerTracker:
    """Turns raw mouse events into pointer_* actions for the drawing session.

    Move samples are sent only when the pointer enters a different tile pixel.
    """

    def __init__(self):
        self.pressed = False
        self._last = None

    def handle(self, event: pygame.event.Event, origin: tuple[int, int], zoom: int) -> list[dict]:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            point = screen_to_tile(event.pos, origin, zoom)
            if point is None:
                return []
            self.pressed = True
            self._last = point
            return [{"action": "pointer_down", "x": point[0], "y": point[1]}]

        if not self.pressed:
            return []

        if event.type == pygame.MOUSEMOTION:
            point = screen_to_tile(event.pos, origin, zoom)
            if point is None:
                return self._release({"action": "pointer_leave"})
            if point == self._last:
                return []
            self._last = point
            return [{"action": "pointer_move", "x": point[0], "y": point[1]}]

        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            point = screen_to_tile(event.pos, origin, zoom)
            if point is None:
                return self._release({"action": "pointer_leave"})
            return self._release({"action": "pointer_up", "x": point[0], "y": point[1]})

        if event.type == pygame.WINDOWLEAVE:
            return self._release({"action": "pointer_leave"})
        return []

    def _release(self, action: dict) -> list[dict]:
        self.pressed = False
        self._last = None
        return [action]


def _handle_request(cmd: dict, editor: TileEditor):
    """Process a request/response command from the MCP tool thread."""
    event: threading.Event = cmd["_event"]
    result: dict = cmd["_result"]
    action = cmd.get("action")
    try:
        if action == "get_pixels":
            result["data"] = editor.get_pixels()
        elif action == "get_info":
            result["data"] = editor.get_info()
        elif action == "export_planar":
            result["data"] = editor.export_planar()
        elif action == "save_file":
            path = cmd["path"]
            pygame.image.save(snapshot_surface(editor), path)
            result["data"] = f"Tile saved to {path}"
        else:
            result["error"] = f"Unknown request action: {action}"
    except Exception as e:
        result["error"] = str(e)
    finally:
        event.set()


def dispatch(cmd: dict, editor: TileEditor):
    """Run one queued command; errors are logged, never fatal to the loop."""
    if "_event" in cmd:
        _handle_request(cmd, editor)
        return
    try:
        editor.execute(cmd)
    except Exception as e:
        log.error("Command error: %s", e)


def draw_toolbar(screen: pygame.Surface, font: pygame.font.Font, editor: TileEditor):
    pygame.draw.rect(screen, TB_BG, (0, 0, WIDTH, TOOLBAR_H))
    swatch = pygame.Rect(10, 8, 24, 24)
    pygame.draw.rect(screen, editor.palette.resolve(editor.palette.selected_color), swatch)
    pygame.draw.rect(screen, TB_TEXT, swatch, width=1)

    label = f"{editor.state.tool.value}  {editor.state.zoom}x  pal {editor.palette.active_sub_palette}"
    screen.blit(font.render(label, True, TB_TEXT), (44, 12))

    x = WIDTH - 110
    for text, enabled in (("Undo", editor.history.can_undo()), ("Redo", editor.history.can_redo())):
        colour = TB_TEXT if enabled else TB_DISABLED
        screen.blit(font.render(text, True, colour), (x, 12))
        x += 50


def main():
    logging.basicConfig(stream=sys.stderr, level=logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # Shared command queue between MCP thread and pygame main thread
    command_queue = queue.Queue()

    mcp_server = create_mcp_server(command_queue)

    # Start MCP server in a background daemon thread
    mcp_thread = threading.Thread(target=run_mcp_server, args=(mcp_server,), daemon=True)
    mcp_thread.start()

    # Initialize pygame on the main thread
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Semitile MCP")
    clock = pygame.time.Clock()

    editor = TileEditor(history_size=HISTORY_SIZE, zoom=START_ZOOM)
    pointer = PointerTracker()
    font = pygame.font.SysFont(None, 24)
    log.info("Editor ready (history %d, zoom %dx)", editor.history.max_history_size, editor.state.zoom)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                action = key_to_action(event.key, event.mod, editor)
                if action is not None:
                    dispatch(action, editor)
            else:
                for action in pointer.handle(event, TILE_ORIGIN, editor.state.zoom):
                    dispatch(action, editor)

        # Drain all pending commands from the queue
        while True:
            try:
                cmd = command_queue.get_nowait()
            except queue.Empty:
                break
            dispatch(cmd, editor)

        # --- Render ---
        screen.fill(BG)
        draw_toolbar(screen, font, editor)
        render_tile(screen, editor, TILE_ORIGIN)
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()


if __name__ == "__main__":
    main()
