"""Change notifications: tagged event payloads and a per-owner subscription list."""

from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class PixelChanged:
    x: int
    y: int
    color: int


@dataclass(frozen=True)
class TileCleared:
    pass


@dataclass(frozen=True)
class TileReplaced:
    pass


@dataclass(frozen=True)
class HistoryChanged:
    can_undo: bool
    can_redo: bool


@dataclass(frozen=True)
class ToolChanged:
    tool: str


@dataclass(frozen=True)
class ZoomChanged:
    zoom: int


@dataclass(frozen=True)
class GridToggled:
    enabled: bool


@dataclass(frozen=True)
class ColorChanged:
    sub_palette: int
    index: int
    rgb555: int


@dataclass(frozen=True)
class SubPaletteChanged:
    sub_palette: int


@dataclass(frozen=True)
class ColorSelected:
    index: int


Event = Union[
    PixelChanged, TileCleared, TileReplaced, HistoryChanged,
    ToolChanged, ZoomChanged, GridToggled,
    ColorChanged, SubPaletteChanged, ColorSelected,
]
Listener = Callable[[Event], None]


class Emitter:
    """Listener list owned by a single model object.

    Listeners live exactly as long as the owner does; there is no global
    registry. ``subscribe`` hands back a callable that removes the listener.
    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: Event):
        # Copy so a listener may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event)

    def clear(self):
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)
