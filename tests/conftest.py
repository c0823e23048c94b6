import os

# pygame must not try to open a real display or audio device under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from editor import TileEditor
from editor_state import EditorState
from history import CommandHistory
from palette import Palette
from session import DrawingSession
from tile import Tile


@pytest.fixture
def tile():
    return Tile()


@pytest.fixture
def history():
    return CommandHistory()


@pytest.fixture
def palette():
    return Palette()


@pytest.fixture
def state():
    return EditorState()


@pytest.fixture
def session(tile, palette, state, history):
    return DrawingSession(tile, palette, state, history)


@pytest.fixture
def editor():
    return TileEditor()
