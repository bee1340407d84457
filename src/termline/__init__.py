"""termline: interactive terminal line editor with history and choice prompts."""

# ANSI output
from termline.ansi import AnsiRenderer

# Configuration
from termline.config import EditorConfig

# Editor
from termline.editor import KeySource, LineEditor, Mode, create_interface

# Events
from termline.events import (
    CloseEvent,
    EditorEvent,
    EventListener,
    HistoryEvent,
    LineEvent,
    SelectionEvent,
)

# History
from termline.history import History

# Key decoding
from termline.key_decoder import KeyDecoder, decode_sequence

# Key vocabulary
from termline.keys import Direction, Key, KeyEvent, KeyKind, classify

# Line buffer and committed-line stream
from termline.line_buffer import LineBuffer
from termline.line_stream import LineStream

# Render commands
from termline.render import EOL, RenderCommand, Renderer

# Selection
from termline.selection import SelectionSession

# Terminal
from termline.terminal import ProcessTerminal

constants = {"EOL": EOL}

__all__ = [
    "EOL",
    "AnsiRenderer",
    "CloseEvent",
    "Direction",
    "EditorConfig",
    "EditorEvent",
    "EventListener",
    "History",
    "HistoryEvent",
    "Key",
    "KeyDecoder",
    "KeyEvent",
    "KeyKind",
    "KeySource",
    "LineBuffer",
    "LineEditor",
    "LineEvent",
    "LineStream",
    "Mode",
    "ProcessTerminal",
    "RenderCommand",
    "Renderer",
    "SelectionEvent",
    "SelectionSession",
    "classify",
    "constants",
    "create_interface",
    "decode_sequence",
]

__version__ = "0.1.0"
