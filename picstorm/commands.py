"""Logical viewer commands and their default key sequences.

Key sequences are plain strings understood by ``QKeySequence``; keeping them
here (and not in the menu builder) lets the controller and tests talk about
commands without a window.
"""

from __future__ import annotations

from enum import Enum


class Command(Enum):
    NEXT_IMAGE = "next-image"
    PREVIOUS_IMAGE = "previous-image"
    TOGGLE_FIT = "toggle-fit"
    ROTATE_RIGHT = "rotate-right"
    ROTATE_LEFT = "rotate-left"
    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"
    ZOOM_RESET = "zoom-reset"
    TOGGLE_DARK_MODE = "toggle-dark-mode"
    TOGGLE_FULLSCREEN = "toggle-fullscreen"


DEFAULT_KEY_BINDINGS: dict[Command, tuple[str, ...]] = {
    Command.NEXT_IMAGE: ("Right",),
    Command.PREVIOUS_IMAGE: ("Left",),
    Command.TOGGLE_FIT: ("F",),
    Command.ROTATE_RIGHT: ("R",),
    Command.ROTATE_LEFT: ("L",),
    Command.ZOOM_IN: ("+", "="),
    Command.ZOOM_OUT: ("-",),
    Command.ZOOM_RESET: ("0",),
    Command.TOGGLE_DARK_MODE: ("D",),
    Command.TOGGLE_FULLSCREEN: ("F11",),
}

COMMAND_LABELS: dict[Command, str] = {
    Command.NEXT_IMAGE: "Next Image",
    Command.PREVIOUS_IMAGE: "Previous Image",
    Command.TOGGLE_FIT: "Fit to Window(&F)",
    Command.ROTATE_RIGHT: "Rotate Right(&R)",
    Command.ROTATE_LEFT: "Rotate Left(&L)",
    Command.ZOOM_IN: "Zoom In",
    Command.ZOOM_OUT: "Zoom Out",
    Command.ZOOM_RESET: "Reset Zoom",
    Command.TOGGLE_DARK_MODE: "Dark Mode(&D)",
    Command.TOGGLE_FULLSCREEN: "Fullscreen",
}

# Commands shown as checkable menu items, keyed by the ViewState flag they mirror
CHECKABLE_COMMANDS: dict[Command, str] = {
    Command.TOGGLE_FIT: "fit_to_window",
    Command.TOGGLE_DARK_MODE: "dark_mode",
    Command.TOGGLE_FULLSCREEN: "fullscreen",
}
