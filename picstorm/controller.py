from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage

from . import pipeline
from .commands import Command
from .config import ViewerConfig
from .decoder import decode_image
from .errors import DecodeError
from .image_set import ImageSet
from .logger import get_logger
from .styles import ThemeColors, theme_colors
from .view_state import ViewState

_logger = get_logger("controller")


class ViewerController(QObject):
    """Turns logical commands into ViewState/index changes and new frames.

    Runs entirely on the UI thread: decoding and rendering happen inline in
    the command that needs them. Only the current image is held in memory.
    """

    frame_ready = Signal(QImage)
    theme_changed = Signal(object)  # ThemeColors
    fullscreen_changed = Signal(bool)
    decode_failed = Signal(str, str)  # path, reason
    image_changed = Signal(str)
    state_changed = Signal()

    def __init__(
        self,
        config: ViewerConfig | None = None,
        decoder: Callable[[str], QImage] = decode_image,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or ViewerConfig()
        self.state = ViewState(
            fit_to_window=self.config.start_fit,
            dark_mode=self.config.start_dark,
            min_zoom=self.config.min_zoom,
            max_zoom=self.config.max_zoom,
        )
        self.image_set: ImageSet | None = None
        self._decode = decoder
        self._source: QImage | None = None
        self._available: tuple[int, int] = (self.config.window_width, self.config.window_height)
        self.last_frame: QImage | None = None
        self.last_error: str | None = None
        self._frame_count = 0

        self._handlers: dict[Command, Callable[[], None]] = {
            Command.NEXT_IMAGE: self.next_image,
            Command.PREVIOUS_IMAGE: self.previous_image,
            Command.TOGGLE_FIT: self.toggle_fit,
            Command.ROTATE_RIGHT: self.rotate_right,
            Command.ROTATE_LEFT: self.rotate_left,
            Command.ZOOM_IN: self.zoom_in,
            Command.ZOOM_OUT: self.zoom_out,
            Command.ZOOM_RESET: self.zoom_reset,
            Command.TOGGLE_DARK_MODE: self.toggle_dark_mode,
            Command.TOGGLE_FULLSCREEN: self.toggle_fullscreen,
        }

    # ---- queries ----
    @property
    def current_path(self) -> str | None:
        return self.image_set.current() if self.image_set is not None else None

    @property
    def source_image(self) -> QImage | None:
        return self._source

    @property
    def available_size(self) -> tuple[int, int]:
        return self._available

    def current_theme(self) -> ThemeColors:
        return theme_colors(self.state.dark_mode)

    # ---- loading ----
    def open(self, path: str | Path) -> None:
        """Browse the folder of ``path`` starting at ``path``.

        EmptyDirectoryError and FileNotFoundError propagate: the caller
        decides whether that aborts startup or just keeps the current folder.
        """
        image_set = ImageSet.build_from(path)
        self.image_set = image_set
        self.state.reset_for_navigation()
        _logger.debug("opened %s (%d images)", image_set.directory, len(image_set))
        self._load_current()

    def _load_current(self) -> None:
        if self.image_set is None:
            return
        path = self.image_set.current()
        try:
            self._source = self._decode(path)
            self.last_error = None
        except (DecodeError, OSError) as e:
            # Keep the previous frame on screen; report and carry on
            self._source = None
            reason = e.reason if isinstance(e, DecodeError) else (e.strerror or str(e))
            self.last_error = reason
            _logger.error("decode error for %s: %s", path, reason)
            self.image_changed.emit(path)
            self.decode_failed.emit(path, reason)
            self.state_changed.emit()
            return
        self.image_changed.emit(path)
        self.state_changed.emit()
        self._render()

    def _render(self) -> None:
        if self._source is None:
            _logger.debug("render skipped: no decoded image")
            return
        frame = pipeline.render(self._source, self.state, self._available)
        self.last_frame = frame
        self._frame_count += 1
        self.frame_ready.emit(frame)

    def _changed(self) -> None:
        self.state_changed.emit()
        self._render()

    # ---- commands ----
    def dispatch(self, command: Command) -> None:
        if self.image_set is None and command not in (Command.TOGGLE_DARK_MODE, Command.TOGGLE_FULLSCREEN):
            _logger.debug("command ignored, nothing loaded: %s", command.value)
            return
        _logger.debug("command: %s", command.value)
        self._handlers[command]()

    def next_image(self) -> None:
        if self.image_set is None:
            return
        self.image_set.next()
        self.state.reset_for_navigation()
        self._load_current()

    def previous_image(self) -> None:
        if self.image_set is None:
            return
        self.image_set.previous()
        self.state.reset_for_navigation()
        self._load_current()

    def toggle_fit(self) -> None:
        self.state.toggle_fit()
        self._changed()

    def rotate_right(self) -> None:
        self.state.rotate_right()
        self._changed()

    def rotate_left(self) -> None:
        self.state.rotate_left()
        self._changed()

    def zoom_in(self) -> None:
        self.state.zoom_in(self.config.zoom_step)
        self._changed()

    def zoom_out(self) -> None:
        self.state.zoom_out(self.config.zoom_step)
        self._changed()

    def zoom_reset(self) -> None:
        self.state.reset_zoom()
        self._changed()

    def toggle_dark_mode(self) -> None:
        # Theme only: the displayed raster is untouched
        self.state.toggle_dark_mode()
        self.state_changed.emit()
        self.theme_changed.emit(self.current_theme())

    def toggle_fullscreen(self) -> None:
        self.state.toggle_fullscreen()
        frames_before = self._frame_count
        # The window may report its new size from inside this emit
        self.fullscreen_changed.emit(self.state.fullscreen)
        self.theme_changed.emit(self.current_theme())
        self.state_changed.emit()
        if self._frame_count == frames_before:
            self._render()

    # ---- window events ----
    def resize(self, width: int, height: int) -> None:
        """Record the new display area; fit is recomputed live."""
        size = (max(0, int(width)), max(0, int(height)))
        if size == self._available:
            return
        self._available = size
        if self.state.fit_to_window:
            self._render()
