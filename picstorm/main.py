import argparse
import contextlib
import os
import sys
from pathlib import Path

from PySide6.QtGui import QImage
from PySide6.QtWidgets import QApplication, QFileDialog, QMainWindow, QMessageBox, QWidget

from picstorm.busy_cursor import busy_cursor
from picstorm.commands import Command
from picstorm.config import ViewerConfig, load_config
from picstorm.controller import ViewerController
from picstorm.errors import EmptyDirectoryError, NoSelectionError
from picstorm.logger import get_logger
from picstorm.path_utils import dialog_filter
from picstorm.status_overlay import StatusOverlayBuilder
from picstorm.styles import ThemeColors, apply_theme
from picstorm.ui_canvas import ImageCanvas
from picstorm.ui_menus import build_menus, sync_checks

logger = get_logger("main")

# Commands that decode a new file and may block for a moment
_LOADING_COMMANDS = (Command.NEXT_IMAGE, Command.PREVIOUS_IMAGE)


# --- CLI logging options -----------------------------------------------------
# To prevent Qt from rejecting unknown options, we parse our own options first,
# reflect them in environment variables (PICSTORM_LOG_LEVEL, PICSTORM_LOG_CATS),
# and hand the rest of argv on.


def _apply_cli_logging_options(argv: list[str]) -> list[str]:
    parser = argparse.ArgumentParser(description="PicStorm Viewer", add_help=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    args, remaining = parser.parse_known_args(argv[1:])
    if args.log_level:
        os.environ["PICSTORM_LOG_LEVEL"] = args.log_level
    if args.log_cats:
        os.environ["PICSTORM_LOG_CATS"] = args.log_cats
    # Re-read env so the new level applies to loggers created at import time
    get_logger()
    return [argv[0], *remaining]


# Qt options that take a value; QApplication consumes them from argv
_QT_VALUE_OPTIONS = frozenset(
    {
        "-platform",
        "-platformpluginpath",
        "-platformtheme",
        "-plugin",
        "-qmljsdebugger",
        "-style",
        "-stylesheet",
        "-session",
        "-display",
        "-geometry",
        "-qwindowgeometry",
        "-qwindowicon",
        "-qwindowtitle",
        "-title",
        "-name",
    }
)


def _without_qt_options(args: list[str]) -> list[str]:
    """Drop Qt's single-dash options (and their values) from ``args``."""
    kept: list[str] = []
    skip_value = False
    for arg in args:
        if skip_value:
            skip_value = False
            continue
        if arg in _QT_VALUE_OPTIONS:
            skip_value = True
            continue
        if arg.startswith("-") and not arg.startswith("--"):
            continue
        kept.append(arg)
    return kept


def ask_for_image(parent: QWidget | None = None, start_dir: str | None = None) -> str:
    """Show the open dialog filtered to recognized images.

    Raises NoSelectionError when the user cancels.
    """
    path, _ = QFileDialog.getOpenFileName(
        parent,
        "Open Image",
        start_dir or os.path.expanduser("~"),
        dialog_filter(),
    )
    if not path:
        raise NoSelectionError()
    return path


class ImageViewer(QMainWindow):
    def __init__(self, config: ViewerConfig | None = None, controller: ViewerController | None = None):
        super().__init__()
        self.config = config or ViewerConfig()
        self.setWindowTitle(self.config.window_title)
        self.resize(self.config.window_width, self.config.window_height)

        self.controller = controller or ViewerController(self.config, parent=self)
        self.command_actions = {}
        self._normal_geometry = None

        self.canvas = ImageCanvas(self)
        self.setCentralWidget(self.canvas)

        build_menus(self)
        self._status_builder = StatusOverlayBuilder(self.controller)

        self.controller.frame_ready.connect(self._on_frame_ready)
        self.controller.theme_changed.connect(self._on_theme_changed)
        self.controller.fullscreen_changed.connect(self._on_fullscreen_changed)
        self.controller.decode_failed.connect(self._on_decode_failed)
        self.controller.image_changed.connect(self._on_image_changed)
        self.controller.state_changed.connect(self._on_state_changed)
        self.canvas.viewport_resized.connect(self.controller.resize)
        self.canvas.command_requested.connect(self.dispatch_command)

        self._on_theme_changed(self.controller.current_theme())
        self._update_status()

    # ---- commands ----
    def dispatch_command(self, command: Command) -> None:
        with busy_cursor(command in _LOADING_COMMANDS):
            self.controller.dispatch(command)
        # A checkable action flips itself even when the controller ignores the command
        sync_checks(self)

    def open_image(self) -> None:
        """Open dialog; a file from another folder replaces the image list."""
        start_dir = None
        if self.controller.image_set is not None:
            start_dir = self.controller.image_set.directory
        try:
            path = ask_for_image(self, start_dir)
        except NoSelectionError:
            logger.debug("open dialog cancelled")
            return
        self.open_path(path)

    def open_path(self, path: str) -> bool:
        try:
            with busy_cursor():
                self.controller.open(path)
        except (EmptyDirectoryError, OSError) as e:
            logger.error("cannot open %s: %s", path, e)
            QMessageBox.warning(self, self.config.window_title, str(e))
            return False
        return True

    # ---- fullscreen ----
    def enter_fullscreen(self) -> None:
        # Save current geometry before entering fullscreen
        self._normal_geometry = self.geometry()
        self.menuBar().setVisible(False)
        self.showFullScreen()

    def leave_fullscreen(self) -> None:
        self.showNormal()
        if self._normal_geometry is not None and not self._normal_geometry.isNull():
            self.setGeometry(self._normal_geometry)
        self.menuBar().setVisible(True)

    def exit_fullscreen(self) -> None:
        """Esc handler: leave fullscreen through the controller so state stays in sync."""
        if self.controller.state.fullscreen:
            self.dispatch_command(Command.TOGGLE_FULLSCREEN)

    # ---- controller signals ----
    def _on_frame_ready(self, image: QImage) -> None:
        self.canvas.set_image(image)
        self._update_status()

    def _on_theme_changed(self, colors: ThemeColors) -> None:
        apply_theme(self, self.canvas, colors)

    def _on_fullscreen_changed(self, fullscreen: bool) -> None:
        if fullscreen:
            self.enter_fullscreen()
        else:
            self.leave_fullscreen()
        w, h = self.canvas.available_size()
        self.controller.resize(w, h)

    def _on_decode_failed(self, path: str, reason: str) -> None:
        logger.debug("keeping previous frame after failed decode: %s", path)
        self._update_status()

    def _on_image_changed(self, path: str) -> None:
        self.setWindowTitle(f"{self.config.window_title} - {os.path.basename(path)}")

    def _on_state_changed(self) -> None:
        sync_checks(self)
        self._update_status()

    def _update_status(self) -> None:
        self.canvas.set_overlay(self._status_builder.title(), self._status_builder.info())


def run(argv: list[str] | None = None) -> int:
    """Application entrypoint (packaging-friendly)."""
    if argv is None:
        argv = sys.argv
    argv = _apply_cli_logging_options(list(argv) or ["picstorm"])

    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("start_path", nargs="?", help="Image file to open")
    args, _ = parser.parse_known_args(_without_qt_options(argv[1:]))
    start_path = Path(args.start_path) if args.start_path else None

    app = QApplication.instance() or QApplication(argv)
    viewer = ImageViewer(load_config())

    if start_path is None:
        try:
            start_path = Path(ask_for_image())
        except NoSelectionError:
            logger.info("no image selected, exiting")
            return 0

    try:
        viewer.controller.open(start_path)
    except (EmptyDirectoryError, OSError) as e:
        logger.error("startup aborted: %s", e)
        with contextlib.suppress(Exception):
            QMessageBox.warning(None, viewer.config.window_title, str(e))
        return 1

    viewer.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
