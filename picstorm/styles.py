from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from PySide6.QtGui import QColor, QPalette

from .logger import get_logger

if TYPE_CHECKING:
    from PySide6.QtWidgets import QWidget

    from .ui_canvas import ImageCanvas

_logger = get_logger("styles")


# -----------------------------------------------------------------------------
# Viewer palettes
# -----------------------------------------------------------------------------


class ViewerColors:
    DARK_BACKGROUND = "#000000"
    DARK_FOREGROUND = "#FFFFFF"

    LIGHT_BACKGROUND = "#FFFFFF"
    LIGHT_FOREGROUND = "#000000"


@dataclass(frozen=True)
class ThemeColors:
    background: QColor
    foreground: QColor

    @property
    def background_hex(self) -> str:
        return self.background.name()

    @property
    def foreground_hex(self) -> str:
        return self.foreground.name()


# -----------------------------------------------------------------------------
# QSS template (window chrome only; never touches image pixels)
# -----------------------------------------------------------------------------

VIEWER_QSS = """
    QMainWindow, QMainWindow > QWidget {
        background-color: {{background}};
        color: {{foreground}};
    }
    QGraphicsView {
        background-color: {{background}};
        border: none;
    }
    QMenuBar {
        background-color: {{background}};
        color: {{foreground}};
    }
    QMenuBar::item:selected {
        background-color: {{foreground}};
        color: {{background}};
    }
    QMenu {
        background-color: {{background}};
        color: {{foreground}};
        border: 1px solid {{foreground}};
    }
    QMenu::item:selected {
        background-color: {{foreground}};
        color: {{background}};
    }
"""


def theme_colors(dark_mode: bool) -> ThemeColors:
    """Dark -> black background, white text; light -> the reverse."""
    if dark_mode:
        return ThemeColors(QColor(ViewerColors.DARK_BACKGROUND), QColor(ViewerColors.DARK_FOREGROUND))
    return ThemeColors(QColor(ViewerColors.LIGHT_BACKGROUND), QColor(ViewerColors.LIGHT_FOREGROUND))


def build_stylesheet(colors: ThemeColors) -> str:
    qss = VIEWER_QSS
    for key, val in (("background", colors.background_hex), ("foreground", colors.foreground_hex)):
        qss = qss.replace(f"{{{{{key}}}}}", val)
    return qss


def apply_theme(window: QWidget, canvas: ImageCanvas, colors: ThemeColors) -> None:
    """Colour the window, the display surface and its viewport.

    Args:
        window: top-level window whose background follows the theme
        canvas: display surface; receives background brush and overlay text colour
        colors: result of ``theme_colors``
    """
    palette = QPalette(window.palette())
    palette.setColor(QPalette.ColorRole.Window, colors.background)
    palette.setColor(QPalette.ColorRole.WindowText, colors.foreground)
    palette.setColor(QPalette.ColorRole.Base, colors.background)
    palette.setColor(QPalette.ColorRole.Text, colors.foreground)
    window.setPalette(palette)
    window.setAutoFillBackground(True)
    window.setStyleSheet(build_stylesheet(colors))

    canvas.set_theme_colors(colors.background, colors.foreground)
    _logger.debug("theme applied: bg=%s fg=%s", colors.background_hex, colors.foreground_hex)
