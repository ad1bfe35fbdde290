import contextlib

from PySide6.QtCore import QPoint, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QImage, QPixmap
from PySide6.QtWidgets import QFrame, QGraphicsPixmapItem, QGraphicsScene, QGraphicsView

from .commands import Command
from .logger import get_logger

_logger = get_logger("ui_canvas")


class ImageCanvas(QGraphicsView):
    """Scrollable display surface for an already rendered frame.

    The canvas never scales or rotates on its own; the pipeline hands it the
    final raster and the view only centers and scrolls it.
    """

    viewport_resized = Signal(int, int)
    command_requested = Signal(object)  # Command

    def __init__(self, parent=None):
        super().__init__(parent)
        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)
        self._pix_item = QGraphicsPixmapItem()
        self._scene.addItem(self._pix_item)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setFrameShadow(QFrame.Shadow.Plain)
        self.setLineWidth(0)
        self.setViewportMargins(0, 0, 0, 0)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        # Keys belong to the window-wide shortcuts, not to scrolling
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self._background = QColor(255, 255, 255)
        self._foreground = QColor(0, 0, 0)
        self.overlay_title = ""
        self.overlay_info = ""

        # Right-click drag state
        self._rc_drag_active = False
        self._rc_drag_start_view: QPoint | None = None
        self._rc_drag_start_h = 0
        self._rc_drag_start_v = 0

    # ---- content ----
    def set_image(self, image: QImage) -> None:
        self.set_pixmap(QPixmap.fromImage(image))

    def set_pixmap(self, pixmap: QPixmap) -> None:
        self._pix_item.setPixmap(pixmap)
        self._pix_item.setOffset(0, 0)
        self._scene.setSceneRect(QRectF(pixmap.rect()))
        self.centerOn(self._pix_item)

    def pixmap(self) -> QPixmap:
        return self._pix_item.pixmap()

    def available_size(self) -> tuple[int, int]:
        vp = self.viewport()
        return vp.width(), vp.height()

    # ---- theme ----
    def set_theme_colors(self, background: QColor, foreground: QColor) -> None:
        self._background = QColor(background)
        self._foreground = QColor(foreground)
        self.setBackgroundBrush(self._background)
        with contextlib.suppress(Exception):
            pal = self.viewport().palette()
            pal.setColor(self.viewport().backgroundRole(), self._background)
            self.viewport().setPalette(pal)
        self.viewport().update()

    def background_color(self) -> QColor:
        return QColor(self._background)

    def foreground_color(self) -> QColor:
        return QColor(self._foreground)

    def set_overlay(self, title: str, info: str) -> None:
        self.overlay_title = title
        self.overlay_info = info
        self.viewport().update()

    # ---- events ----
    def resizeEvent(self, event):
        super().resizeEvent(event)
        w, h = self.available_size()
        self.viewport_resized.emit(w, h)

    def wheelEvent(self, event) -> None:
        if self._pix_item.pixmap().isNull():
            return
        angle = event.angleDelta().y()
        if angle == 0:
            super().wheelEvent(event)
            return
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            self.command_requested.emit(Command.ZOOM_IN if angle > 0 else Command.ZOOM_OUT)
        else:
            self.command_requested.emit(Command.PREVIOUS_IMAGE if angle > 0 else Command.NEXT_IMAGE)
        event.accept()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.RightButton and self._handle_right_click(event):
            return
        super().mousePressEvent(event)

    def _handle_right_click(self, event) -> bool:
        """Handle right-click: Enter manual panning mode if scrollbar exists."""
        hbar = self.horizontalScrollBar()
        vbar = self.verticalScrollBar()
        if not (hbar.maximum() > 0 or vbar.maximum() > 0):
            return False

        self._rc_drag_active = True
        self._rc_drag_start_view = event.position().toPoint()
        self._rc_drag_start_h = hbar.value()
        self._rc_drag_start_v = vbar.value()
        event.accept()
        return True

    def mouseMoveEvent(self, event):
        if self._rc_drag_active and self._rc_drag_start_view is not None:
            pos = event.position().toPoint()
            dx = pos.x() - self._rc_drag_start_view.x()
            dy = pos.y() - self._rc_drag_start_view.y()
            self.horizontalScrollBar().setValue(self._rc_drag_start_h - dx)
            self.verticalScrollBar().setValue(self._rc_drag_start_v - dy)
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.RightButton and self._rc_drag_active:
            self._rc_drag_active = False
            self._rc_drag_start_view = None
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def drawForeground(self, painter, rect):
        title = self.overlay_title
        info = self.overlay_info
        if not title and not info:
            return
        try:
            painter.save()
            painter.resetTransform()

            font = QFont()
            font.setPointSize(10)
            painter.setFont(font)

            fm = painter.fontMetrics()
            line_h = fm.height()
            box_w = max(fm.horizontalAdvance(title), fm.horizontalAdvance(info)) + 20
            box_h = (line_h * 2) + 10

            # Translucent plate in the background colour keeps text readable over the image
            plate = QColor(self._background)
            plate.setAlpha(160)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(plate)
            painter.drawRoundedRect(8, 8, box_w, box_h, 6, 6)

            painter.setPen(self._foreground)
            painter.drawText(18, 8 + line_h, title)
            painter.drawText(18, 8 + line_h * 2, info)
            painter.restore()
        except Exception as ex:
            _logger.debug("overlay paint failed: %s", ex)
