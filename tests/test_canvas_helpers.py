import pytest
pytest.importorskip("PySide6")

from PySide6.QtGui import QColor, QImage

from picstorm.commands import COMMAND_LABELS, DEFAULT_KEY_BINDINGS, Command
from picstorm.ui_canvas import ImageCanvas


def test_canvas_image_setting(qtbot):
    canvas = ImageCanvas()
    qtbot.addWidget(canvas)

    w, h = 16, 12
    img = QImage(w, h, QImage.Format.Format_RGB888)
    img.fill(0x112233)

    canvas.set_image(img)

    assert canvas.pixmap().width() == w
    assert canvas.pixmap().height() == h
    assert canvas.sceneRect().width() == w


def test_canvas_does_not_rescale_frame(qtbot):
    canvas = ImageCanvas()
    qtbot.addWidget(canvas)
    canvas.resize(400, 300)

    img = QImage(32, 24, QImage.Format.Format_RGB888)
    img.fill(0x445566)
    canvas.set_image(img)

    assert canvas.transform().isIdentity()


def test_canvas_reports_viewport_resize(qtbot):
    canvas = ImageCanvas()
    qtbot.addWidget(canvas)
    canvas.show()

    with qtbot.waitSignal(canvas.viewport_resized, timeout=2000) as blocker:
        canvas.resize(321, 123)

    w, h = blocker.args
    assert (w, h) == canvas.available_size()


def test_canvas_theme_colours(qtbot):
    canvas = ImageCanvas()
    qtbot.addWidget(canvas)

    canvas.set_theme_colors(QColor(0, 0, 0), QColor(255, 255, 255))

    assert canvas.background_color() == QColor(0, 0, 0)
    assert canvas.foreground_color() == QColor(255, 255, 255)
    assert canvas.backgroundBrush().color() == QColor(0, 0, 0)


def test_overlay_text(qtbot):
    canvas = ImageCanvas()
    qtbot.addWidget(canvas)
    canvas.set_overlay("a.jpg", "(1/3)")
    assert (canvas.overlay_title, canvas.overlay_info) == ("a.jpg", "(1/3)")


def test_every_command_has_label_and_binding():
    for command in Command:
        assert COMMAND_LABELS[command]
        assert DEFAULT_KEY_BINDINGS[command]


def test_key_bindings_do_not_collide():
    keys = [k for seqs in DEFAULT_KEY_BINDINGS.values() for k in seqs]
    assert len(keys) == len(set(keys))
