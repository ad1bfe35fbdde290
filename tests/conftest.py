"""Pytest configuration.

This test suite uses PySide6 widgets in multiple modules.

Qt needs a display; default to the offscreen platform so the suite runs the
same on CI and on a desktop. A single `QApplication` is created for the whole
session as early as possible and cleanly shut down at the end.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    """Ensure a QApplication exists before collecting/running tests."""

    # Import lazily so non-Qt environments can still import this conftest.
    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    global _APP

    app = QApplication.instance()
    if app is None:
        # Keep a strong ref so it isn't GC'd mid-session.
        _APP = QApplication([])
    else:
        _APP = app


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    """Attempt a clean Qt shutdown to avoid lingering threads at interpreter exit."""

    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    app = QApplication.instance()
    if app is None:
        return

    app.quit()
    app.processEvents()


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Folder with three recognized images (mixed-case suffixes) and some noise.

    The image files hold placeholder bytes; tests that need real pixels use
    the ``fake_decoder`` fixture or write real files themselves.
    """
    for name in ("b.PNG", "a.jpg", "c.gif", "notes.txt", "archive.zip"):
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "folder.jpg").mkdir()
    return tmp_path


class FakeDecoder:
    """Stand-in for ``decode_image`` that fabricates solid rasters.

    Every decoded image is ``size`` pixels; paths whose basename is in
    ``failing`` raise DecodeError.
    """

    def __init__(self, size: tuple[int, int] = (80, 60), failing: tuple[str, ...] = ()):
        self.size = size
        self.failing = set(failing)
        self.calls: list[str] = []

    def __call__(self, path: str):
        from PySide6.QtGui import QColor, QImage

        from picstorm.errors import DecodeError

        self.calls.append(path)
        if os.path.basename(path) in self.failing:
            raise DecodeError(path, "corrupt data")
        img = QImage(self.size[0], self.size[1], QImage.Format.Format_RGB32)
        img.fill(QColor(10 * len(self.calls) % 256, 100, 200))
        return img


@pytest.fixture
def fake_decoder() -> FakeDecoder:
    return FakeDecoder()
