"""Wait cursor for the synchronous decode on the UI thread."""

from collections.abc import Iterator
from contextlib import contextmanager

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication


@contextmanager
def busy_cursor(enabled: bool = True) -> Iterator[None]:
    """Show the wait cursor while a blocking load runs.

    Decoding happens inline in the key handler, so without this a slow file
    looks like a frozen window. The cursor is restored even on error.
    """
    if not enabled or QApplication.instance() is None:
        yield
        return
    QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
    try:
        yield
    finally:
        QApplication.restoreOverrideCursor()
