"""Conditional rotate -> fit -> zoom -> rasterize pipeline.

The whole point of this module is the fast path: with no transform active,
``render`` hands back the decoded image object itself so that switching
images costs nothing beyond the decode.
"""

from __future__ import annotations

import math

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QTransform

from .logger import get_logger
from .view_state import ViewState

_logger = get_logger("pipeline")


def rotated_size(width: int, height: int, degrees: int) -> tuple[int, int]:
    """Canvas size after rotating by a multiple of 90 degrees."""
    if degrees % 180:
        return height, width
    return width, height


def fit_scale(width: int, height: int, avail_width: int, avail_height: int) -> float:
    """Largest scale that keeps ``width x height`` inside the available area."""
    w = max(1, width)
    h = max(1, height)
    aw = max(1, avail_width)
    ah = max(1, avail_height)
    return min(aw / w, ah / h)


def target_size(width: int, height: int, state: ViewState, available: tuple[int, int]) -> tuple[int, int]:
    """Final raster size for an already rotated ``width x height`` image.

    Fit is computed first and floored, zoom multiplies on top of it (or on
    top of the native size) and is floored again. Never returns a zero side.
    """
    tw, th = width, height
    if state.fit_to_window:
        scale = fit_scale(width, height, available[0], available[1])
        tw = math.floor(tw * scale)
        th = math.floor(th * scale)
    tw = math.floor(tw * state.zoom_factor)
    th = math.floor(th * state.zoom_factor)
    return max(1, tw), max(1, th)


def rotate_image(source: QImage, degrees: int) -> QImage:
    """Rotate about the image center into a (possibly axis-swapped) canvas.

    Quarter turns map pixels one-to-one, so FastTransformation is exact.
    Uncovered canvas area stays transparent.
    """
    degrees %= 360
    if degrees == 0:
        return source
    image = source
    if not image.hasAlphaChannel():
        image = image.convertToFormat(QImage.Format.Format_ARGB32_Premultiplied)
    transform = QTransform().rotate(degrees)
    rotated = image.transformed(transform, Qt.TransformationMode.FastTransformation)
    expected = rotated_size(source.width(), source.height(), degrees)
    if (rotated.width(), rotated.height()) != expected:
        # transformed() pads by a pixel on some backends; crop back to the exact canvas
        rotated = rotated.copy(0, 0, expected[0], expected[1])
    return rotated


def render(source: QImage, state: ViewState, available: tuple[int, int]) -> QImage:
    """Produce the raster to display for ``source`` under ``state``.

    ``available`` is the (width, height) of the display area; it only matters
    when fit-to-window is on.
    """
    if state.is_identity:
        return source

    rotated = rotate_image(source, state.rotation_degrees)
    w, h = rotated.width(), rotated.height()
    tw, th = target_size(w, h, state, available)
    _logger.debug(
        "render: src=%dx%d rot=%d fit=%s zoom=%.3f -> %dx%d",
        source.width(),
        source.height(),
        state.rotation_degrees,
        state.fit_to_window,
        state.zoom_factor,
        tw,
        th,
    )
    if (tw, th) == (w, h):
        return rotated
    return rotated.scaled(
        tw,
        th,
        Qt.AspectRatioMode.IgnoreAspectRatio,
        Qt.TransformationMode.SmoothTransformation,
    )
