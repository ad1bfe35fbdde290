from pathlib import Path

import pytest

pytest.importorskip("pyvips")

import numpy as np
from PySide6.QtGui import QColor, QImage

from picstorm.decoder import array_to_qimage, decode_image
from picstorm.errors import DecodeError


def _write_png(path: Path, w: int, h: int, with_alpha: bool = False) -> None:
    fmt = QImage.Format.Format_ARGB32 if with_alpha else QImage.Format.Format_RGB32
    img = QImage(w, h, fmt)
    img.fill(QColor(50, 100, 150, 128 if with_alpha else 255))
    img.setPixelColor(0, 0, QColor(255, 0, 0, 255))
    assert img.save(str(path), "PNG")


def test_decode_png_dimensions_and_pixels(tmp_path: Path):
    infile = tmp_path / "in.png"
    _write_png(infile, 7, 5)

    img = decode_image(str(infile))

    assert (img.width(), img.height()) == (7, 5)
    assert img.pixelColor(0, 0).red() == 255
    px = img.pixelColor(3, 3)
    assert (px.red(), px.green(), px.blue()) == (50, 100, 150)


def test_decode_keeps_alpha(tmp_path: Path):
    infile = tmp_path / "alpha.png"
    _write_png(infile, 4, 4, with_alpha=True)

    img = decode_image(str(infile))

    assert img.hasAlphaChannel()
    assert img.pixelColor(2, 2).alpha() == 128


def test_missing_file_is_not_a_decode_error(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        decode_image(str(tmp_path / "missing.png"))


def test_garbage_file_raises_decode_error(tmp_path: Path):
    bad = tmp_path / "broken.jpg"
    bad.write_bytes(b"definitely not a jpeg")

    with pytest.raises(DecodeError) as info:
        decode_image(str(bad))
    assert info.value.path == str(bad)
    assert info.value.reason


def test_array_to_qimage_owns_pixels():
    arr = np.zeros((3, 2, 3), dtype=np.uint8)
    arr[..., 1] = 200
    img = array_to_qimage(arr)
    del arr
    assert (img.width(), img.height()) == (2, 3)
    assert img.pixelColor(1, 2).green() == 200
