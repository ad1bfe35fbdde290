import contextlib
import os
from typing import Any

import numpy as np
from PySide6.QtGui import QImage

from picstorm.errors import DecodeError
from picstorm.logger import get_logger

_logger = get_logger("decoder")

# Optional LIBVIPS_BIN for Windows installs without libvips on PATH
_LIBVIPS_BIN = os.environ.get("LIBVIPS_BIN")
if _LIBVIPS_BIN and os.name == "nt":
    # Best-effort only; decoding will report import errors if any
    with contextlib.suppress(OSError):
        os.add_dll_directory(_LIBVIPS_BIN)


_pyvips: Any | None = None

_RGB_BANDS = 3
_RGBA_BANDS = 4


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        # Single-image viewer: keep libvips from holding decoded frames
        with contextlib.suppress(Exception):
            pyvips.cache_set_max(0)
            pyvips.cache_set_max_mem(0)
            pyvips.cache_set_max_files(0)
        _pyvips = pyvips
    return _pyvips


def _decode_with_pyvips_from_file(path: str) -> "np.ndarray":
    """Decode an image file into an HxWx3 (RGB) or HxWx4 (RGBA) uint8 array."""
    pyvips = _get_pyvips_module()
    image = pyvips.Image.new_from_file(path, access="sequential")

    with contextlib.suppress(Exception):
        image = image.colourspace("srgb")
    if image.format != "uchar":
        image = image.cast("uchar")

    has_alpha = image.hasalpha()
    if has_alpha and image.bands == 2:
        # grey + alpha
        image = pyvips.Image.bandjoin([image[0], image[0], image[0], image[1]])
    elif has_alpha and image.bands > _RGBA_BANDS:
        image = image.extract_band(0, n=_RGBA_BANDS)
    elif not has_alpha and image.bands > _RGB_BANDS:
        image = image.extract_band(0, n=_RGB_BANDS)
    elif image.bands < _RGB_BANDS:
        image = pyvips.Image.bandjoin([image[0]] * _RGB_BANDS)

    mem = image.write_to_memory()
    array = np.frombuffer(mem, dtype=np.uint8).reshape(image.height, image.width, image.bands)
    if array.shape[2] not in (_RGB_BANDS, _RGBA_BANDS):
        raise RuntimeError(f"Unsupported band count after conversion: {array.shape[2]}")
    return array


def array_to_qimage(array: "np.ndarray") -> QImage:
    """Wrap an RGB/RGBA uint8 array in a QImage that owns its pixels."""
    array = np.ascontiguousarray(array, dtype=np.uint8)
    height, width, bands = array.shape
    fmt = QImage.Format.Format_RGBA8888 if bands == _RGBA_BANDS else QImage.Format.Format_RGB888
    qimg = QImage(array.data, width, height, width * bands, fmt)
    # QImage borrows the numpy buffer; detach before the array goes away
    return qimg.copy()


def decode_image(file_path: str) -> QImage:
    """Decode ``file_path`` into a QImage.

    Raises FileNotFoundError when the path does not exist and DecodeError
    for anything the codec rejects.
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(file_path)
    try:
        array = _decode_with_pyvips_from_file(file_path)
    except Exception as e:
        _logger.debug("decode failed: %s: %s", file_path, e)
        raise DecodeError(file_path, str(e).strip() or type(e).__name__) from e

    qimg = array_to_qimage(array)
    if qimg.isNull():
        raise DecodeError(file_path, "empty raster")
    _logger.debug("decoded %s: %dx%d bands=%d", file_path, qimg.width(), qimg.height(), array.shape[2])
    return qimg
