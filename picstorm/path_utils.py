"""Path normalization utilities.

This module centralizes the viewer's path rules:

- Use absolute paths when interacting with the filesystem/UI, so that the
  selected file can be located in the sorted sibling list.
- Recognize images by a lower-cased suffix match.

Keep this module free of Qt dependencies.
"""

from __future__ import annotations

import os
from pathlib import Path

RECOGNIZED_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".gif")

_DRIVE_PREFIX_LEN = 2


def _normalize_drive_letter(path_str: str) -> str:
    # Normalize drive letter casing on Windows ("c:\\" -> "C:\\").
    if len(path_str) >= _DRIVE_PREFIX_LEN and path_str[1] == ":":
        return path_str[0].upper() + path_str[1:]
    return path_str


def abs_path(path: str | Path) -> Path:
    """Return an absolute path without requiring that it exists.

    Symlinks are not followed: a link stays in the folder it was found in,
    under its own name. ``..`` components are collapsed lexically.
    """
    return Path(os.path.abspath(Path(path).expanduser()))


def abs_path_str(path: str | Path) -> str:
    """Absolute, OS-native path string (Windows uses backslashes)."""
    return _normalize_drive_letter(str(abs_path(path)))


def has_image_extension(path: str | Path, extensions: tuple[str, ...] = RECOGNIZED_EXTENSIONS) -> bool:
    return Path(path).suffix.lower() in extensions


def dialog_filter(extensions: tuple[str, ...] = RECOGNIZED_EXTENSIONS) -> str:
    """Name filter for QFileDialog, e.g. ``Image Files (*.jpg *.png)``."""
    patterns = " ".join(f"*{ext}" for ext in extensions)
    return f"Image Files ({patterns})"
