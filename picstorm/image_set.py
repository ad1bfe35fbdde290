"""Ordered list of browsable images drawn from one folder."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import EmptyDirectoryError
from .logger import get_logger
from .path_utils import RECOGNIZED_EXTENSIONS, abs_path, abs_path_str, has_image_extension

_logger = get_logger("image_set")


class ImageSet:
    """Sorted, extension-filtered sibling files with a wrapping cursor.

    ``entries`` never changes after construction; opening an image from
    another folder builds a new ``ImageSet``.
    """

    def __init__(self, directory: str, entries: list[str] | tuple[str, ...], current_index: int = 0):
        if not entries:
            raise EmptyDirectoryError(directory)
        self.directory = directory
        self.entries: tuple[str, ...] = tuple(entries)
        if not 0 <= current_index < len(self.entries):
            raise IndexError(f"current_index {current_index} out of range for {len(self.entries)} entries")
        self._index = current_index

    @classmethod
    def build_from(
        cls, selected_file: str | Path, extensions: tuple[str, ...] = RECOGNIZED_EXTENSIONS
    ) -> ImageSet:
        """List the selected file's folder and position the cursor on it.

        Raises ``EmptyDirectoryError`` when the folder has no recognized
        images and ``FileNotFoundError`` when the folder itself is missing.
        """
        selected = abs_path(selected_file)
        directory = selected.parent
        if not directory.is_dir():
            raise FileNotFoundError(f"Folder not found: {directory}")

        directory_str = abs_path_str(directory)
        entries = []
        with os.scandir(directory) as it:
            for entry in it:
                try:
                    if not entry.is_file():
                        continue
                except OSError:
                    continue
                if has_image_extension(entry.name, extensions):
                    # Listed under its own name, even when it is a symlink
                    entries.append(os.path.join(directory_str, entry.name))
        entries.sort(key=lambda p: os.path.basename(p))

        if not entries:
            _logger.warning("no images in folder: %s", directory_str)
            raise EmptyDirectoryError(directory_str)

        image_set = cls(directory_str, entries)
        index = image_set.index_of(selected)
        if index < 0:
            # Permissive: unsupported or vanished selection falls back to the first image
            _logger.warning("selected file not in image list, starting at first image: %s", selected)
            index = 0
        image_set._index = index

        _logger.debug("image set built: dir=%s images=%d index=%d", directory_str, len(entries), index)
        return image_set

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def current_index(self) -> int:
        return self._index

    def current(self) -> str:
        return self.entries[self._index]

    def next(self) -> str:
        self._index = (self._index + 1) % len(self.entries)
        return self.current()

    def previous(self) -> str:
        n = len(self.entries)
        self._index = (self._index - 1 + n) % n
        return self.current()

    def contains(self, path: str | Path) -> bool:
        return abs_path_str(path) in self.entries

    def index_of(self, path: str | Path) -> int:
        """Index of ``path`` in the set, or -1."""
        if not self.contains(path):
            return -1
        return self.entries.index(abs_path_str(path))

    def position_label(self) -> str:
        return f"{self._index + 1}/{len(self.entries)}"
