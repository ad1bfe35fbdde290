"""Exception types raised by the viewer."""

from __future__ import annotations


class PicStormError(Exception):
    """Base class for viewer errors."""


class EmptyDirectoryError(PicStormError):
    """The folder holds no file with a recognized image extension."""

    def __init__(self, directory: str):
        super().__init__(f"No images found in {directory}")
        self.directory = directory


class DecodeError(PicStormError):
    """A file exists but could not be decoded into a raster."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot decode {path}: {reason}")
        self.path = path
        self.reason = reason


class NoSelectionError(PicStormError):
    """The user dismissed the open dialog without choosing a file."""
