from __future__ import annotations

from dataclasses import dataclass

# Floating point comparison tolerance
FLOAT_EPSILON = 1e-6

ROTATION_STEP = 90
FULL_TURN = 360


@dataclass
class ViewState:
    """Transform toggles that affect how the current image is rendered.

    Owned and mutated by the controller; the pipeline and theme code only read it.
    """

    zoom_factor: float = 1.0
    rotation_degrees: int = 0
    fit_to_window: bool = False
    dark_mode: bool = False
    fullscreen: bool = False
    min_zoom: float = 0.05
    max_zoom: float = 20.0

    @property
    def is_identity(self) -> bool:
        """True when rendering must return the decoded image untouched."""
        return (
            not self.fit_to_window
            and self.rotation_degrees % FULL_TURN == 0
            and abs(self.zoom_factor - 1.0) < FLOAT_EPSILON
        )

    def _clamp_zoom(self, value: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, float(value)))

    def rotate_by(self, degrees: int) -> None:
        self.rotation_degrees = (self.rotation_degrees + degrees) % FULL_TURN

    def rotate_right(self) -> None:
        self.rotate_by(ROTATION_STEP)

    def rotate_left(self) -> None:
        self.rotate_by(-ROTATION_STEP)

    def zoom_in(self, step: float = 1.25) -> None:
        self.zoom_factor = self._clamp_zoom(self.zoom_factor * step)

    def zoom_out(self, step: float = 1.25) -> None:
        self.zoom_factor = self._clamp_zoom(self.zoom_factor / step)

    def reset_zoom(self) -> None:
        self.zoom_factor = 1.0

    def toggle_fit(self) -> None:
        # Fit establishes a fresh baseline; stale zoom never carries over.
        self.fit_to_window = not self.fit_to_window
        self.zoom_factor = 1.0

    def toggle_dark_mode(self) -> None:
        self.dark_mode = not self.dark_mode

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen

    def reset_for_navigation(self) -> None:
        """Per-image transforms do not follow the user to the next image."""
        self.zoom_factor = 1.0
        self.rotation_degrees = 0
