from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .controller import ViewerController


class StatusOverlayBuilder:
    def __init__(self, controller: ViewerController):
        self.controller = controller

    def title(self) -> str:
        path = self.controller.current_path
        return os.path.basename(path) if path else ""

    def build_parts(self) -> list[str]:
        parts: list[str] = []
        state = self.controller.state

        file_resolution = self._get_file_resolution()
        output_resolution = self._get_output_resolution()

        if file_resolution:
            parts.append(f"File {file_resolution[0]}x{file_resolution[1]}")
        if output_resolution and output_resolution != file_resolution:
            parts.append(f"Output {output_resolution[0]}x{output_resolution[1]}")

        if state.fit_to_window:
            parts.append("[Fit]")
        if abs(state.zoom_factor - 1.0) > 1e-6:
            parts.append(f"@ {state.zoom_factor:.2f}x")
        if state.rotation_degrees:
            parts.append(f"{state.rotation_degrees}°")
        return parts

    def info(self) -> str:
        image_set = self.controller.image_set
        if image_set is None:
            return "Ready · Press Ctrl+O to open an image"
        error = self.controller.last_error
        if error:
            return f"({image_set.position_label()})  Load failed: {error}"
        parts = self.build_parts()
        if parts:
            return f"({image_set.position_label()})  {'  '.join(parts)}"
        return f"({image_set.position_label()})"

    def _get_file_resolution(self) -> tuple[int, int] | None:
        src = self.controller.source_image
        if src is None or src.isNull():
            return None
        return src.width(), src.height()

    def _get_output_resolution(self) -> tuple[int, int] | None:
        frame = self.controller.last_frame
        if frame is None or frame.isNull() or self.controller.source_image is None:
            return None
        return frame.width(), frame.height()
