from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .logger import get_logger

_logger = get_logger("config")

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ViewerConfig:
    """Session defaults. Nothing here is written back to disk."""

    zoom_step: float = 1.25
    min_zoom: float = 0.05
    max_zoom: float = 20.0
    window_width: int = 900
    window_height: int = 700
    window_title: str = "PicStorm Viewer"
    start_dark: bool = False
    start_fit: bool = False


def _parse_positive_float(raw: str) -> float:
    value = float(raw)
    if value <= 0:
        raise ValueError(f"must be positive: {raw}")
    return value


def _parse_window_size(raw: str) -> tuple[int, int]:
    w, h = raw.lower().split("x", 1)
    width, height = int(w), int(h)
    if width <= 0 or height <= 0:
        raise ValueError(f"must be positive: {raw}")
    return width, height


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUE_VALUES


def load_config(environ: Mapping[str, str] | None = None) -> ViewerConfig:
    """Build a ViewerConfig from PICSTORM_* environment overrides.

    Invalid values are logged and ignored.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}

    for var, key in (
        ("PICSTORM_ZOOM_STEP", "zoom_step"),
        ("PICSTORM_MIN_ZOOM", "min_zoom"),
        ("PICSTORM_MAX_ZOOM", "max_zoom"),
    ):
        raw = (env.get(var) or "").strip()
        if not raw:
            continue
        try:
            overrides[key] = _parse_positive_float(raw)
        except ValueError as e:
            _logger.warning("ignoring %s=%r: %s", var, raw, e)

    raw_size = (env.get("PICSTORM_WINDOW_SIZE") or "").strip()
    if raw_size:
        try:
            overrides["window_width"], overrides["window_height"] = _parse_window_size(raw_size)
        except ValueError as e:
            _logger.warning("ignoring PICSTORM_WINDOW_SIZE=%r: %s", raw_size, e)

    if env.get("PICSTORM_DARK"):
        overrides["start_dark"] = _parse_flag(env["PICSTORM_DARK"])
    if env.get("PICSTORM_FIT"):
        overrides["start_fit"] = _parse_flag(env["PICSTORM_FIT"])

    config = replace(ViewerConfig(), **overrides)
    if config.min_zoom > config.max_zoom:
        _logger.warning("min_zoom %.3f exceeds max_zoom %.3f, using defaults", config.min_zoom, config.max_zoom)
        config = replace(config, min_zoom=ViewerConfig.min_zoom, max_zoom=ViewerConfig.max_zoom)
    if config.zoom_step <= 1.0:
        _logger.warning("zoom_step %.3f must exceed 1.0, using default", config.zoom_step)
        config = replace(config, zoom_step=ViewerConfig.zoom_step)
    return config
