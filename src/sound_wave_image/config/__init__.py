"""Configuration loading helpers."""

from __future__ import annotations

from .load import ConfigError, load_config
from .render_settings import AUTO_WIDTH, RenderSettings

__all__ = [
    "AUTO_WIDTH",
    "ConfigError",
    "RenderSettings",
    "load_config",
]
