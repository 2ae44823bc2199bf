"""Typed view over the ``render`` section of the configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .load import ConfigError

__all__ = ["AUTO_WIDTH", "RenderSettings"]

AUTO_WIDTH = "auto"


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """Output size and colours for one render."""

    width: int
    height: int
    wave_color: tuple[int, int, int]
    background_color: tuple[int, int, int]

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        *,
        auto_width: int | None = None,
    ) -> RenderSettings:
        """Build settings from a loaded configuration.

        ``auto_width`` is used when the configured width is ``"auto"``.
        """
        section = config.get("render")
        if not isinstance(section, Mapping):
            raise ConfigError("Configuration is missing the 'render' section.")

        size = section.get("desired_size")
        if not isinstance(size, (list, tuple)) or len(size) != 2:
            raise ConfigError(f"render.desired_size must be [width, height], got {size!r}.")
        width, height = size
        if width == AUTO_WIDTH:
            if auto_width is None:
                raise ConfigError("render.desired_size width is 'auto' but no audio is known.")
            width = auto_width

        return cls(
            width=_positive_int("render.desired_size[0]", width),
            height=_positive_int("render.desired_size[1]", height),
            wave_color=_color("render.wave_color", section.get("wave_color")),
            background_color=_color("render.background_color", section.get("background_color")),
        )

    def with_overrides(
        self,
        *,
        width: int | None = None,
        height: int | None = None,
        wave_color: tuple[int, int, int] | None = None,
        background_color: tuple[int, int, int] | None = None,
    ) -> RenderSettings:
        changes: dict[str, Any] = {}
        if width is not None:
            changes["width"] = _positive_int("width", width)
        if height is not None:
            changes["height"] = _positive_int("height", height)
        if wave_color is not None:
            changes["wave_color"] = _color("wave_color", wave_color)
        if background_color is not None:
            changes["background_color"] = _color("background_color", background_color)
        return replace(self, **changes)


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}.")
    return value


def _color(name: str, value: Any) -> tuple[int, int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"{name} must be three channel values, got {value!r}.")
    channels = []
    for channel in value:
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ConfigError(f"{name} channels must be integers within 0..255, got {value!r}.")
        channels.append(channel)
    return (channels[0], channels[1], channels[2])
