"""Configuration loading helpers for sound-wave-image."""

from __future__ import annotations

import json
import os
import warnings
from collections.abc import Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any, cast

import yaml

_Draft7Validator: type[Any] | None
_ValidationError: type[Exception] | None

try:  # pragma: no cover - optional dependency
    from jsonschema import Draft7Validator as _Draft7Validator
    from jsonschema.exceptions import ValidationError as _ValidationError
except ImportError:  # pragma: no cover - optional dependency
    _Draft7Validator = None
    _ValidationError = None

Draft7Validator: type[Any] | None = _Draft7Validator
ValidationError: type[Exception] | None = _ValidationError

__all__ = ["ConfigError", "DEFAULT_CONFIG_PATH", "load_config"]

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")
SCHEMA_PATH = Path(__file__).with_name("schema.json")
ENV_PREFIX = "SOUND_WAVE_IMAGE_"
ENV_SEPARATOR = "__"


class ConfigError(RuntimeError):
    """Raised when configuration loading or validation fails."""


def load_config(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    validate: bool = True,
) -> dict[str, Any]:
    """Load the render and logging configuration.

    Layers, later ones winning:
        1. ``config_path``, or the packaged ``default.yaml`` when omitted.
        2. The ``overrides`` mapping.
        3. ``SOUND_WAVE_IMAGE_*`` environment variables, ``__`` separating
           nested keys, e.g. ``SOUND_WAVE_IMAGE_RENDER__WAVE_COLOR="[0, 0, 0]"``.

    The merged result is checked against ``schema.json`` when ``jsonschema``
    is importable; otherwise a ``RuntimeWarning`` is emitted and the check
    is skipped.
    """

    path = Path(config_path).expanduser() if config_path is not None else DEFAULT_CONFIG_PATH
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    config = _read_yaml(path)
    if overrides:
        config = _deep_merge(config, overrides)

    env_layer = _environment_layer(os.environ)
    if env_layer:
        config = _deep_merge(config, env_layer)

    if validate:
        _validate_config(config)
    return config


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping in {path}.")
    return data


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two mappings without mutating either."""
    merged: dict[str, Any] = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _environment_layer(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``SOUND_WAVE_IMAGE_*`` variables into a nested override mapping."""
    layer: dict[str, Any] = {}
    for name, raw_value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        keys = [
            token.strip().lower().replace("-", "_")
            for token in name[len(ENV_PREFIX) :].split(ENV_SEPARATOR)
            if token.strip()
        ]
        if not keys:
            continue

        node = layer
        for key in keys[:-1]:
            child = node.get(key)
            if not isinstance(child, dict):
                child = node[key] = {}
            node = child
        node[keys[-1]] = _parse_env_value(raw_value)
    return layer


def _parse_env_value(raw_value: str) -> Any:
    """Read an environment value as YAML so lists and numbers keep their type."""
    if raw_value == "":
        return ""
    try:
        return yaml.safe_load(raw_value)
    except yaml.YAMLError:
        return raw_value


def _load_schema() -> dict[str, Any]:
    with SCHEMA_PATH.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ConfigError("Configuration schema must be a JSON object.")
    return cast(dict[str, Any], data)


def _validate_config(config: Mapping[str, Any]) -> None:
    if Draft7Validator is None or ValidationError is None:
        warnings.warn(
            "jsonschema is not installed; skipping configuration validation.",
            RuntimeWarning,
            stacklevel=3,
        )
        return

    validator = Draft7Validator(_load_schema())
    errors = sorted(validator.iter_errors(config), key=lambda err: list(err.path))
    if not errors:
        return

    lines = [
        f"- {'.'.join(str(piece) for piece in error.path) or '<root>'}: {error.message}"
        for error in errors
    ]
    raise ConfigError("Configuration validation failed:\n" + "\n".join(lines)) from errors[0]
