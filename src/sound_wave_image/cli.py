"""Command-line entrypoints for sound-wave-image."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from sound_wave_image.config import ConfigError, RenderSettings, load_config
from sound_wave_image.exceptions import WaveformError
from sound_wave_image.render import render_from_settings
from sound_wave_image.utils.audio_io import load_samples
from sound_wave_image.utils.logging import configure_logging, get_logger, set_log_level

app = typer.Typer(help="Render waveform images from audio files.")

LOGGER = get_logger(__name__)


def _parse_color(value: Optional[str]) -> Optional[tuple[int, int, int]]:
    if value is None:
        return None
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 3:
        raise typer.BadParameter(f"Expected R,G,B, got {value!r}.")
    try:
        channels = [int(part) for part in parts]
    except ValueError as exc:
        raise typer.BadParameter(f"Colour channels must be integers, got {value!r}.") from exc
    return (channels[0], channels[1], channels[2])


@app.command()
def render(
    input_path: Path = typer.Argument(..., help="Audio file to render."),
    output_path: Path = typer.Argument(..., help="Image file to write (format from suffix)."),
    width: Optional[int] = typer.Option(None, "--width", "-w", min=1, help="Image width."),
    height: Optional[int] = typer.Option(None, "--height", "-H", min=1, help="Image height."),
    wave_color: Optional[str] = typer.Option(
        None,
        "--wave-color",
        help="Stroke colour as R,G,B (defaults to config value).",
    ),
    background_color: Optional[str] = typer.Option(
        None,
        "--background-color",
        help="Fill colour as R,G,B (defaults to config value).",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML configuration file (defaults to the packaged settings).",
    ),
    mono: bool = typer.Option(
        False,
        "--mono/--interleaved",
        help="Average channels instead of rendering interleaved frames.",
    ),
    allow_silence: bool = typer.Option(
        False,
        "--allow-silence",
        help="Draw a flat centre line for silent audio instead of failing.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override log level."),
) -> None:
    """Decode INPUT_PATH and write its waveform image to OUTPUT_PATH."""

    stroke = _parse_color(wave_color)
    fill = _parse_color(background_color)

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        typer.echo(f"Failed to load configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    logging_section = config.get("logging")
    configure_logging(logging_section if isinstance(logging_section, dict) else None)
    if log_level:
        set_log_level(log_level)

    try:
        audio = load_samples(input_path.expanduser(), mono=mono)
    except WaveformError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    try:
        settings = RenderSettings.from_config(config, auto_width=audio.suggested_width())
        settings = settings.with_overrides(
            width=width,
            height=height,
            wave_color=stroke,
            background_color=fill,
        )
    except ConfigError as exc:
        typer.echo(f"Invalid render settings: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    LOGGER.info(
        "Rendering %s (%d samples) at %dx%d",
        input_path,
        audio.samples.size,
        settings.width,
        settings.height,
    )
    try:
        image = render_from_settings(audio.samples, settings, allow_silence=allow_silence)
        target = image.save(output_path.expanduser())
    except WaveformError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Wrote {settings.width}x{settings.height} waveform to {target}")


@app.command()
def info(
    input_path: Path = typer.Argument(..., help="Audio file to inspect."),
) -> None:
    """Print the decoded sample count, rate, channels and the automatic image width."""

    try:
        audio = load_samples(input_path.expanduser())
    except WaveformError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"samples:     {audio.samples.size}")
    typer.echo(f"sample_rate: {audio.sample_rate}")
    typer.echo(f"channels:    {audio.channels}")
    typer.echo(f"duration:    {audio.duration}s")
    typer.echo(f"auto width:  {audio.suggested_width()}")


def main() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    main()
