"""CLI application entry point for glyphtrace.

This module provides the main CLI interface using Typer.
"""

import random
from pathlib import Path
from typing import Annotated

import typer
from PIL import Image

from glyphtrace import __version__
from glyphtrace.cli.output import (
    console,
    print_bounds_table,
    print_coverage_table,
    print_error,
    print_font_info,
    print_header,
    print_layout,
    print_replay_summary,
    print_saved,
    print_step,
)
from glyphtrace.config import LoggingConfig, TracerSettings, TracingMode
from glyphtrace.core import CoverageEstimator, GlyphRasterizer, ManualScheduler, TracingSession
from glyphtrace.domain import GuideMask, SurfaceGeometry
from glyphtrace.exceptions import FontLoadError, GlyphTraceError
from glyphtrace.io import FontReader, load_recording
from glyphtrace.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphtrace",
    help="Render tracing guides and judge recorded tracing sessions.",
    add_completion=False,
    no_args_is_help=True,
)

FontArg = Annotated[
    Path,
    typer.Argument(help="Path to a TTF/OTF font file", show_default=False),
]
TextArg = Annotated[
    str,
    typer.Argument(help="Letter or word to trace", show_default=False),
]
ModeOpt = Annotated[
    str | None,
    typer.Option("--mode", "-m", help="Coverage mode (letter|word, default: by length)"),
]
LogFileOpt = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOpt = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
VerboseOpt = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Verbose console output"),
]
QuietOpt = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphtrace[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render tracing guides and judge recorded tracing sessions."""


@app.command()
def guide(
    font: FontArg,
    text: TextArg,
    width: Annotated[float, typer.Option("--width", help="Logical surface width", min=1.0)] = 768.0,
    height: Annotated[float, typer.Option("--height", help="Logical surface height", min=1.0)] = 384.0,
    pixel_ratio: Annotated[
        float, typer.Option("--pixel-ratio", "-r", help="Device pixels per logical pixel", min=0.25)
    ] = 1.0,
    mode: ModeOpt = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write a PNG preview of the guide"),
    ] = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
) -> None:
    """Lay out a letter or word and show its guide and character bounds.

    Example:
        glyphtrace guide Roboto-Regular.ttf cat --output cat.png
    """
    tracing_mode = _parse_mode(mode, text)
    settings = _build_settings(log_file, log_level, verbose, quiet)
    _configure(settings, quiet)

    if not quiet:
        print_header(__version__)

    try:
        reader = _load_font(font, settings, quiet)
        try:
            rasterizer = GlyphRasterizer(reader, settings.raster)
            nominal = (
                settings.raster.word_font_size
                if tracing_mode is TracingMode.WORD
                else settings.raster.letter_font_size
            )
            guide_mask = rasterizer.rasterize(
                text, nominal, SurfaceGeometry(width, height, pixel_ratio)
            )
            if guide_mask is None:
                print_error("Surface has no drawable area")
                raise typer.Exit(code=1)

            estimator = CoverageEstimator(settings.coverage)
            _, xs = estimator.sample_guide(guide_mask)
            sampled = [
                int(((xs >= b.start) & (xs < b.end)).sum()) for b in guide_mask.bounds
            ]

            if not quiet:
                print_step("Layout")
                print_layout(guide_mask.layout, tracing_mode.value)
                print_bounds_table(guide_mask.layout, sampled)
                if xs.size == 0:
                    console.print("  [yellow]Guide has no ink; tracing cannot complete[/yellow]")

            if output is not None:
                overlay = rasterizer.overlay(guide_mask.layout)
                preview = _guide_preview(guide_mask)
                preview.alpha_composite(overlay.to_image(guide_mask.geometry))
                preview.save(output)
                if not quiet:
                    print_saved(str(output))
        finally:
            reader.close()

    except GlyphTraceError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def replay(
    font: FontArg,
    text: TextArg,
    recording: Annotated[
        Path,
        typer.Argument(help="JSON pointer recording to replay", show_default=False),
    ],
    mode: ModeOpt = None,
    seed: Annotated[
        int, typer.Option("--seed", help="Seed for move-triggered checks")
    ] = 0,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write a PNG of the strokes over the guide"),
    ] = None,
    log_file: LogFileOpt = None,
    log_level: LogLevelOpt = "WARNING",
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
) -> None:
    """Replay a recorded tracing session and report whether it completes.

    Example:
        glyphtrace replay Roboto-Regular.ttf A session.json
    """
    tracing_mode = _parse_mode(mode, text)
    settings = _build_settings(log_file, log_level, verbose, quiet)
    _configure(settings, quiet)

    if not quiet:
        print_header(__version__)

    try:
        session_recording = load_recording(recording)
        reader = _load_font(font, settings, quiet)
        try:
            scheduler = ManualScheduler()
            effect_done: list[bool] = []
            session = TracingSession(
                reader,
                scheduler,
                settings=settings,
                rng=random.Random(seed),
                on_effect_done=lambda: effect_done.append(True),
            )
            session.resize(session_recording.surface.to_geometry())
            session.set_target(text, tracing_mode)

            if not quiet:
                print_step(f"Replaying {len(session_recording.events)} events")

            for recorded in session_recording.events:
                scheduler.advance_to(recorded.t)
                session.handle_pointer(recorded.to_event())
            scheduler.run_all()

            if not quiet:
                print_coverage_table(session.coverage(), settings.completion.pass_threshold)
                print_replay_summary(
                    events=len(session_recording.events),
                    completed=session.is_complete,
                    effect_finished=bool(effect_done),
                    stats=session.tracing_logger.stats,
                )

            if output is not None and session.guide is not None:
                preview = _guide_preview(session.guide)
                strokes = session.canvas.to_image()
                if strokes is not None:
                    preview.alpha_composite(strokes)
                preview.save(output)
                if not quiet:
                    print_saved(str(output))
        finally:
            reader.close()

    except GlyphTraceError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _parse_mode(mode: str | None, text: str) -> TracingMode:
    """Resolve the tracing mode option."""
    if not text:
        print_error("Target text must not be empty")
        raise typer.Exit(code=1)
    if mode is None:
        return TracingMode.LETTER if len(text) == 1 else TracingMode.WORD
    try:
        return TracingMode(mode.lower())
    except ValueError:
        print_error(f"Invalid mode: {mode}", details="Valid values: letter, word")
        raise typer.Exit(code=1)


def _build_settings(log_file: Path | None, log_level: str, verbose: bool, quiet: bool) -> TracerSettings:
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)
    if verbose:
        log_level = "DEBUG"
    return TracerSettings(logging=LoggingConfig(log_file=log_file, log_level=log_level))


def _configure(settings: TracerSettings, quiet: bool) -> None:
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )


def _load_font(font_path: Path, settings: TracerSettings, quiet: bool) -> FontReader:
    """Open a font, reporting it unless quiet.

    Raises:
        FontLoadError: If the font cannot be read
    """
    if not quiet:
        print_step("Loading font")

    try:
        probe = FontReader(font_path)
        probe.load()
        tolerance = settings.geometry.get_bezier_tolerance(probe.units_per_em)
        probe.close()

        reader = FontReader(font_path, flatten_tolerance=tolerance)
        reader.load()
    except Exception as e:
        raise FontLoadError(str(font_path), str(e)) from e

    if not quiet:
        print_font_info(
            font_path=str(font_path),
            family=reader.family_name,
            font_type=reader.format,
            upm=reader.units_per_em,
        )
    return reader


def _guide_preview(guide_mask: GuideMask) -> Image.Image:
    """White background with the guide ink in light grey."""
    size = (guide_mask.geometry.device_width, guide_mask.geometry.device_height)
    preview = Image.new("RGBA", size, (255, 255, 255, 255))
    ink = Image.new("RGBA", size, (224, 224, 224, 255))
    preview.paste(ink, (0, 0), Image.fromarray(guide_mask.alpha))
    return preview


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
