"""CLI application entry point for flatshadow.

This module provides the main CLI interface using Typer.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from flatshadow import __version__
from flatshadow.cli.output import (
    console,
    create_progress,
    print_artwork_info,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_errors,
    print_header,
    print_icon_saved,
    print_processing_info,
    print_step,
    print_style_info,
    print_success,
)
from flatshadow.config import LoggingConfig, get_default_settings
from flatshadow.core import GeometryContext, shadow_of
from flatshadow.core.processor import IconProcessor, load_glyph
from flatshadow.domain import Direction, FillRule
from flatshadow.exceptions import (
    FlatShadowError,
    ProcessingCancelledError,
    SvgLoadError,
    SvgSaveError,
)
from flatshadow.icon import DEFAULT_STYLE, IconComposer, get_style, restore_style
from flatshadow.io import IconWriter, format_path_data, parse_path_data
from flatshadow.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="flatshadow",
    help="Cast long flat shadows from vector shapes and compose app icons.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by all commands."""

    log_file: Path | None = None
    log_level: str = "WARNING"
    verbose: bool = False
    quiet: bool = False

    def logging_config(self) -> LoggingConfig:
        return LoggingConfig(
            log_file=self.log_file,
            log_level="DEBUG" if self.verbose else self.log_level,
        )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]FlatShadow[/bold blue] v{__version__}")
        raise typer.Exit()


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _setup_logging(state: CliState) -> None:
    config = state.logging_config()
    configure_logging(
        log_file=config.log_file,
        console_level=config.log_level,
        file_level=config.file_log_level,
        quiet=state.quiet,
    )


@app.callback()
def common_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
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
    """Cast long flat shadows from vector shapes and compose app icons."""
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    ctx.obj = CliState(
        log_file=log_file,
        log_level=log_level.upper(),
        verbose=verbose,
        quiet=quiet,
    )


@app.command()
def shadow(
    ctx: typer.Context,
    path_data: Annotated[
        str,
        typer.Argument(
            help="SVG path data of the shape casting the shadow",
            show_default=False,
        ),
    ],
    angle: Annotated[
        float,
        typer.Option(
            "--angle",
            "-a",
            help="Light direction in degrees",
        ),
    ] = 135.0,
    distance: Annotated[
        float,
        typer.Option(
            "--distance",
            "-d",
            help="Shadow length",
        ),
    ] = 1.0,
    clip: Annotated[
        str | None,
        typer.Option(
            "--clip",
            help="SVG path data of a region the shadow is clipped to",
        ),
    ] = None,
    evenodd: Annotated[
        bool,
        typer.Option(
            "--evenodd",
            help="Resolve overlapping paths with the even-odd rule",
        ),
    ] = False,
) -> None:
    """Print the flat shadow silhouette of a shape as SVG path data.

    Example:
        flatshadow shadow "M0,0 L1,0 L1,1 L0,1 Z" --angle 135 --distance 1
    """
    state = _state(ctx)
    _setup_logging(state)

    fill_rule = FillRule.EVENODD if evenodd else FillRule.NONZERO
    try:
        shape = parse_path_data(path_data, fill_rule)
        clip_shape = parse_path_data(clip) if clip else None
        silhouette = shadow_of(
            shape,
            Direction(angle=angle, distance=distance),
            GeometryContext.default(),
            clip=clip_shape,
        )
    except FlatShadowError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    typer.echo(format_path_data(silhouette))


def _validate_input(path: Path) -> None:
    if not path.exists():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not path.is_file():
        print_error(
            f"Input path is not a file: {path}",
            details="Please provide a path to an SVG file.",
        )
        raise typer.Exit(code=1)


@app.command()
def icon(
    ctx: typer.Context,
    input_svg: Annotated[
        Path,
        typer.Argument(
            help="Path to the SVG artwork",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-icon.svg)",
        ),
    ] = None,
    style: Annotated[
        str | None,
        typer.Option(
            "--style",
            "-s",
            help=f"Icon style version, 11.0 to 16.0 (default: stored style or {DEFAULT_STYLE})",
        ),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option(
            "--color",
            help="Glyph colour as #rrggbb",
        ),
    ] = None,
    background: Annotated[
        str | None,
        typer.Option(
            "--background",
            help="Background colour as #rrggbb",
        ),
    ] = None,
    angle: Annotated[
        float | None,
        typer.Option(
            "--angle",
            "-a",
            help="Flat shadow direction in degrees",
        ),
    ] = None,
    icon_size: Annotated[
        float | None,
        typer.Option(
            "--icon-size",
            help="Glyph size as a fraction of the icon (0-1]",
        ),
    ] = None,
) -> None:
    """Compose an app icon with a long flat shadow from an SVG file.

    Example:
        flatshadow icon star.svg --style 16.0 --background "#875A7B"

    This will create star-icon.svg next to the input.
    """
    state = _state(ctx)
    _validate_input(input_svg)
    _setup_logging(state)

    if not state.quiet:
        print_header(__version__)

    output_path = output or IconWriter.get_output_path(input_svg)

    try:
        if style is not None:
            get_style(style)
        context = GeometryContext.default()

        if not state.quiet:
            print_step("Loading artwork")
        glyph, stored = load_glyph(input_svg, context)
        if not state.quiet:
            print_artwork_info(str(input_svg), len(glyph.paths), glyph.edge_count)

        icon_style = restore_style(
            stored,
            style,
            icon_color=color,
            background_color=background,
            flat_shadow_angle=angle,
            icon_size=icon_size,
        )

        if not state.quiet:
            print_step("Composing icon")
            print_style_info(icon_style.version, icon_style.size, icon_style.flat_shadow_angle)
        drawing = IconComposer(icon_style, context).compose(glyph)
        IconWriter(drawing, output_path).save()

    except ValidationError as e:
        print_error("Invalid style option", details=_first_validation_error(e))
        raise typer.Exit(code=1)
    except SvgLoadError as e:
        print_error(f"Could not load SVG: {e.reason}")
        raise typer.Exit(code=1)
    except SvgSaveError as e:
        print_error(f"Could not save icon: {e.reason}")
        raise typer.Exit(code=1)
    except FlatShadowError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

    if not state.quiet:
        print_icon_saved(str(output_path), len(drawing.layers))


@app.command()
def batch(
    ctx: typer.Context,
    inputs: Annotated[
        list[Path],
        typer.Argument(
            help="SVG artwork files",
            show_default=False,
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-d",
            help="Directory for icons (default: next to each input)",
        ),
    ] = None,
    style: Annotated[
        str | None,
        typer.Option(
            "--style",
            "-s",
            help=f"Icon style version, 11.0 to 16.0 (default: stored style or {DEFAULT_STYLE})",
        ),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option(
            "--color",
            help="Glyph colour as #rrggbb",
        ),
    ] = None,
    background: Annotated[
        str | None,
        typer.Option(
            "--background",
            help="Background colour as #rrggbb",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
) -> None:
    """Compose icons for many SVG files in parallel.

    Example:
        flatshadow batch icons/*.svg -d build/icons -j 4
    """
    state = _state(ctx)

    if not state.quiet:
        print_header(__version__)

    settings = get_default_settings()
    settings.processing.max_workers = workers
    settings.logging = state.logging_config()
    overrides: dict[str, Any] = {"icon_color": color, "background_color": background}

    try:
        get_style(style or DEFAULT_STYLE, **overrides)
    except ValidationError as e:
        print_error("Invalid style option", details=_first_validation_error(e))
        raise typer.Exit(code=1)
    except FlatShadowError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not state.quiet:
        actual_workers = workers if workers else os.cpu_count() or 1
        print_step(f"Processing {len(inputs)} files")
        print_processing_info(actual_workers, is_auto=(workers is None))

    processor = IconProcessor(settings)

    def run(progress_callback: Any = None) -> Any:
        return processor.process(
            inputs=inputs,
            output_dir=output_dir,
            style_version=style,
            max_workers=workers,
            progress_callback=progress_callback,
            style_overrides=overrides,
        )

    try:
        if state.quiet:
            stats = run()
        else:
            with create_progress() as progress:
                task_id = progress.add_task(f"Processing {len(inputs)} icons", total=len(inputs))
                stats = run(lambda completed, *_: progress.update(task_id, completed=completed))
    except ProcessingCancelledError as e:
        if not state.quiet:
            print_cancellation_notice()
            print_cancellation_summary(processed=e.processed_count, cancelled=e.pending_count)
        raise typer.Exit(code=130) from None
    except KeyboardInterrupt:
        # Interrupted while reading inputs, before any work was submitted
        if not state.quiet:
            print_cancellation_notice()
        raise typer.Exit(code=130) from None
    except FlatShadowError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not state.quiet:
        print_success(
            total_time_s=stats.duration_seconds,
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            avg_time_ms=stats.avg_icon_time_ms,
            min_time_ms=stats.min_icon_time_ms,
            max_time_ms=stats.max_icon_time_ms,
        )
        print_errors(stats.errors)


def _first_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', '')}"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
