"""Parallel processing orchestration for batch icon generation.

This module coordinates the full icon workflow with parallel processing
of individual artwork files using ProcessPoolExecutor.

Key components:
- process_icon: Top-level picklable function for parallel execution
- IconProcessor: Main orchestrator class for batch processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from flatshadow.config import FlatShadowSettings
from flatshadow.core.context import GeometryContext
from flatshadow.core.silhouette import combine_paths
from flatshadow.domain import CompoundShape
from flatshadow.exceptions import FlatShadowError, ProcessingCancelledError, SvgSaveError
from flatshadow.icon import DEFAULT_STYLE, IconComposer, IconStyle, get_style, restore_style
from flatshadow.io import IconWriter, SvgReader, format_path_data, parse_path_data
from flatshadow.utils import ProcessingLogger, ProcessingStats, configure_logging

ProgressCallback = Callable[[int, int, str, bool], None]


def load_glyph(
    input_path: Path, context: GeometryContext | None = None
) -> tuple[CompoundShape, dict[str, Any]]:
    """Read the glyph outline of an SVG file and its stored icon options.

    Icons written by this tool give back their stored glyph rather than the
    full drawing, along with the style options they were written with;
    other documents are merged into one outline and have no options.

    Returns:
        (glyph, options) where options are IconStyle fields, possibly empty

    Raises:
        FileNotFoundError: If the file does not exist
        SvgLoadError: If the file cannot be parsed
        PathDataError: If a stored glyph is malformed
    """
    reader = SvgReader(input_path)
    reader.load()
    options = reader.icon_specs()
    path_data = options.pop("icon_path_data", None)
    if path_data:
        return parse_path_data(path_data), options
    return combine_paths(reader.shapes, context), options


def process_icon(
    path_data: str,
    style_dict: dict[str, Any],
    settings_dict: dict[str, Any],
) -> dict[str, Any]:
    """Compose a single icon.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Parses the glyph, composes the icon and renders it as SVG markup.

    Args:
        path_data: Glyph outline as SVG path data
        style_dict: Serialized IconStyle
        settings_dict: Serialized FlatShadowSettings (geometry and shadow are used)

    Returns:
        Dictionary containing either:
        - Success: {"svg": str, "glyph_paths": int, "shadow_paths": int,
          "duration_ms": float}
        - Error: {"error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        settings = FlatShadowSettings.model_validate(settings_dict)
        style = IconStyle.model_validate(style_dict)
        context = GeometryContext(config=settings.geometry)

        glyph = parse_path_data(path_data)
        drawing = IconComposer(style, context, settings.shadow).compose(glyph)
        flat_shadow = drawing.get_layer("flat-shadow")

        return {
            "svg": IconWriter(drawing).to_string(),
            "glyph_paths": len(glyph.paths),
            "shadow_paths": len(flat_shadow.shape.paths) if flat_shadow else 0,
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class IconProcessor:
    """Orchestrates parallel icon generation.

    Manages the complete workflow:
    1. Load artwork files and merge their outlines
    2. Skip files without anything to draw
    3. Compose icons in parallel using worker processes
    4. Write '{stem}-icon.svg' files and update statistics

    Example:
        processor = IconProcessor(get_default_settings())
        stats = processor.process(
            inputs=[Path("star.svg"), Path("heart.svg")],
            output_dir=Path("icons"),
            max_workers=4,
        )
    """

    def __init__(self, config: FlatShadowSettings) -> None:
        """Initialize icon processor with configuration.

        Args:
            config: Settings containing geometry, shadow and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)
        self.context = GeometryContext(config=config.geometry)

    @staticmethod
    def get_output_path(input_path: Path, output_dir: Path | None = None) -> Path:
        """Output file for an input, placed in output_dir when given."""
        output_path = IconWriter.get_output_path(input_path)
        if output_dir is not None:
            return output_dir / output_path.name
        return output_path

    def process(
        self,
        inputs: list[Path],
        output_dir: Path | None = None,
        style_version: str | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
        style_overrides: dict[str, Any] | None = None,
    ) -> ProcessingStats:
        """Generate icons for a batch of SVG files.

        Icons written by this tool keep the options they were written with
        unless style_version or style_overrides replace them.

        Args:
            inputs: SVG artwork files
            output_dir: Directory for output files (next to inputs if None)
            style_version: Icon style version (None = stored or default)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, icon_name, success)
                for progress updates
            style_overrides: Style fields replacing the version's defaults

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            UnknownStyleError: If the style version does not exist
            ProcessingCancelledError: If processing is cancelled by user
        """
        overrides = style_overrides or {}
        get_style(style_version or DEFAULT_STYLE, **overrides)
        stats = self.processing_logger.start_run()

        if max_workers is None:
            max_workers = self.config.processing.max_workers
        if output_dir is not None:
            output_dir.mkdir(parents=True, exist_ok=True)

        self.logger.info(
            "Starting batch processing",
            inputs=len(inputs),
            style=style_version,
            output_dir=str(output_dir) if output_dir else None,
            max_workers=max_workers,
        )

        try:
            tasks = self._load_inputs(inputs, style_version, overrides)
            if tasks:
                self._process_parallel(tasks, output_dir, max_workers, progress_callback)
            else:
                self.logger.info("No icons to process")
        finally:
            self.processing_logger.finish_run()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            shadow_paths=stats.shadow_paths,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return stats

    def _load_inputs(
        self,
        inputs: list[Path],
        style_version: str | None,
        overrides: dict[str, Any],
    ) -> dict[Path, tuple[str, dict[str, Any]]]:
        """Read every input, keeping the ones with something to draw.

        Returns:
            Glyph path data and serialized IconStyle by input file
        """
        tasks: dict[Path, tuple[str, dict[str, Any]]] = {}
        for input_path in inputs:
            self.processing_logger.log_icon_start(input_path.name)
            try:
                glyph, stored = load_glyph(input_path, self.context)
                style = restore_style(stored, style_version, **overrides)
            except (FileNotFoundError, FlatShadowError, ValidationError) as e:
                self.processing_logger.log_icon_error(input_path.name, e)
                continue

            path_data = format_path_data(glyph)
            if path_data:
                tasks[input_path] = (path_data, style.model_dump())
            elif self.config.processing.skip_empty:
                self.processing_logger.log_icon_skipped(input_path.name, "no drawable paths")
            else:
                self.processing_logger.log_icon_error(input_path.name, "no drawable paths")

        self.logger.info(
            "Filtered inputs",
            total=len(inputs),
            to_process=len(tasks),
            skipped=self.processing_logger.stats.skipped_count,
        )
        return tasks

    def _process_parallel(
        self,
        tasks: dict[Path, tuple[str, dict[str, Any]]],
        output_dir: Path | None,
        max_workers: int | None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Compose icons in parallel using ProcessPoolExecutor.

        Args:
            tasks: Glyph path data and style by input file
            output_dir: Directory for output files
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, icon_name, success)

        Raises:
            ProcessingCancelledError: On KeyboardInterrupt, after pending
                work is cancelled
        """
        settings_dict = self.config.model_dump(include={"geometry", "shadow"})

        self.logger.info(
            "Starting parallel processing",
            icon_count=len(tasks),
            max_workers=max_workers,
        )

        total = len(tasks)
        pending: dict[Future, Path] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for input_path, (path_data, style_dict) in tasks.items():
                future = executor.submit(process_icon, path_data, style_dict, settings_dict)
                pending[future] = input_path

            try:
                for completed, future in enumerate(as_completed(pending), start=1):
                    input_path = pending.pop(future)
                    success = self._handle_result(
                        future, input_path, self.get_output_path(input_path, output_dir)
                    )
                    if progress_callback is not None:
                        progress_callback(completed, total, input_path.name, success)

            except KeyboardInterrupt:
                for f in pending:
                    f.cancel()
                self.processing_logger.log_cancelled(len(pending))
                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    self.processing_logger.stats.processed_count, len(pending)
                ) from None

    def _handle_result(self, future: Future, input_path: Path, output_path: Path) -> bool:
        """Save one worker result; returns whether an icon was written."""
        icon_name = input_path.name
        try:
            result = future.result()
            if "error" in result:
                self.processing_logger.log_icon_error(
                    icon_name, result["error"], traceback=result.get("traceback")
                )
                return False

            self._save_icon(result["svg"], output_path)
        except Exception as e:
            # Executor-level or save error
            self.processing_logger.log_icon_error(
                icon_name, e, traceback=traceback.format_exc()
            )
            return False

        self.processing_logger.log_shadow_built(
            icon_name, input_paths=result["glyph_paths"], shadow_paths=result["shadow_paths"]
        )
        self.processing_logger.log_icon_complete(
            icon_name,
            shadow_paths=result["shadow_paths"],
            duration_ms=result.get("duration_ms", 0.0),
        )
        return True

    def _save_icon(self, svg: str, output_path: Path) -> None:
        try:
            output_path.write_text(svg, encoding="utf-8")
        except OSError as e:
            raise SvgSaveError(str(output_path), str(e)) from e
        self.logger.debug("Icon saved", output=str(output_path))
