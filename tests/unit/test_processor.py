"""Unit tests for batch icon processing."""

import logging
from pathlib import Path

import pytest
import structlog

from flatshadow.config import FlatShadowSettings, get_default_settings
from flatshadow.core.boolean import ShapelyBackend
from flatshadow.core.processor import IconProcessor, load_glyph, process_icon
from flatshadow.exceptions import ProcessingCancelledError, UnknownStyleError
from flatshadow.icon import get_style
from flatshadow.io import SvgReader
from flatshadow.utils import ProcessingLogger, configure_logging

SQUARE = "M0 0 L10 0 L10 10 L0 10 Z"

ARTWORK = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<path d="M2 2 L22 2 L22 22 L2 22 Z"/>'
    '<circle cx="12" cy="12" r="4"/>'
    "</svg>"
)
EMPTY_ARTWORK = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"></svg>'


@pytest.fixture
def settings(tmp_path: Path) -> FlatShadowSettings:
    settings = get_default_settings()
    settings.logging.log_file = tmp_path / "flatshadow.log"
    return settings


@pytest.fixture
def artwork(tmp_path: Path) -> Path:
    path = tmp_path / "star.svg"
    path.write_text(ARTWORK)
    return path


class TestProcessIcon:
    """Tests for the worker function."""

    def test_success(self) -> None:
        """Test a glyph is composed into SVG markup."""
        settings = FlatShadowSettings().model_dump(include={"geometry", "shadow"})
        result = process_icon(SQUARE, get_style("16.0").model_dump(), settings)
        assert "error" not in result
        assert 'id="icon"' in result["svg"]
        assert 'id="flat-shadow"' in result["svg"]
        assert result["glyph_paths"] == 1
        assert result["shadow_paths"] >= 1
        assert result["duration_ms"] >= 0

    def test_bad_path_data(self) -> None:
        """Test worker errors come back as data, not exceptions."""
        result = process_icon("L0 0", get_style().model_dump(), {})
        assert "svg" not in result
        assert "Invalid path data" in result["error"]
        assert "Traceback" in result["traceback"]

    def test_empty_glyph(self) -> None:
        """Test an empty glyph is reported as an error."""
        result = process_icon("", get_style().model_dump(), {})
        assert "no drawable outline" in result["error"]

    def test_bad_style(self) -> None:
        """Test an invalid style dict is reported as an error."""
        result = process_icon(SQUARE, {"version": "16.0", "size": -1}, {})
        assert "error" in result


class TestLoadGlyph:
    """Tests for reading glyphs and stored options from SVG files."""

    def test_evenodd_element_keeps_hole(self, tmp_path: Path) -> None:
        """Test an even-odd element with same-wound contours loads with its hole."""
        path = tmp_path / "ring.svg"
        path.write_text(
            '<svg xmlns="http://www.w3.org/2000/svg">'
            '<path fill-rule="evenodd" d="M0,0 L10,0 L10,10 L0,10 Z M3,3 L7,3 L7,7 L3,7 Z"/>'
            "</svg>"
        )
        glyph, options = load_glyph(path)
        assert ShapelyBackend().area(glyph) == pytest.approx(84.0)
        assert options == {}

    def test_elements_resolved_separately(self, tmp_path: Path) -> None:
        """Test each element is filled under its own rule before merging."""
        path = tmp_path / "art.svg"
        path.write_text(
            '<svg xmlns="http://www.w3.org/2000/svg">'
            '<path fill-rule="evenodd" d="M0,0 L10,0 L10,10 L0,10 Z M3,3 L7,3 L7,7 L3,7 Z"/>'
            '<rect x="4" y="4" width="2" height="2"/>'
            "</svg>"
        )
        glyph, _ = load_glyph(path)
        assert ShapelyBackend().area(glyph) == pytest.approx(88.0)

    def test_written_icon_options(
        self, settings: FlatShadowSettings, artwork: Path, tmp_path: Path
    ) -> None:
        """Test a written icon gives back its glyph and style options."""
        IconProcessor(settings).process(
            [artwork],
            style_version="11.0",
            max_workers=1,
            style_overrides={"icon_color": "#FF0000"},
        )
        glyph, options = load_glyph(tmp_path / "star-icon.svg")
        assert not glyph.is_empty()
        assert "icon_path_data" not in options
        assert options["version"] == "11.0"
        assert options["icon_color"] == "#FF0000"
        assert options["size"] == 70.0


class TestGetOutputPath:
    """Tests for output path generation."""

    def test_next_to_input(self) -> None:
        """Test outputs default to the input's directory."""
        assert IconProcessor.get_output_path(Path("/art/star.svg")) == Path("/art/star-icon.svg")

    def test_output_dir(self) -> None:
        """Test outputs are placed in output_dir when given."""
        result = IconProcessor.get_output_path(Path("/art/star.svg"), Path("/icons"))
        assert result == Path("/icons/star-icon.svg")


class TestIconProcessor:
    """Tests for IconProcessor.process."""

    def test_process_single(
        self, settings: FlatShadowSettings, artwork: Path, tmp_path: Path
    ) -> None:
        """Test one artwork file becomes one icon file."""
        output_dir = tmp_path / "icons"
        progress: list[tuple[int, int, str, bool]] = []

        stats = IconProcessor(settings).process(
            [artwork],
            output_dir=output_dir,
            max_workers=1,
            progress_callback=lambda *args: progress.append(args),
        )

        assert stats.processed_count == 1
        assert stats.error_count == 0
        assert stats.shadow_paths >= 1
        assert len(stats.icon_timings_ms) == 1
        assert progress == [(1, 1, "star.svg", True)]

        output = output_dir / "star-icon.svg"
        assert output.exists()
        reader = SvgReader(output)
        reader.load()
        assert reader.icon_specs()["version"] == "16.0"

    def test_style_overrides(
        self, settings: FlatShadowSettings, artwork: Path, tmp_path: Path
    ) -> None:
        """Test style overrides reach the written icon."""
        IconProcessor(settings).process(
            [artwork],
            output_dir=tmp_path,
            style_version="11.0",
            max_workers=1,
            style_overrides={"icon_color": "#FF0000"},
        )
        reader = SvgReader(tmp_path / "star-icon.svg")
        reader.load()
        specs = reader.icon_specs()
        assert specs["version"] == "11.0"
        assert specs["icon_color"] == "#FF0000"

    def test_reprocess_written_icon(
        self, settings: FlatShadowSettings, artwork: Path, tmp_path: Path
    ) -> None:
        """Test an icon written by the tool is re-composed from its glyph."""
        processor = IconProcessor(settings)
        processor.process([artwork], max_workers=1)
        icon = tmp_path / "star-icon.svg"

        stats = processor.process([icon], style_version="11.0", max_workers=1)
        assert stats.processed_count == 1

        reader = SvgReader(tmp_path / "star-icon-icon.svg")
        reader.load()
        assert reader.icon_specs()["version"] == "11.0"

    def test_reprocess_restores_stored_style(
        self, settings: FlatShadowSettings, artwork: Path, tmp_path: Path
    ) -> None:
        """Test re-processing without a style keeps the stored options."""
        processor = IconProcessor(settings)
        processor.process(
            [artwork],
            style_version="11.0",
            max_workers=1,
            style_overrides={"icon_color": "#FF0000", "background_color": "#875A7B"},
        )

        processor.process(
            [tmp_path / "star-icon.svg"],
            max_workers=1,
            style_overrides={"background_color": "#112233"},
        )

        reader = SvgReader(tmp_path / "star-icon-icon.svg")
        reader.load()
        specs = reader.icon_specs()
        assert specs["version"] == "11.0"
        assert specs["icon_color"] == "#FF0000"
        assert specs["background_color"] == "#112233"

    def test_cancelled(self, settings: FlatShadowSettings, tmp_path: Path) -> None:
        """Test Ctrl+C cancels pending icons and reports the counts."""
        inputs = []
        for name in ("a.svg", "b.svg", "c.svg"):
            path = tmp_path / name
            path.write_text(ARTWORK)
            inputs.append(path)

        def interrupt(*_: object) -> None:
            raise KeyboardInterrupt

        processor = IconProcessor(settings)
        with pytest.raises(ProcessingCancelledError) as exc_info:
            processor.process(inputs, max_workers=1, progress_callback=interrupt)

        assert exc_info.value.processed_count == 1
        assert exc_info.value.pending_count == 2
        stats = processor.processing_logger.stats
        assert stats.was_cancelled
        assert stats.cancelled_count == 2
        assert stats.end_time is not None

    def test_empty_skipped(self, settings: FlatShadowSettings, tmp_path: Path) -> None:
        """Test artwork without paths is skipped."""
        empty = tmp_path / "empty.svg"
        empty.write_text(EMPTY_ARTWORK)

        stats = IconProcessor(settings).process([empty], max_workers=1)
        assert stats.skipped_count == 1
        assert stats.processed_count == 0
        assert not (tmp_path / "empty-icon.svg").exists()

    def test_empty_is_error_when_not_skipping(
        self, settings: FlatShadowSettings, tmp_path: Path
    ) -> None:
        """Test empty artwork counts as an error with skip_empty off."""
        settings.processing.skip_empty = False
        empty = tmp_path / "empty.svg"
        empty.write_text(EMPTY_ARTWORK)

        stats = IconProcessor(settings).process([empty], max_workers=1)
        assert stats.error_count == 1
        assert stats.errors[0][0] == "empty.svg"

    def test_missing_and_broken_files(
        self, settings: FlatShadowSettings, artwork: Path, tmp_path: Path
    ) -> None:
        """Test unreadable inputs are counted without stopping the batch."""
        broken = tmp_path / "broken.svg"
        broken.write_text("<svg>")

        stats = IconProcessor(settings).process(
            [tmp_path / "missing.svg", broken, artwork], max_workers=1
        )
        assert stats.error_count == 2
        assert stats.processed_count == 1
        assert {name for name, _ in stats.errors} == {"missing.svg", "broken.svg"}

    def test_unknown_style(self, settings: FlatShadowSettings, artwork: Path) -> None:
        """Test an unknown style fails before any work is done."""
        with pytest.raises(UnknownStyleError):
            IconProcessor(settings).process([artwork], style_version="1.0")

    def test_stats_timing(self, settings: FlatShadowSettings, artwork: Path) -> None:
        """Test start and end times are recorded."""
        stats = IconProcessor(settings).process([artwork], max_workers=1)
        assert stats.start_time is not None
        assert stats.end_time is not None
        assert stats.duration_seconds >= 0


class TestProcessingLogger:
    """Tests for ProcessingLogger statistics."""

    def test_events_update_stats(self) -> None:
        """Test each logged event is counted in the current run."""
        processing_logger = ProcessingLogger(structlog.get_logger("test"))
        stats = processing_logger.start_run()

        processing_logger.log_icon_complete("a.svg", shadow_paths=2, duration_ms=5.0)
        processing_logger.log_icon_complete("b.svg", shadow_paths=1, duration_ms=15.0)
        processing_logger.log_icon_skipped("c.svg", "no drawable paths")
        processing_logger.log_icon_error("d.svg", ValueError("boom"))
        processing_logger.finish_run()

        assert stats.processed_count == 2
        assert stats.shadow_paths == 3
        assert stats.skipped_count == 1
        assert stats.errors == [("d.svg", "boom")]
        assert stats.avg_icon_time_ms == pytest.approx(10.0)
        assert stats.min_icon_time_ms == 5.0
        assert stats.max_icon_time_ms == 15.0
        assert stats.end_time is not None

    def test_start_run_resets(self) -> None:
        """Test a new run starts from zero."""
        processing_logger = ProcessingLogger(structlog.get_logger("test"))
        processing_logger.start_run()
        processing_logger.log_icon_error("a.svg", "no drawable paths")
        processing_logger.log_cancelled(pending=4)

        stats = processing_logger.start_run()
        assert stats.error_count == 0
        assert not stats.was_cancelled
        assert stats.start_time is not None


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_handlers_replaced(self, tmp_path: Path) -> None:
        """Test repeated calls do not stack handlers."""
        root = logging.getLogger()
        configure_logging(log_file=tmp_path / "first.log", quiet=True)
        count = len(root.handlers)
        configure_logging(log_file=tmp_path / "second.log", quiet=True)
        assert len(root.handlers) == count

    def test_file_written(self, tmp_path: Path) -> None:
        """Test events reach the log file as JSON."""
        log_file = tmp_path / "run.log"
        logger = configure_logging(log_file=log_file, quiet=True)
        logger.info("Hello", icon="star.svg")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert '"icon": "star.svg"' in log_file.read_text()
