"""SVG reader for loading icon artwork.

This module provides the SvgReader class for loading SVG files and
extracting their outlines into domain models.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import parse_path
from fontTools.svgLib.path.shapes import PathBuilder

from flatshadow.domain import CompoundShape, FillRule
from flatshadow.exceptions import SvgLoadError
from flatshadow.io.converter import ShapePen
from flatshadow.io.writer import ICON_NS_URI, NUMERIC_SPECS


def _fill_rule(element: ET.Element, inherited: FillRule) -> FillRule:
    """Fill rule of an element from its style or attribute."""
    value = element.get("fill-rule")
    for declaration in element.get("style", "").split(";"):
        name, _, style_value = declaration.partition(":")
        if name.strip() == "fill-rule":
            value = style_value
    if value is None:
        return inherited
    value = value.strip()
    if value == "inherit":
        return inherited
    return FillRule.EVENODD if value == "evenodd" else FillRule.NONZERO


class SvgReader:
    """Loads SVG files and extracts their outlines.

    Example:
        reader = SvgReader(Path("glyph.svg"))
        reader.load()
        artwork = reader.shapes
    """

    def __init__(self, svg_path: Path) -> None:
        """Initialize the SVG reader.

        Args:
            svg_path: Path to the SVG file
        """
        self._svg_path = svg_path
        self._data: bytes | None = None
        self._root: ET.Element | None = None

    def load(self) -> None:
        """Load and parse the SVG file.

        Raises:
            FileNotFoundError: If the file does not exist
            SvgLoadError: If the file is not well-formed XML
        """
        if not self._svg_path.exists():
            raise FileNotFoundError(f"SVG file not found: {self._svg_path}")

        self._data = self._svg_path.read_bytes()
        try:
            self._root = ET.fromstring(self._data)
        except ET.ParseError as e:
            raise SvgLoadError(str(self._svg_path), str(e)) from e

    def _require_loaded(self) -> tuple[bytes, ET.Element]:
        if self._data is None or self._root is None:
            raise RuntimeError("SVG not loaded. Call load() first.")
        return self._data, self._root

    @property
    def shapes(self) -> list[CompoundShape]:
        """Outlines of the drawable elements, in document order.

        Each element gives one shape with its transform applied and the
        fill rule it declares or inherits from its ancestors.

        Raises:
            RuntimeError: If the SVG has not been loaded yet
            SvgLoadError: If an outline cannot be parsed
        """
        _, root = self._require_loaded()
        shapes: list[CompoundShape] = []
        try:
            self._collect(root, FillRule.NONZERO, shapes)
        except (ValueError, IndexError, TypeError, NotImplementedError) as e:
            raise SvgLoadError(str(self._svg_path), str(e) or type(e).__name__) from e
        return shapes

    def _collect(
        self, element: ET.Element, fill_rule: FillRule, shapes: list[CompoundShape]
    ) -> None:
        fill_rule = _fill_rule(element, fill_rule)
        builder = PathBuilder()
        builder.add_path_from_element(element)
        if builder.paths:
            pen = ShapePen()
            transform = builder.transforms[0]
            parse_path(builder.paths[0], TransformPen(pen, transform) if transform else pen)
            shapes.append(pen.shape(fill_rule))
        for child in element:
            self._collect(child, fill_rule, shapes)

    def icon_specs(self) -> dict[str, Any]:
        """Read icon options stored by IconWriter.

        Options are namespaced attributes on the root element; the glyph
        outline is read from the element with id="icon".

        Returns:
            Options keyed by snake_case name; empty for foreign documents
        """
        _, root = self._require_loaded()
        prefix = f"{{{ICON_NS_URI}}}"
        specs: dict[str, Any] = {}
        for name, value in root.attrib.items():
            if name.startswith(prefix):
                specs[name[len(prefix):].replace("-", "_")] = value

        for key in NUMERIC_SPECS:
            if specs.get(key):
                specs[key] = float(specs[key])

        if "version" in specs:
            for element in root.iter():
                if element.get("id") == "icon":
                    specs["icon_path_data"] = element.get("d", "")
                    break
        return specs
