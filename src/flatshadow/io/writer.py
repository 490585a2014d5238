"""SVG writer for composed icons.

This module provides the IconWriter class which renders an IconDrawing as a
standalone SVG document. Style options are stored as namespaced attributes
on the root element so the icon can be read back and re-edited.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from flatshadow.domain import IconDrawing, Layer, LinearGradient
from flatshadow.exceptions import SvgSaveError
from flatshadow.io.converter import format_number, format_path_data

SVG_NS_URI = "http://www.w3.org/2000/svg"
ICON_NS = "flatshadow"
ICON_NS_URI = "urn:flatshadow:icon"

# Options converted back to numbers when an icon is read
NUMERIC_SPECS = (
    "size",
    "icon_size",
    "flat_shadow_angle",
    "flat_shadow_opacity",
    "box_radius",
    "background_gradient",
    "icon_shadow_offset",
    "icon_shadow_opacity",
)

ET.register_namespace("", SVG_NS_URI)
ET.register_namespace(ICON_NS, ICON_NS_URI)


def _svg(tag: str) -> str:
    return f"{{{SVG_NS_URI}}}{tag}"


def _format_option(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


class IconWriter:
    """Writes an IconDrawing as an SVG document.

    Example:
        writer = IconWriter(drawing, Path("app-icon.svg"))
        writer.save()
    """

    def __init__(self, drawing: IconDrawing, output_path: Path | None = None) -> None:
        """Initialize the icon writer.

        Args:
            drawing: Composed icon to write
            output_path: Destination file (required for save())
        """
        self.drawing = drawing
        self.output_path = output_path

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the output path for an icon made from input_path.

        Args:
            input_path: Source SVG file

        Returns:
            Path with '-icon' suffix, e.g. 'star.svg' -> 'star-icon.svg'
        """
        return input_path.with_name(f"{input_path.stem}-icon.svg")

    def to_element(self) -> ET.Element:
        """Build the SVG element tree for the drawing."""
        size = format_number(self.drawing.size)
        root = ET.Element(
            _svg("svg"),
            {
                "width": size,
                "height": size,
                "viewBox": f"0 0 {size} {size}",
            },
        )
        for key, value in self.drawing.options.items():
            if value is None:
                continue
            root.set(f"{{{ICON_NS_URI}}}{key.replace('_', '-')}", _format_option(value))

        gradients = [
            layer for layer in self.drawing.layers if isinstance(layer.fill, LinearGradient)
        ]
        if gradients:
            defs = ET.SubElement(root, _svg("defs"))
            for layer in gradients:
                self._add_gradient(defs, layer)

        for layer in self.drawing.layers:
            if layer.shape.is_empty():
                continue
            attrs = {
                "id": layer.name,
                "d": format_path_data(layer.shape),
                "fill": self._fill_reference(layer),
            }
            if layer.opacity < 1.0:
                attrs["opacity"] = format_number(layer.opacity)
            ET.SubElement(root, _svg("path"), attrs)
        return root

    def to_string(self) -> str:
        """Render the drawing as SVG markup."""
        return ET.tostring(self.to_element(), encoding="unicode")

    def save(self) -> None:
        """Write the SVG document to output_path.

        Raises:
            SvgSaveError: If no output path was given or the file cannot be written
        """
        if self.output_path is None:
            raise SvgSaveError("<unset>", "no output path given")
        try:
            self.output_path.write_text(self.to_string(), encoding="utf-8")
        except OSError as e:
            raise SvgSaveError(str(self.output_path), str(e)) from e

    @staticmethod
    def _gradient_id(layer: Layer) -> str:
        return f"{layer.name}-gradient"

    def _fill_reference(self, layer: Layer) -> str:
        if isinstance(layer.fill, LinearGradient):
            return f"url(#{self._gradient_id(layer)})"
        return layer.fill

    def _add_gradient(self, defs: ET.Element, layer: Layer) -> None:
        gradient = layer.fill
        element = ET.SubElement(
            defs,
            _svg("linearGradient"),
            {
                "id": self._gradient_id(layer),
                "gradientUnits": "userSpaceOnUse",
                "x1": format_number(gradient.origin[0]),
                "y1": format_number(gradient.origin[1]),
                "x2": format_number(gradient.destination[0]),
                "y2": format_number(gradient.destination[1]),
            },
        )
        ET.SubElement(element, _svg("stop"), {"offset": "0", "stop-color": gradient.start_color})
        ET.SubElement(element, _svg("stop"), {"offset": "1", "stop-color": gradient.end_color})
