"""Composed icon drawings.

An IconDrawing is an ordered stack of filled layers, bottom first, ready to
be written out by an exporter.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from flatshadow.domain.shape import CompoundShape


@dataclass(frozen=True)
class LinearGradient:
    """Two-stop linear gradient in drawing coordinates.

    Attributes:
        start_color: Colour at the origin
        end_color: Colour at the destination
        origin: Gradient start point (x, y)
        destination: Gradient end point (x, y)
    """

    start_color: str
    end_color: str
    origin: tuple[float, float]
    destination: tuple[float, float]


Fill = Union[str, LinearGradient]


@dataclass(frozen=True)
class Layer:
    """One filled shape of a drawing."""

    name: str
    shape: CompoundShape
    fill: Fill
    opacity: float = 1.0


@dataclass
class IconDrawing:
    """A square icon made of stacked layers.

    Attributes:
        size: Width and height of the canvas
        layers: Layers from bottom to top
        options: Style options the drawing was made with
    """

    size: float
    layers: list[Layer] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)

    def get_layer(self, name: str) -> Layer | None:
        """Find a layer by name.

        Returns:
            The first layer with that name, or None
        """
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    @property
    def layer_names(self) -> list[str]:
        return [layer.name for layer in self.layers]
