"""FlatShadow - Long flat shadows for vector icons.

FlatShadow computes the silhouette a vector shape casts when swept along a
light direction, and uses it to compose square app icons with a long flat
shadow behind the glyph.

Example:
    $ flatshadow icon star.svg --style 16.0

This will create star-icon.svg with the star centred on a rounded box and its
shadow running to the bottom right corner.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
