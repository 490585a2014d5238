"""Icon composition for flatshadow.

Builds square app icons: a background box, a glyph and its long flat shadow,
in one of several style versions.
"""

from flatshadow.icon.color import adjust_color
from flatshadow.icon.composer import IconComposer, fit_bounds, rounded_rectangle
from flatshadow.icon.styles import (
    DEFAULT_STYLE,
    STYLES,
    IconStyle,
    get_style,
    restore_style,
)

__all__ = [
    "DEFAULT_STYLE",
    "STYLES",
    "IconComposer",
    "IconStyle",
    "adjust_color",
    "fit_bounds",
    "get_style",
    "restore_style",
    "rounded_rectangle",
]
