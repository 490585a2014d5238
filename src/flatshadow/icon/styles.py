"""Icon style variants.

Each style version is one row of data; the composer reads every difference
between versions from these fields.
"""

import math
from typing import Any

from pydantic import BaseModel, Field

from flatshadow.exceptions import UnknownStyleError

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class IconStyle(BaseModel):
    """Appearance of an app icon."""

    version: str = Field(description="Style version label")
    size: float = Field(default=70.0, gt=0.0, description="Canvas width and height")
    icon_size: float = Field(
        default=0.65,
        gt=0.0,
        le=1.0,
        description="Glyph size as a fraction of the canvas",
    )
    icon_color: str = Field(default="#FFFFFF", pattern=HEX_COLOR_PATTERN)
    background_color: str = Field(default="#000000", pattern=HEX_COLOR_PATTERN)
    background_gradient: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Lightness shift of the gradient's far stop (None = flat fill)",
    )
    box_radius: float = Field(default=0.0, ge=0.0, description="Corner radius of the box")
    flat_shadow_angle: float = Field(
        default=135.0,
        ge=-360.0,
        le=360.0,
        description="Light direction of the flat shadow in degrees",
    )
    flat_shadow_opacity: float = Field(default=0.324, ge=0.0, le=1.0)
    icon_shadow_offset: float | None = Field(
        default=None,
        description="Vertical offset of the glyph drop shadow (None = no drop shadow)",
    )
    icon_shadow_opacity: float = Field(default=0.3, ge=0.0, le=1.0)
    box_inner_shadows: bool = Field(
        default=False,
        description="Draw the top highlight and bottom shade along the box edges",
    )

    @property
    def abs_icon_size(self) -> int:
        """Side of the square the glyph is fitted into."""
        return math.ceil(self.icon_size * self.size)


def _rounded_style(version: str) -> IconStyle:
    return IconStyle(
        version=version,
        background_gradient=0.2,
        box_radius=3.5,
        icon_shadow_offset=2.0,
        box_inner_shadows=True,
    )


STYLES: dict[str, IconStyle] = {
    "11.0": IconStyle(version="11.0"),
    **{v: _rounded_style(v) for v in ("12.0", "13.0", "14.0", "15.0", "16.0")},
}

DEFAULT_STYLE = "16.0"


def get_style(version: str = DEFAULT_STYLE, /, **overrides: Any) -> IconStyle:
    """Look up a style version, optionally overriding some of its fields.

    Args:
        version: Style version label, e.g. "16.0"
        **overrides: Field values replacing the version's defaults;
            None values and unknown keys are ignored

    Returns:
        Validated IconStyle

    Raises:
        UnknownStyleError: If the version does not exist
        pydantic.ValidationError: If an override is out of range
    """
    base = STYLES.get(version)
    if base is None:
        raise UnknownStyleError(version)
    values = base.model_dump()
    values.update({k: v for k, v in overrides.items() if v is not None and k != "version"})
    return IconStyle.model_validate(values)


# Options a user picks; everything else follows from the style version
USER_OPTIONS = ("icon_color", "background_color", "flat_shadow_angle", "icon_size")


def restore_style(
    stored: dict[str, Any], version: str | None = None, /, **overrides: Any
) -> IconStyle:
    """Style of a previously written icon, with overrides applied.

    Without a version, or with the stored one, every stored option is
    restored. A different version keeps only the USER_OPTIONS. Overrides
    that are not None always win.

    Args:
        stored: Options read back by SvgReader.icon_specs (may be empty)
        version: Requested style version (None = stored or default)
        **overrides: Field values replacing the restored ones

    Raises:
        UnknownStyleError: If the requested version does not exist
        pydantic.ValidationError: If a stored or overriding value is invalid
    """
    stored_version = stored.get("version")
    if version is None:
        version = stored_version if stored_version in STYLES else DEFAULT_STYLE
    if version == stored_version:
        values = dict(stored)
    else:
        values = {key: stored[key] for key in USER_OPTIONS if key in stored}
    values.update({k: v for k, v in overrides.items() if v is not None})
    return get_style(version, **values)
