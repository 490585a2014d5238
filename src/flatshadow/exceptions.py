"""Exception hierarchy for FlatShadow."""


class FlatShadowError(Exception):
    """Base exception for all FlatShadow errors."""

    pass


class GeometryError(FlatShadowError):
    """Errors in geometric calculations."""

    pass


class InvalidArgumentError(GeometryError, ValueError):
    """Caller passed geometry the engine cannot work with."""

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f"Invalid argument '{argument}': {reason}")


class NumericIndeterminateError(GeometryError):
    """A root-solver branch could not produce a real answer."""

    def __init__(self, coefficients: tuple[float, ...], reason: str) -> None:
        self.coefficients = coefficients
        self.reason = reason
        super().__init__(f"Indeterminate result for coefficients {coefficients}: {reason}")


class PathDataError(FlatShadowError):
    """SVG path data could not be parsed."""

    def __init__(self, data: str, reason: str) -> None:
        self.data = data
        self.reason = reason
        preview = data if len(data) <= 40 else data[:37] + "..."
        super().__init__(f"Invalid path data '{preview}': {reason}")


class SvgError(FlatShadowError):
    """Errors related to SVG loading or saving."""

    pass


class SvgLoadError(SvgError):
    """Error loading an SVG file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load SVG '{path}': {reason}")


class SvgSaveError(SvgError):
    """Error saving an SVG file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save SVG '{path}': {reason}")


class IconError(FlatShadowError):
    """Errors related to icon composition."""

    pass


class UnknownStyleError(IconError):
    """Requested icon style version does not exist."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Unknown icon style '{version}'")


class EmptyIconError(IconError):
    """Icon glyph has no drawable outline."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Icon has no drawable outline: {reason}")


class ProcessingCancelledError(FlatShadowError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
