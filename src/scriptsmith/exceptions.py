"""Exception hierarchy for Scriptsmith."""


class ScriptsmithError(Exception):
    """Base exception for all Scriptsmith errors."""

    pass


class GlyphMapError(ScriptsmithError):
    """Errors related to the per-character stroke dataset."""

    pass


class GlyphMapLoadError(GlyphMapError):
    """Error loading a glyph map file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load glyph map '{path}': {reason}")


class GlyphError(ScriptsmithError):
    """Errors related to glyph processing."""

    pass


class GlyphProcessingError(GlyphError):
    """Error building the outline of a specific glyph."""

    def __init__(self, char: str, reason: str) -> None:
        self.char = char
        self.reason = reason
        super().__init__(f"Error processing glyph '{char}': {reason}")


class GeometryError(ScriptsmithError):
    """Errors in geometric calculations."""

    pass


class UnionError(GeometryError):
    """Error computing the boolean union of outline rings."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FontError(ScriptsmithError):
    """Errors related to font assembly or saving."""

    pass


class FontAssemblyError(FontError):
    """The binary encoder rejected the font as a whole."""

    def __init__(self, family: str, reason: str) -> None:
        self.family = family
        self.reason = reason
        super().__init__(f"Failed to assemble font '{family}': {reason}")


class FontSaveError(FontError):
    """Error saving a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")
