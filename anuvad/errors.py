"""Error kinds raised by the overlay engine.

Only ``FallbackRenderError`` is meant to reach callers of ``layout``; the
others are absorbed by the assembler, which logs them and switches to the
fallback rendering.
"""


class LayoutError(Exception):
    """Base class for overlay engine failures."""


class LoadError(LayoutError):
    """Source bytes could not be read as a PDF document."""


class FontEmbedError(LayoutError):
    """A font could not be registered or embedded into the document."""


class MeasurementError(LayoutError):
    """Text contains a glyph outside the supported range."""

    def __init__(self, text: str, char: str):
        super().__init__(f'unsupported glyph {char!r} (U+{ord(char):04X}) in {text!r}')
        self.text = text
        self.char = char


class FallbackRenderError(LayoutError):
    """The degraded single-page rendering failed too; nothing can be returned."""
