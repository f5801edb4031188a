"""Map pixel brightness to ASCII glyphs and emit rows of text."""

from enum import Enum

from .image_buffer import ImageBuffer, Pixel

ESC = "\x1b"
RESET = f"{ESC}[0m"

# -----------------------------
# Brightness ramp (dark -> light)
# -----------------------------
# (inclusive upper bound, glyph); anything brighter than the last bound is "@".
GLYPH_RAMP = (
    (25, " "),
    (50, "."),
    (75, ":"),
    (100, "-"),
    (125, "="),
    (150, "+"),
    (175, "*"),
    (200, "#"),
    (225, "%"),
)
BRIGHTEST_GLYPH = "@"


def glyph_for(brightness: int) -> str:
    for bound, glyph in GLYPH_RAMP:
        if brightness <= bound:
            return glyph
    return BRIGHTEST_GLYPH


def pixel_glyph(pixel: Pixel) -> str:
    return glyph_for(pixel.brightness())


# -----------------------------
# Render modes
# -----------------------------
class AsciiMode(Enum):
    """
    How each glyph is decorated.

    The value is the SGR selector for a 24-bit color (38 = foreground,
    48 = background); PLAIN has none and leaves the glyph bare.
    """

    PLAIN = ""
    FOREGROUND = "38"
    BACKGROUND = "48"

    def wrap(self, glyph: str, pixel: Pixel) -> str:
        if not self.value:
            return glyph
        r, g, b = pixel.clamped().rgb
        return f"{ESC}[{self.value};2;{r};{g};{b}m{glyph}{RESET}"


def render_row(row, mode: AsciiMode = AsciiMode.PLAIN) -> str:
    return "".join(mode.wrap(pixel_glyph(p), p) for p in row)


def render(buffer: ImageBuffer, mode: AsciiMode = AsciiMode.PLAIN) -> str:
    """Render the buffer as text, one newline-terminated line per pixel row."""
    return "".join(render_row(row, mode) + "\n" for row in buffer.rows())


__all__ = [
    "GLYPH_RAMP",
    "BRIGHTEST_GLYPH",
    "AsciiMode",
    "glyph_for",
    "pixel_glyph",
    "render",
    "render_row",
]
