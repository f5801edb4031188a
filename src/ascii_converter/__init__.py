"""ascii-converter - Turn PNG images into ASCII art or resized PNGs."""

__version__ = "0.1.0"

from .errors import (
    ConverterError,
    DecodeError,
    EncodeError,
    InputFileError,
    InvalidFormatError,
    OutputFileError,
)
from .glyphs import AsciiMode, glyph_for, render
from .image_buffer import ImageBuffer, Pixel
from .png_codec import encode_png, load_image, save_png
from .resample import resize

"""
The CLI module is wrapped lazily rather than imported here: importing it in
`__init__` makes `runpy` warn when it is executed with `-m`, because the
module would already be in `sys.modules` before execution.
"""


def image_to_ascii_main(*args, **kwargs):
    from .image_to_ascii import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "__version__",
    "Pixel",
    "ImageBuffer",
    "AsciiMode",
    "glyph_for",
    "render",
    "resize",
    "load_image",
    "encode_png",
    "save_png",
    "ConverterError",
    "InputFileError",
    "DecodeError",
    "OutputFileError",
    "EncodeError",
    "InvalidFormatError",
    "image_to_ascii_main",
]
