"""Shared fixtures: small PNG files generated with Pillow."""

import logging

import pytest
from PIL import Image

from ascii_converter.image_buffer import ImageBuffer, Pixel

BLACK = Pixel(0, 0, 0, 255)
WHITE = Pixel(255, 255, 255, 255)


@pytest.fixture
def black_white():
    """A 2x1 buffer: black then white."""
    return ImageBuffer(2, 1, [BLACK, WHITE])


@pytest.fixture
def checker():
    """A 3x2 buffer with distinct pixels."""
    data = [
        Pixel(10, 20, 30, 255),
        Pixel(40, 50, 60, 255),
        Pixel(70, 80, 90, 255),
        Pixel(100, 110, 120, 128),
        Pixel(130, 140, 150, 64),
        Pixel(160, 170, 180, 0),
    ]
    return ImageBuffer(3, 2, data)


@pytest.fixture
def png_path(tmp_path):
    """A 4x2 RGBA PNG on disk: left half black, right half white."""
    img = Image.new("RGBA", (4, 2), (0, 0, 0, 255))
    for y in range(2):
        for x in (2, 3):
            img.putpixel((x, y), (255, 255, 255, 255))
    path = tmp_path / "input.png"
    img.save(path)
    return path


@pytest.fixture(autouse=True)
def reset_cli_logger():
    """Drop handlers main() installs so they don't outlive the test's streams."""
    yield
    logger = logging.getLogger("ascii_converter")
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
