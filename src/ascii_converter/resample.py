"""Nearest-neighbor resampling of an ImageBuffer."""

import logging
import math

from .image_buffer import ImageBuffer


def _check_scale(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return value


def resize(buffer: ImageBuffer, x_scale: float, y_scale: float) -> ImageBuffer:
    """
    Return a new buffer scaled by (x_scale, y_scale).

    The output is floor(width * x_scale) by floor(height * y_scale). Each
    destination pixel (x, y) copies source pixel
    (floor(x / x_scale), floor(y / y_scale)); nothing is blended. Source
    coordinates are clamped to the input bounds so float rounding at the
    edges can never index past the last row or column.
    """
    x_scale = _check_scale("x_scale", x_scale)
    y_scale = _check_scale("y_scale", y_scale)

    src_w, src_h = buffer.width, buffer.height
    new_w = math.floor(src_w * x_scale)
    new_h = math.floor(src_h * y_scale)

    logger = logging.getLogger(__name__)
    logger.debug(
        "Resizing %dx%d by (%g, %g) -> %dx%d",
        src_w, src_h, x_scale, y_scale, new_w, new_h,
    )

    if new_w == 0 or new_h == 0:
        if not buffer.is_empty:
            logger.warning("Resize collapsed image to %dx%d", new_w, new_h)
        return ImageBuffer(new_w, new_h, [])

    # Column lookup is the same for every row; compute it once.
    src_xs = [min(math.floor(x / x_scale), src_w - 1) for x in range(new_w)]

    src = buffer.data
    data = []
    for y in range(new_h):
        sy = min(math.floor(y / y_scale), src_h - 1)
        row_start = sy * src_w
        data.extend(src[row_start + sx] for sx in src_xs)

    return ImageBuffer(new_w, new_h, data)


__all__ = ["resize"]
