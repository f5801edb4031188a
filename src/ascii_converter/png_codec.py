"""PNG decode/encode between files and ImageBuffer.

Buffers hold alpha-premultiplied channels. Decoding widens each 8-bit
sample to 16 bits (x257), premultiplies by alpha and narrows with // 256;
encoding reverses the premultiplication since PNG stores straight alpha.
"""

import io
import logging
import os

import numpy as np
from PIL import Image

from .errors import DecodeError, EncodeError, InputFileError, OutputFileError
from .image_buffer import ImageBuffer, Pixel

# Pillow keeps 16-bit grayscale PNGs at full width in these modes.
_WIDE_GRAY_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")

_MAX16 = 0xFFFF


def premultiply(rgba: np.ndarray) -> np.ndarray:
    """Straight HxWx4 uint8 RGBA -> premultiplied HxWx4 uint8 RGBA."""
    wide = rgba.astype(np.int64) * 257
    a16 = wide[..., 3:]
    rgb = wide[..., :3] * a16 // _MAX16 // 256
    return np.concatenate([rgb, a16 // 256], axis=-1).astype(np.uint8)


def unpremultiply(rgba: np.ndarray) -> np.ndarray:
    """Premultiplied HxWx4 uint8 RGBA -> straight HxWx4 uint8 RGBA."""
    wide = rgba.astype(np.int64) * 257
    a16 = wide[..., 3:]
    rgb = np.where(a16 == 0, 0, wide[..., :3] * _MAX16 // np.maximum(a16, 1))
    rgb = np.clip(rgb // 256, 0, 255)
    return np.concatenate([rgb, a16 // 256], axis=-1).astype(np.uint8)


def _to_rgba_array(img: Image.Image) -> np.ndarray:
    """Return an HxWx4 premultiplied uint8 array for any decoded PNG."""
    if img.mode in _WIDE_GRAY_MODES:
        # 16-bit samples narrowed to 8 bits by integer division; always opaque
        wide = np.asarray(img, dtype=np.int64)
        gray = np.clip(wide // 256, 0, 255).astype(np.uint8)
        alpha = np.full_like(gray, 255)
        return np.stack([gray, gray, gray, alpha], axis=-1)
    # 16-bit color PNGs are already narrowed to their high byte by Pillow
    return premultiply(np.asarray(img.convert("RGBA"), dtype=np.uint8))


def buffer_from_image(img: Image.Image) -> ImageBuffer:
    arr = _to_rgba_array(img)
    width, height = img.size
    data = [Pixel(*px) for px in arr.reshape(-1, 4).tolist()]
    return ImageBuffer(width, height, data)


def image_from_buffer(buffer: ImageBuffer) -> Image.Image:
    if buffer.is_empty:
        raise EncodeError(
            f"cannot encode an empty {buffer.width}x{buffer.height} image"
        )
    arr = np.array(
        [(p.r, p.g, p.b, p.a) for p in buffer.data], dtype=np.int64
    ).reshape(buffer.height, buffer.width, 4)
    arr = np.clip(arr, 0, 255).astype(np.uint8)
    return Image.fromarray(unpremultiply(arr))


# -----------------------------
# Files
# -----------------------------
def load_image(path: str | os.PathLike) -> ImageBuffer:
    """Decode the PNG at ``path`` into an ImageBuffer."""
    logger = logging.getLogger(__name__)
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise InputFileError(f"cannot open {os.fspath(path)}: {exc}") from exc

    with fh:
        try:
            with Image.open(fh, formats=["PNG"]) as img:
                img.load()
                logger.debug("Decoded %s: mode=%s size=%s", path, img.mode, img.size)
                buffer = buffer_from_image(img)
        except (
            OSError, SyntaxError, ValueError, Image.DecompressionBombError
        ) as exc:
            raise DecodeError(f"cannot decode {os.fspath(path)} as PNG: {exc}") from exc

    logger.info("Loaded %s (%dx%d)", path, buffer.width, buffer.height)
    return buffer


def encode_png(buffer: ImageBuffer) -> bytes:
    """Serialize the buffer to PNG bytes."""
    img = image_from_buffer(buffer)
    out = io.BytesIO()
    try:
        img.save(out, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError(f"PNG encoding failed: {exc}") from exc
    return out.getvalue()


def write_file(path: str | os.PathLike, payload: bytes) -> None:
    """
    Write ``payload`` to ``path``.

    A file that cannot be created raises OutputFileError; a write that fails
    part way raises EncodeError and the partial file is removed.
    """
    try:
        fh = open(path, "wb")
    except OSError as exc:
        raise OutputFileError(f"cannot create {os.fspath(path)}: {exc}") from exc

    try:
        with fh:
            fh.write(payload)
    except OSError as exc:
        try:
            os.remove(path)
        except OSError:
            logging.getLogger(__name__).warning("Could not remove partial %s", path)
        raise EncodeError(f"cannot write {os.fspath(path)}: {exc}") from exc

    logging.getLogger(__name__).debug("Wrote %d bytes to %s", len(payload), path)


def save_png(buffer: ImageBuffer, path: str | os.PathLike) -> None:
    write_file(path, encode_png(buffer))


__all__ = [
    "load_image",
    "encode_png",
    "save_png",
    "write_file",
    "buffer_from_image",
    "image_from_buffer",
]
