"""Tests for PNG decode/encode."""

import io

import numpy as np
import pytest
from PIL import Image

from ascii_converter.errors import (
    ConverterError,
    DecodeError,
    EncodeError,
    InputFileError,
    OutputFileError,
)
from ascii_converter.glyphs import AsciiMode, render
from ascii_converter.image_buffer import ImageBuffer, Pixel
from ascii_converter.png_codec import encode_png, load_image, save_png, write_file


class TestLoadImage:
    def test_dimensions_and_pixels(self, png_path):
        buf = load_image(png_path)
        assert buf.size == (4, 2)
        assert buf.get(0, 0) == Pixel(0, 0, 0, 255)
        assert buf.get(3, 1) == Pixel(255, 255, 255, 255)
        assert len(buf.data) == 8

    def test_accepts_str_path(self, png_path):
        assert load_image(str(png_path)).size == (4, 2)

    def test_grayscale_expands_to_rgba(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (1, 1), 77).save(path)
        assert load_image(path).get(0, 0) == Pixel(77, 77, 77, 255)

    def test_palette_with_transparency(self, tmp_path):
        path = tmp_path / "pal.png"
        img = Image.new("P", (2, 1))
        img.putpalette([255, 0, 0, 0, 0, 255] + [0] * 762)
        img.putpixel((0, 0), 0)
        img.putpixel((1, 0), 1)
        img.save(path, transparency=1)
        buf = load_image(path)
        assert buf.get(0, 0) == Pixel(255, 0, 0, 255)
        assert buf.get(1, 0) == Pixel(0, 0, 0, 0)

    def test_transparent_pixels_premultiplied(self, tmp_path):
        """Fully transparent pixels decode to black, whatever their stored color."""
        path = tmp_path / "clear.png"
        Image.new("RGBA", (2, 1), (255, 255, 255, 0)).save(path)
        buf = load_image(path)
        assert buf.data == [Pixel(0, 0, 0, 0), Pixel(0, 0, 0, 0)]
        assert render(buf) == "  \n"

    def test_half_alpha_premultiplied(self, tmp_path):
        path = tmp_path / "half.png"
        Image.new("RGBA", (1, 1), (200, 100, 50, 128)).save(path)
        buf = load_image(path)
        assert buf.get(0, 0) == Pixel(100, 50, 25, 128)
        assert render(buf, AsciiMode.FOREGROUND) == "\x1b[38;2;100;50;25m:\x1b[0m\n"

    def test_16bit_grayscale_divided_by_256(self, tmp_path):
        path = tmp_path / "wide.png"
        arr = np.array([[0x0000, 0x00FF, 0xABCD, 0xFFFF]], dtype=np.uint16)
        Image.fromarray(arr).save(path)
        buf = load_image(path)
        assert [p.r for p in buf.data] == [0, 0, 0xAB, 0xFF]
        assert all(p.r == p.g == p.b and p.a == 255 for p in buf.data)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileError):
            load_image(tmp_path / "nope.png")

    def test_directory_is_not_readable(self, tmp_path):
        with pytest.raises(InputFileError):
            load_image(tmp_path)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "junk.png"
        path.write_bytes(b"definitely not a png")
        with pytest.raises(DecodeError):
            load_image(path)

    def test_other_codecs_rejected(self, tmp_path):
        path = tmp_path / "image.bmp"
        Image.new("RGB", (2, 2)).save(path, format="BMP")
        with pytest.raises(DecodeError):
            load_image(path)

    def test_decompression_bomb(self, png_path, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1)
        with pytest.raises(DecodeError):
            load_image(png_path)

    def test_truncated_png(self, tmp_path):
        noise = np.random.default_rng(0).integers(0, 256, (64, 64, 3), dtype=np.uint8)
        full = tmp_path / "noise.png"
        Image.fromarray(noise).save(full)
        data = full.read_bytes()
        path = tmp_path / "short.png"
        path.write_bytes(data[: len(data) // 2])
        with pytest.raises(ConverterError):
            load_image(path)


class TestEncode:
    def test_round_trip(self, tmp_path, checker):
        """Encoding then decoding preserves size and every opaque channel."""
        opaque = ImageBuffer(3, 2, [Pixel(p.r, p.g, p.b, 255) for p in checker.data])
        path = tmp_path / "out.png"
        save_png(opaque, path)
        assert load_image(path) == opaque

    def test_translucent_round_trip(self, tmp_path):
        """Premultiplied pixels survive a save/load within one step of rounding."""
        src = tmp_path / "src.png"
        Image.new("RGBA", (1, 1), (200, 100, 50, 128)).save(src)
        first = load_image(src)
        out = tmp_path / "out.png"
        save_png(first, out)
        second = load_image(out)
        assert second.size == first.size
        assert second.get(0, 0).a == 128
        for a, b in zip(first.get(0, 0).rgb, second.get(0, 0).rgb):
            assert abs(a - b) <= 1

    def test_encode_stores_straight_alpha(self):
        data = encode_png(ImageBuffer(1, 1, [Pixel(100, 50, 0, 128)]))
        with Image.open(io.BytesIO(data)) as img:
            r, g, b, a = img.getpixel((0, 0))
        assert a == 128
        assert (r, g, b) == (199, 99, 0)

    def test_encode_png_bytes(self, black_white):
        data = encode_png(black_white)
        assert data.startswith(b"\x89PNG\r\n\x1a\n")
        with Image.open(io.BytesIO(data)) as img:
            assert img.size == (2, 1)
            assert img.mode == "RGBA"

    def test_wide_values_clamped(self, tmp_path):
        path = tmp_path / "clamp.png"
        save_png(ImageBuffer(1, 1, [Pixel(300, -2, 128, 999)]), path)
        assert load_image(path).get(0, 0) == Pixel(255, 0, 128, 255)

    def test_empty_buffer_not_encodable(self, tmp_path):
        path = tmp_path / "empty.png"
        with pytest.raises(EncodeError):
            save_png(ImageBuffer(0, 3, []), path)
        assert not path.exists()

    def test_output_directory_missing(self, tmp_path, black_white):
        with pytest.raises(OutputFileError):
            save_png(black_white, tmp_path / "missing" / "out.png")


class TestWriteFile:
    def test_writes_payload(self, tmp_path):
        path = tmp_path / "blob"
        write_file(path, b"abc")
        assert path.read_bytes() == b"abc"

    def test_create_failure(self, tmp_path):
        with pytest.raises(OutputFileError):
            write_file(tmp_path, b"abc")
