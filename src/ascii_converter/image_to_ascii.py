"""Convert a PNG into ASCII art (plain or true-color) or a resized PNG."""

import argparse
import logging
import math
import os
import sys
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

from .errors import ConverterError, InvalidFormatError
from .glyphs import AsciiMode, render
from .image_buffer import ImageBuffer
from .png_codec import load_image, save_png, write_file
from .resample import resize

LOG = logging.getLogger("ascii_converter")

FORMAT_HELP = (
    "Please specify the output format "
    "(0 = NO_COLOR, 1 = FOREGROUND_COLORED, 2 = BACKGROUND_COLORED, 3 = PNG)"
)


# -----------------------------
# Data model / options
# -----------------------------
class OutputFormat(IntEnum):
    PLAIN_TEXT = 0
    FOREGROUND_TEXT = 1
    BACKGROUND_TEXT = 2
    PNG = 3

    @classmethod
    def parse(cls, value: int) -> "OutputFormat":
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormatError(f"Invalid output format: {FORMAT_HELP}") from None

    @property
    def ascii_mode(self) -> Optional[AsciiMode]:
        """The text render mode, or None for PNG output."""
        return _TEXT_MODES.get(self)


_TEXT_MODES = {
    OutputFormat.PLAIN_TEXT: AsciiMode.PLAIN,
    OutputFormat.FOREGROUND_TEXT: AsciiMode.FOREGROUND,
    OutputFormat.BACKGROUND_TEXT: AsciiMode.BACKGROUND,
}


@dataclass
class ConvertOptions:
    input_path: str
    output_path: str = "out.txt"
    x_scale: float = 1.0
    y_scale: float = 1.0
    output_format: int = OutputFormat.PLAIN_TEXT

    log_level: str = "WARNING"
    log_path: Optional[str] = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ConvertOptions":
        return cls(
            input_path=args.file,
            output_path=args.output,
            x_scale=args.xscale,
            y_scale=args.yscale,
            output_format=args.format,
            log_level=args.log_level,
            log_path=args.log,
        )


# -----------------------------
# Pipeline
# -----------------------------
def save_ascii(
    buffer: ImageBuffer, path: str | os.PathLike, mode: AsciiMode = AsciiMode.PLAIN
) -> None:
    """Render the buffer and write the text to ``path`` as UTF-8."""
    write_file(path, render(buffer, mode).encode("utf-8"))


def convert(opt: ConvertOptions) -> str:
    """
    Run decode -> resize -> render/encode -> write for one image.

    The output format is checked before the input is touched, so an invalid
    selector never reads the input or creates the output file. Returns the
    path that was written.
    """
    fmt = OutputFormat.parse(opt.output_format)

    buffer = load_image(opt.input_path)
    LOG.debug("Loaded image: %dx%d", buffer.width, buffer.height)

    buffer = resize(buffer, opt.x_scale, opt.y_scale)
    LOG.debug("Resized image: %dx%d", buffer.width, buffer.height)

    LOG.debug("Writing %s output to %s", fmt.name, opt.output_path)
    if fmt is OutputFormat.PNG:
        save_png(buffer, opt.output_path)
    else:
        save_ascii(buffer, opt.output_path, fmt.ascii_mode)

    return opt.output_path


# -----------------------------
# CLI
# -----------------------------
def setup_logging(level: str = "WARNING", log_path: str | None = None) -> None:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    handlers: list[logging.Handler] = []

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(numeric_level)
    sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers.append(sh)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        handlers.append(fh)

    for old in LOG.handlers:
        old.close()
    LOG.handlers[:] = handlers
    LOG.setLevel(logging.DEBUG if log_path else numeric_level)
    LOG.propagate = False  # prevent double logging via root logger


def positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise argparse.ArgumentTypeError(f"scale must be a positive number, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ascii-converter",
        description="Convert a PNG image to ASCII art or a resized PNG",
    )
    ap.add_argument(
        "-f", "--file", required=True, help="Please specify a path to a .png file"
    )
    ap.add_argument(
        "-x",
        "-xscale",
        "--xscale",
        type=positive_float,
        default=1.0,
        help="Please specify a scaling factor for the x axis",
    )
    ap.add_argument(
        "-y",
        "-yscale",
        "--yscale",
        type=positive_float,
        default=1.0,
        help="Please specify a scaling factor for the y axis",
    )
    ap.add_argument("-format", "--format", type=int, default=0, help=FORMAT_HELP)
    ap.add_argument(
        "-o",
        "--output",
        default="out.txt",
        help="Please specify an output filepath for the converted image",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    ap.add_argument(
        "--log", default=None, help="Also write DEBUG logs to this file"
    )
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the image-to-ASCII CLI."""
    args = build_parser().parse_args(argv)
    opt = ConvertOptions.from_args(args)

    t0 = time.perf_counter()
    setup_logging(opt.log_level, opt.log_path)
    LOG.debug(
        "Args: input=%s output=%s scale=(%g, %g) format=%s",
        opt.input_path,
        opt.output_path,
        opt.x_scale,
        opt.y_scale,
        opt.output_format,
    )

    try:
        out_path = convert(opt)
    except ConverterError as e:
        LOG.debug("Conversion failed", exc_info=True)
        print(f"\033[31mError: {e}\033[0m", file=sys.stderr)
        return 1

    LOG.debug("Done in %.3fs", time.perf_counter() - t0)
    print(f"File saved to: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
