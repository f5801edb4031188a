"""In-memory RGBA pixel grid backed by a flat row-major list."""

from dataclasses import dataclass, field
from typing import Iterator, List


def to_byte(value: int) -> int:
    """Clamp a channel value to the 0..255 range."""
    value = int(value)
    return 0 if value < 0 else (255 if value > 255 else value)


@dataclass(frozen=True)
class Pixel:
    r: int
    g: int
    b: int
    a: int = 255

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def clamped(self) -> "Pixel":
        """Return this pixel with every channel clamped to 8 bits."""
        return Pixel(to_byte(self.r), to_byte(self.g), to_byte(self.b), to_byte(self.a))

    def brightness(self) -> int:
        """Weighted luminance (2:3:1 for r:g:b), alpha ignored."""
        p = self.clamped()
        return (2 * p.r + 3 * p.g + p.b) // 6


BLACK = Pixel(0, 0, 0, 255)


@dataclass
class ImageBuffer:
    """
    A width x height grid of Pixels.

    Channels are alpha-premultiplied, as produced by the PNG loader.
    Pixel (x, y) is stored at ``data[x + y * width]`` and the buffer always
    holds exactly ``width * height`` entries.
    """

    width: int
    height: int
    data: List[Pixel] = field(default_factory=list)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"image dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if len(self.data) != self.width * self.height:
            raise ValueError(
                f"pixel data has {len(self.data)} entries, "
                f"expected {self.width * self.height} for {self.width}x{self.height}"
            )

    @classmethod
    def new(cls, width: int, height: int, fill: Pixel = BLACK) -> "ImageBuffer":
        return cls(width, height, [fill] * (width * height))

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        return x + y * self.width

    def get(self, x: int, y: int) -> Pixel:
        return self.data[self._index(x, y)]

    def set(self, x: int, y: int, pixel: Pixel) -> None:
        self.data[self._index(x, y)] = pixel

    def __getitem__(self, xy: tuple[int, int]) -> Pixel:
        return self.get(*xy)

    def __setitem__(self, xy: tuple[int, int], pixel: Pixel) -> None:
        self.set(xy[0], xy[1], pixel)

    def rows(self) -> Iterator[List[Pixel]]:
        """Yield each row of pixels, top to bottom."""
        for y in range(self.height):
            start = y * self.width
            yield self.data[start : start + self.width]


__all__ = ["Pixel", "ImageBuffer", "BLACK", "to_byte"]
