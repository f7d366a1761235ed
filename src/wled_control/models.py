"""
Data Model

Pixel grids, color runs and the device command they turn into.
All values are immutable and live for a single invocation.
"""

from dataclasses import dataclass

from PIL import Image

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class PixelGrid:
    """A width x height grid of RGBA pixels in row-major order."""
    width: int
    height: int
    pixels: tuple[RGBA, ...]

    def __post_init__(self):
        object.__setattr__(self, 'pixels', tuple(tuple(p) for p in self.pixels))
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative grid size {self.width}x{self.height}")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Grid {self.width}x{self.height} needs {self.width * self.height} "
                f"pixels, got {len(self.pixels)}"
            )

    def __len__(self) -> int:
        return len(self.pixels)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def index_of(self, x: int, y: int) -> int:
        return y * self.width + x

    def pixel_at(self, x: int, y: int) -> RGBA:
        return self.pixels[self.index_of(x, y)]

    def rgb_at(self, index: int) -> RGB:
        r, g, b, _ = self.pixels[index]
        return (r, g, b)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelGrid":
        """Build a grid from a Pillow image of any mode."""
        img = img.convert('RGBA')
        data = img.tobytes()
        pixels = tuple(
            (data[i], data[i + 1], data[i + 2], data[i + 3])
            for i in range(0, len(data), 4)
        )
        return cls(img.width, img.height, pixels)

    def to_image(self) -> Image.Image:
        """Convert back to an RGBA Pillow image."""
        data = bytes(channel for pixel in self.pixels for channel in pixel)
        return Image.frombytes('RGBA', (self.width, self.height), data)


@dataclass(frozen=True)
class Run:
    """Contiguous LED indices [start, end) sharing one color."""
    start: int
    end: int
    color: RGB

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class DeviceCommand:
    """State update for the device: power, brightness and segment colors."""
    on: bool
    brightness: int
    segments: tuple[Run, ...] = ()
