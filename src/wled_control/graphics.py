"""
Graphics Module - Image loading and resizing for WLED panels.

Supports:
- Loading any Pillow-readable image into a PixelGrid
- Fitting images to an arbitrary width x height LED panel
- Fill-and-crop or stretch, depending on aspect ratio and panel settings
"""

import logging
from pathlib import Path
from typing import Literal, Union

from PIL import Image, UnidentifiedImageError

from .config import PanelConfig
from .errors import ImageDecodeError, ImageNotFoundError, InvalidInputError
from .models import PixelGrid

logger = logging.getLogger(__name__)

ResizeMode = Literal['fill', 'stretch']


# =============================================================================
# Image Loading
# =============================================================================

def open_image(path: Union[Path, str]) -> Image.Image:
    """
    Open an image file and return its first frame, fully decoded.

    Raises:
        ImageNotFoundError: path does not point at a file.
        ImageDecodeError: Pillow cannot read the file.
    """
    path = Path(path)
    if not path.is_file():
        raise ImageNotFoundError(path)

    try:
        with Image.open(path) as img:
            img.seek(0)
            img.load()
            frame = img.copy()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageDecodeError(path, str(e)) from e

    logger.info(f"Loaded {path.name} ({frame.width}x{frame.height})")
    return frame


def load_image(path: Union[Path, str]) -> PixelGrid:
    """
    Load an image file into a PixelGrid at its native size.

    Animated images contribute their first frame only.
    """
    return PixelGrid.from_image(open_image(path))


def load_for_panel(path: Union[Path, str], panel: PanelConfig) -> PixelGrid:
    """
    Load an image file already fitted to the panel.

    The image stays a Pillow image until it has the panel's size, so only
    panel-sized pixel data is ever unpacked.
    """
    return PixelGrid.from_image(fit_to_panel(open_image(path), panel))


# =============================================================================
# Image Resizing
# =============================================================================

def resize_image(
    img: Image.Image,
    width: int,
    height: int,
    mode: ResizeMode = 'fill'
) -> Image.Image:
    """
    Resize an image to exact dimensions.

    Modes:
    - fill: Scale and center crop to fill exactly (no bars, may crop)
    - stretch: Stretch to exact size (may distort)
    """
    # alpha would be premultiplied into the colors by the resampler
    img = img.convert('RGB')

    if mode == 'stretch':
        return img.resize((width, height), Image.Resampling.LANCZOS)

    src_ratio = img.width / img.height
    dst_ratio = width / height

    if mode == 'fill':
        if src_ratio > dst_ratio:
            new_height = height
            new_width = max(width, round(height * src_ratio))
        else:
            new_width = width
            new_height = max(height, round(width / src_ratio))

        if (new_width, new_height) != img.size:
            img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

        # Center crop
        left = (new_width - width) // 2
        top = (new_height - height) // 2
        return img.crop((left, top, left + width, top + height))

    raise ValueError(f"Unknown resize mode: {mode!r}")


def aspect_matches(width: int, height: int, panel: PanelConfig) -> bool:
    """Compare aspect ratios without floating point error."""
    return width * panel.height == panel.width * height


def choose_mode(width: int, height: int, panel: PanelConfig) -> ResizeMode:
    """Fill-and-crop only when the ratios differ and the panel asks for it."""
    if not aspect_matches(width, height, panel) and panel.crop_on_aspect_mismatch:
        return 'fill'
    return 'stretch'


def fit_to_panel(img: Image.Image, panel: PanelConfig) -> Image.Image:
    """
    Make a Pillow image exactly panel.width x panel.height.

    An image that already has the panel's size is returned as-is, alpha
    included. Anything else is resized with LANCZOS as an RGB image.
    """
    if img.size == (panel.width, panel.height):
        return img
    if img.width == 0 or img.height == 0:
        raise InvalidInputError("Cannot resize an empty image")

    mode = choose_mode(img.width, img.height, panel)
    logger.info(
        f"Resizing {img.width}x{img.height} -> {panel.width}x{panel.height} ({mode})"
    )
    return resize_image(img, panel.width, panel.height, mode)


def normalize_for_panel(grid: PixelGrid, panel: PanelConfig) -> PixelGrid:
    """
    Make the grid exactly panel.width x panel.height.

    A grid that already has the panel's size is returned as-is. When the
    aspect ratios differ and the panel asks for cropping, the image is
    scaled to cover the panel and center cropped. Everything else is
    stretched.
    """
    if grid.size == (panel.width, panel.height):
        return grid
    if len(grid) == 0:
        raise InvalidInputError("Cannot resize an empty image")
    return PixelGrid.from_image(fit_to_panel(grid.to_image(), panel))
