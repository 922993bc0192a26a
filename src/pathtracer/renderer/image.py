# renderer/image.py
import logging
import os
from typing import Tuple

import numpy as np
from PIL import Image as PILImage

from pathtracer.core.colour import Colour
from pathtracer.core.errors import ImageWriteError, ParentNotFoundError

logger = logging.getLogger(__name__)


class Image:
    """
    A dense buffer of floating-point RGBA pixels.

    Pixels are addressed as `image[x, y]` with y = 0 the bottom row, matching
    the viewport coordinates the camera uses. The buffer is stored row-major
    with shape (height, width, 4).
    """
    def __init__(self, dims: Tuple[int, int]):
        width, height = dims
        self.pixels = np.zeros((height, width, 4), dtype=np.float64)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def dims(self) -> Tuple[int, int]:
        return self.width, self.height

    def __len__(self) -> int:
        return self.width * self.height

    def __getitem__(self, index: Tuple[int, int]) -> Colour:
        x, y = index
        return Colour(*(float(c) for c in self.pixels[y, x]))

    def __setitem__(self, index: Tuple[int, int], colour: Colour):
        x, y = index
        self.pixels[y, x] = colour.as_tuple()

    def move_into(self, other: "Image", position: Tuple[int, int]):
        """
        Copies `other` into this image with its lower left corner at `position`.
        """
        x, y = position
        if x < 0 or y < 0 or x + other.width > self.width or y + other.height > self.height:
            raise ValueError(
                f"Cannot move image of size {other.width}x{other.height} into image of size "
                f"{self.width}x{self.height} at position {x}x{y}"
            )
        self.pixels[y:y + other.height, x:x + other.width] = other.pixels

    def to_rgba8(self) -> np.ndarray:
        """
        Converts to 8-bit RGBA with the top row first, as image files expect.
        """
        scaled = np.round(np.clip(self.pixels, 0.0, 1.0) * 255.0).astype(np.uint8)
        return np.ascontiguousarray(scaled[::-1])

    def to_path(self, path, fix_dirs: bool = False):
        logger.info("Writing %dx%d image to '%s'", self.width, self.height, path)
        write_rgba8(path, self.to_rgba8(), fix_dirs)


def prepare_parent(path, fix_dirs: bool):
    """
    Makes sure the directory `path` is written to exists, creating it only if
    `fix_dirs` is set.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if os.path.isdir(parent):
        return
    if not fix_dirs:
        raise ParentNotFoundError(parent)
    logger.debug("Creating missing directory '%s'", parent)
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as err:
        raise ImageWriteError(path) from err


def write_rgba8(path, data: np.ndarray, fix_dirs: bool = False):
    """
    Writes a (height, width, 4) uint8 array to `path` with Pillow.
    """
    prepare_parent(path, fix_dirs)
    try:
        PILImage.fromarray(data).save(path)
    except (OSError, ValueError) as err:
        raise ImageWriteError(path) from err
