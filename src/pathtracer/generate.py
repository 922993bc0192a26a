# generate.py
import logging
from typing import Tuple

import numpy as np

from pathtracer.renderer.image import write_rgba8

logger = logging.getLogger(__name__)


def gradient_pixels(dims: Tuple[int, int]) -> np.ndarray:
    """
    Returns the test gradient as (height, width, 4) uint8, top row first.

    Red grows to the right, green grows upwards, blue is fixed at 0.25.
    """
    width, height = dims
    red = np.arange(width, dtype=np.float64) / max(width - 1, 1)
    green = np.arange(height - 1, -1, -1, dtype=np.float64) / max(height - 1, 1)

    pixels = np.empty((height, width, 4), dtype=np.float64)
    pixels[:, :, 0] = red[np.newaxis, :]
    pixels[:, :, 1] = green[:, np.newaxis]
    pixels[:, :, 2] = 0.25
    pixels[:, :, 3] = 1.0
    return np.round(pixels * 255.0).astype(np.uint8)


def gradient(path, dims: Tuple[int, int], fix_dirs: bool = False):
    logger.info("Generating gradient image to '%s' (fixing directories? %s)...", path, "yes" if fix_dirs else "no")
    logger.debug("Generating image of %dx%d pixels...", dims[0], dims[1])
    write_rgba8(path, gradient_pixels(dims), fix_dirs)
    print(f"Successfully generated gradient image to {path}")
