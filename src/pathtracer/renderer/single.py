# renderer/single.py
import logging
import random
from typing import Optional, Tuple

from tqdm import tqdm

from pathtracer.camera.camera import Camera
from pathtracer.core.colour import Colour
from pathtracer.core.ray import Ray
from pathtracer.renderer.base import RayRenderer
from pathtracer.renderer.generator import RayGenerator
from pathtracer.renderer.image import Image
from pathtracer.specifications.features import Features

logger = logging.getLogger(__name__)

# Hits closer than this are ignored, so bounced rays do not hit their own origin.
# With t_min = 0 diffuse surfaces come out darker and speckled (shadow acne).
T_MIN = 0.001

WHITE = Colour(1.0, 1.0, 1.0, 0.0)
SKY_BLUE = Colour(0.5, 0.7, 1.0, 0.0)


def sky_colour(ray: Ray) -> Colour:
    """
    Background gradient from white at the bottom to blue at the top.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return (WHITE * (1.0 - t) + SKY_BLUE * t).opaque()


def ray_colour(ray: Ray, hit_list, depth: int, rng) -> Colour:
    """
    Computes the colour seen along `ray`, bouncing at most `depth` times.

    This is the recursion colour(ray, d) = attenuation * colour(bounce, d - 1)
    unrolled into a loop, with the attenuations multiplied back in the same
    order the recursion would.
    """
    attenuations = []
    while True:
        if depth == 0:
            colour = Colour(0.0, 0.0, 0.0, 1.0)
            break

        found = hit_list.hit(ray, T_MIN, float("inf"))
        if found is None:
            colour = sky_colour(ray)
            break

        index, record = found
        scattered, attenuation = hit_list.scatter(ray, index, record, rng)
        if scattered is None:
            colour = attenuation
            break

        attenuations.append(attenuation)
        ray = scattered
        depth -= 1

    for attenuation in reversed(attenuations):
        colour = attenuation * colour
    return colour


class SingleThreadRenderer(RayRenderer):
    """
    Renders a frame, or one horizontal band of it, on the calling thread.

    With a `seed`, every row draws from its own `random.Random` seeded by the
    seed and the absolute row number, so the output does not depend on how a
    frame is split into bands. Without one, all rows share `rng`.
    """
    def __init__(self, dims: Tuple[int, int], features: Features, show_progress: bool = False,
                 rng=None, rows: Optional[Tuple[int, int]] = None, seed: Optional[int] = None):
        self.dims = dims
        self.features = features
        self.show_progress = show_progress
        self.rng = rng if rng is not None else random.Random()
        self.rows = rows if rows is not None else (0, dims[1])
        self.seed = seed

    def _chunks(self):
        """Yields (rows, rng) pairs covering this renderer's rows."""
        y_start, y_end = self.rows
        if self.seed is None:
            yield self.rows, self.rng
            return
        for y in range(y_start, y_end):
            yield (y, y + 1), random.Random(f"{self.seed}:{y}")

    def render_frame(self, hit_list) -> Image:
        width, height = self.dims
        y_start, y_end = self.rows
        n_samples = self.features.n_samples
        logger.info("Rendering rows %d-%d of %dx%d frame (%d objects)...",
                    y_start, y_end, width, height, hit_list.n_objects())

        image = Image((width, y_end - y_start))
        camera = Camera(aspect_ratio=width / height)

        scale = 1.0 / n_samples
        accumulated = Colour.zeroes()
        total = n_samples * width * (y_end - y_start)
        with tqdm(total=total, unit="ray", unit_scale=True, disable=not self.show_progress) as progress:
            for rows, rng in self._chunks():
                for s, x, y, ray in RayGenerator(camera, self.dims, n_samples, rng, rows):
                    colour = ray_colour(ray, hit_list, self.features.max_depth, rng)
                    accumulated = colour if s == 0 else accumulated + colour

                    # Last sample of this pixel
                    if s == n_samples - 1:
                        pixel = accumulated * scale
                        if self.features.gamma_correction:
                            pixel = pixel.gamma()
                        image[x, y - y_start] = pixel.opaque().clamp()
                        progress.update(n_samples)
        return image
