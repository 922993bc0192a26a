# materials/diffuse.py
from typing import Optional, Tuple
from pathtracer.core.colour import Colour
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_unit_vector
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class Diffuse(Material):
    """
    Lambertian surface: every hit bounces in a random direction around the
    normal, tinted by `colour`.
    """
    def __init__(self, colour: Colour):
        self.colour = colour

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Optional[Ray], Colour]:
        direction = rec.normal + random_unit_vector(rng)
        # The random vector can cancel the normal out
        if direction.near_zero():
            direction = rec.normal
        return Ray(rec.p, direction), self.colour

    def __repr__(self) -> str:
        return f"Diffuse({self.colour!r})"
