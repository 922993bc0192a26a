# materials/static_colour.py
from typing import Optional, Tuple
from pathtracer.core.colour import Colour
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class StaticColour(Material):
    """
    Flat-shaded material that always ends the path with its own colour.
    """
    def __init__(self, colour: Colour):
        self.colour = colour

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Optional[Ray], Colour]:
        return None, self.colour

    def __repr__(self) -> str:
        return f"StaticColour({self.colour!r})"
