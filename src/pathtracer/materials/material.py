# materials/material.py
from typing import Optional, Tuple
from pathtracer.core.colour import Colour
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    The set of materials is closed: the hit list keeps a separate list per
    concrete subclass, so adding one means adding a list there as well.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Optional[Ray], Colour]:
        """
        Computes the bounced ray and the colour for a hit.

        Returns (scattered_ray, attenuation) when the path continues, or
        (None, colour) when it ends here and `colour` is the final value.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
