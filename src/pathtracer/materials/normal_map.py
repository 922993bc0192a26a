# materials/normal_map.py
from typing import Optional, Tuple
from pathtracer.core.colour import Colour
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class NormalMap(Material):
    """
    Debug material that colours a surface by its (ray-facing) normal.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Optional[Ray], Colour]:
        n = rec.normal
        # Alpha does not take part in the normal mapping
        return None, Colour(0.5 * (n.x + 1.0), 0.5 * (n.y + 1.0), 0.5 * (n.z + 1.0), 1.0)

    def __eq__(self, other) -> bool:
        return isinstance(other, NormalMap)

    def __hash__(self) -> int:
        return hash(NormalMap)

    def __repr__(self) -> str:
        return "NormalMap()"
