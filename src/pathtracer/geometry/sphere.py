# geometry/sphere.py
import math
from typing import Optional
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB
from pathtracer.geometry.hittable import HitRecord


class Sphere:
    """
    A sphere with a material. The material only matters to the hit list,
    which sorts spheres by material type.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """
        Solves |origin + t * direction - center| = radius for the nearest t in
        [t_min, t_max].
        """
        a = ray.direction.length_squared()
        if a == 0.0:
            return None
        oc = ray.origin - self.center
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return None
        sqrt_d = math.sqrt(discriminant)

        # Near root first, far root only if the near one is out of range
        for t in ((-half_b - sqrt_d) / a, (-half_b + sqrt_d) / a):
            if t_min <= t <= t_max:
                return self._record(ray, t)
        return None

    def _record(self, ray: Ray, t: float) -> HitRecord:
        p = ray.at(t)
        rec = HitRecord(p=p, t=t)
        rec.set_face_normal(ray, (p - self.center) / self.radius)
        return rec

    def bounding_box(self) -> AABB:
        extent = Vector3(self.radius, self.radius, self.radius)
        return AABB(self.center - extent, self.center + extent)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.material!r})"
