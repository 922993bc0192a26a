# core/aabb.py
import math
from pathtracer.core.vector import Vector3


class AABB:
    """
    Axis-aligned bounding box spanned by two opposite corners.

    The corners need not be ordered per axis; both the slab test and
    `surrounding_box` only treat them as the extremes of each axis.
    """
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    @staticmethod
    def empty() -> "AABB":
        """Degenerate box at the origin, used for groups without contents."""
        return AABB(Vector3.zeroes(), Vector3.zeroes())

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        """
        Slab test: narrows [t_min, t_max] to where the ray is inside the box on
        every axis, and reports whether anything is left.
        """
        for axis in range(3):
            d = ray.direction[axis]
            inv_d = 1.0 / d if d != 0.0 else math.copysign(math.inf, d)
            t0 = (self.minimum[axis] - ray.origin[axis]) * inv_d
            t1 = (self.maximum[axis] - ray.origin[axis]) * inv_d
            if t0 > t1:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if t_max <= t_min:
                return False
        return True

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        corners = (box0.minimum, box0.maximum, box1.minimum, box1.maximum)
        return AABB(Vector3(*(min(c[axis] for c in corners) for axis in range(3))),
                    Vector3(*(max(c[axis] for c in corners) for axis in range(3))))

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"
