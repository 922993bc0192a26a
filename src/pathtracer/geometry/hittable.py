# geometry/hittable.py
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray


class HitRecord:
    """
    Where a ray hit a surface: the ray parameter `t`, the point `p`, and the
    surface normal there. The normal always faces against the ray;
    `front_face` tells whether the ray came from outside.
    """
    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0.0, front_face: bool = True):
        self.p = p
        self.normal = normal
        self.t = t
        self.front_face = front_face

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def __repr__(self) -> str:
        return f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r}, front_face={self.front_face})"
