# camera/camera.py
import math
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray

WORLD_UP = Vector3(0, 1, 0)


class Camera:
    """
    Pinhole camera casting rays through a rectangular viewport.

    With the default arguments this is the renderer's fixed camera: at the
    origin, looking down -Z, with a viewport 2 units high and
    `2 * aspect_ratio` units wide at distance 1.
    """
    def __init__(self, aspect_ratio: float, position: Vector3 = None, yaw: float = 0.0,
                 pitch: float = 0.0, fov: float = math.pi / 2, focus_dist: float = 1.0):
        self.aspect_ratio = aspect_ratio
        self.position = position if position is not None else Vector3.zeroes()
        self.yaw = yaw
        self.pitch = pitch
        self.fov = fov
        self.focus_dist = focus_dist
        self.update_camera()

    def update_camera(self):
        """Recomputes the viewport after the position or orientation changed."""
        cos_pitch = math.cos(self.pitch)
        self.forward = Vector3(math.sin(self.yaw) * cos_pitch,
                               math.sin(self.pitch),
                               -math.cos(self.yaw) * cos_pitch).normalize()
        self.right = self.forward.cross(WORLD_UP).normalize()
        self.up = self.right.cross(self.forward).normalize()

        # Viewport spans fov vertically at focus_dist
        height = 2.0 * math.tan(self.fov / 2) * self.focus_dist
        width = self.aspect_ratio * height
        self.horizontal = self.right * width
        self.vertical = self.up * height

        center = self.position + self.forward * self.focus_dist
        self.lower_left_corner = center - self.horizontal * 0.5 - self.vertical * 0.5

    def cast(self, u: float, v: float) -> Ray:
        """
        Casts a ray through viewport position (u, v), with (0, 0) the lower
        left and (1, 1) the upper right corner.
        """
        target = self.lower_left_corner + self.horizontal * u + self.vertical * v
        return Ray(self.position, target - self.position)
