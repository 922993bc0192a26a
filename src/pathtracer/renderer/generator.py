# renderer/generator.py
from typing import Optional, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.ray import Ray


class RayGenerator:
    """
    Lazily produces the camera rays for a frame as (sample, x, y, ray) tuples.

    Samples run fastest, then x, then y, so all samples of one pixel come out
    back to back. With more than one sample per pixel every ray is jittered by
    a uniform random offset within its pixel, using the given `rng`.

    `rows=(y_start, y_end)` limits the sequence to that band of the frame; the
    yielded y stays relative to the whole frame.
    """
    def __init__(self, camera: Camera, dims: Tuple[int, int], n_samples: int, rng,
                 rows: Optional[Tuple[int, int]] = None):
        self.camera = camera
        self.width, self.height = dims
        self.n_samples = n_samples
        self.rng = rng
        self.rows = rows if rows is not None else (0, self.height)
        if not 0 <= self.rows[0] <= self.rows[1] <= self.height:
            raise ValueError(f"Rows {self.rows} are out of range for a frame of height {self.height}")
        self.index = 0

    def total(self) -> int:
        return self.n_samples * self.width * (self.rows[1] - self.rows[0])

    def restart(self):
        self.index = 0

    def __iter__(self):
        return self

    def __next__(self) -> Tuple[int, int, int, Ray]:
        if self.index >= self.total():
            raise StopIteration

        s = self.index % self.n_samples
        rem = self.index // self.n_samples
        px = rem % self.width
        py = self.rows[0] + rem // self.width

        x = float(px)
        y = float(py)
        if self.n_samples > 1:
            x += self.rng.random()
            y += self.rng.random()

        # Logical viewport coordinates
        u = x / max(self.width - 1, 1)
        v = y / max(self.height - 1, 1)

        self.index += 1
        return s, px, py, self.camera.cast(u, v)

    def __len__(self) -> int:
        return self.total() - self.index
