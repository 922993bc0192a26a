# core/utils.py
from pathtracer.core.vector import Vector3


def random_in_unit_sphere(rng) -> Vector3:
    """
    Rejection-samples a point strictly inside the unit sphere.

    `rng` needs a `uniform(a, b)` method; the renderers pass a `random.Random`
    per thread.
    """
    while True:
        p = Vector3(rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0))
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng) -> Vector3:
    return random_in_unit_sphere(rng).normalize()
