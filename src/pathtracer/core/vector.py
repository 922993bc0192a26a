# core/vector.py
import math

# Directions shorter than this are treated as degenerate
NEAR_ZERO_LENGTH = 1e-8


class Vector3:
    """
    A point, direction or normal in 3D space.

    `*` with a number scales the vector, `*` with another vector multiplies
    per component. Components can also be read by axis index (0, 1, 2).
    """
    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    @staticmethod
    def zeroes() -> "Vector3":
        return Vector3(0.0, 0.0, 0.0)

    def __getitem__(self, axis: int) -> float:
        return (self.x, self.y, self.z)[axis]

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, t: float) -> "Vector3":
        return self * (1.0 / t)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return tuple(self) == tuple(other)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(self.y * other.z - self.z * other.y,
                       self.z * other.x - self.x * other.z,
                       self.x * other.y - self.y * other.x)

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> "Vector3":
        """
        Returns the unit vector in the same direction. The zero vector stays zero.
        """
        length = self.length()
        if length == 0.0:
            return Vector3.zeroes()
        return self / length

    def near_zero(self) -> bool:
        return self.length() < NEAR_ZERO_LENGTH

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"
