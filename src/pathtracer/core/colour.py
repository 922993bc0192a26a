# core/colour.py
import math


class Colour:
    """
    An RGBA colour with floating-point channels.

    Channels are not bounded while rendering; `clamp()` brings them back into
    [0, 1] once a pixel is finished.
    """
    def __init__(self, r: float, g: float, b: float, a: float = 1.0):
        self.r = r
        self.g = g
        self.b = b
        self.a = a

    @staticmethod
    def zeroes() -> "Colour":
        return Colour(0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_sequence(values) -> "Colour":
        """
        Builds a colour from three (alpha defaults to 1) or four numbers.
        """
        values = [float(v) for v in values]
        if len(values) == 3:
            return Colour(values[0], values[1], values[2], 1.0)
        if len(values) == 4:
            return Colour(*values)
        raise ValueError(f"expected 3 or 4 colour channels, got {len(values)}")

    def __add__(self, other: "Colour") -> "Colour":
        return Colour(self.r + other.r, self.g + other.g, self.b + other.b, self.a + other.a)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Colour(self.r * other, self.g * other, self.b * other, self.a * other)
        return Colour(self.r * other.r, self.g * other.g, self.b * other.b, self.a * other.a)

    def __rmul__(self, other: float) -> "Colour":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Colour":
        return Colour(self.r / t, self.g / t, self.b / t, self.a / t)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Colour):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def opaque(self) -> "Colour":
        return Colour(self.r, self.g, self.b, 1.0)

    def clamp(self) -> "Colour":
        return Colour(
            min(max(self.r, 0.0), 1.0),
            min(max(self.g, 0.0), 1.0),
            min(max(self.b, 0.0), 1.0),
            min(max(self.a, 0.0), 1.0),
        )

    def gamma(self) -> "Colour":
        """
        Gamma-2 correction: square root of the colour channels, alpha untouched.
        """
        return Colour(math.sqrt(max(self.r, 0.0)), math.sqrt(max(self.g, 0.0)), math.sqrt(max(self.b, 0.0)), self.a)

    def as_tuple(self) -> tuple:
        return (self.r, self.g, self.b, self.a)

    def __repr__(self) -> str:
        return f"Colour({self.r}, {self.g}, {self.b}, {self.a})"
