from dataclasses import dataclass


def clip(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


@dataclass(frozen=True)
class Color:
    """RGBA color with every channel saturated into [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self):
        # frozen dataclass, so bypass __setattr__ to store the clamped channels
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, clip(float(getattr(self, name))))

    def __add__(self, other: "Color") -> "Color":
        return Color(
            self.r + other.r,
            self.g + other.g,
            self.b + other.b,
            max(self.a, other.a),
        )

    def __mul__(self, intensity: float) -> "Color":
        return Color(self.r * intensity, self.g * intensity, self.b * intensity, self.a)

    __rmul__ = __mul__

    def blended(self, other: "Color") -> "Color":
        return Color(
            (self.r + other.r) / 2,
            (self.g + other.g) / 2,
            (self.b + other.b) / 2,
            (self.a + other.a) / 2,
        )

    def argb(self) -> int:
        """Pack into a 32 bit 0xAARRGGBB integer."""
        a, r, g, b = (int(round(c * 255)) for c in (self.a, self.r, self.g, self.b))
        return (a << 24) | (r << 16) | (g << 8) | b

    @classmethod
    def from_argb(cls, value: int) -> "Color":
        return cls(
            ((value >> 16) & 0xFF) / 255,
            ((value >> 8) & 0xFF) / 255,
            (value & 0xFF) / 255,
            ((value >> 24) & 0xFF) / 255,
        )

    @classmethod
    def black(cls) -> "Color":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> "Color":
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def red(cls) -> "Color":
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def green(cls) -> "Color":
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def blue(cls) -> "Color":
        return cls(0.0, 0.0, 1.0)
