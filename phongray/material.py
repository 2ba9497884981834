from dataclasses import dataclass, field

from phongray.color import Color
from phongray.common import DegenerateGeometryError


@dataclass(frozen=True)
class Material:
    ambient: float = 0.1
    diffuse: float = 1.0
    specular: float = 1.0
    shininess: float = 20.0
    color: Color = field(default_factory=Color.white)

    def __post_init__(self):
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise DegenerateGeometryError(f"{name} coefficient must lie in [0, 1], got {value}")
        if self.shininess <= 0:
            raise DegenerateGeometryError(f"shininess must be positive, got {self.shininess}")
