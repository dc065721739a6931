# domain/geometry/point.py
from pydantic import Field, field_validator
import math
from utils.base_model import ImmutableModel


class Point(ImmutableModel):
    """
    A 2D position in some coordinate space.

    The point itself does not know which way its Y axis points; design-space
    points are Y-down and converted by a CoordinateConvention when handed to
    a target environment.
    """
    x: float = Field(description="X coordinate")
    y: float = Field(description="Y coordinate")

    @field_validator("x", "y")
    @classmethod
    def validate_coordinates(cls, value: float) -> float:
        """Validate that coordinates are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Coordinate must be a finite number, got {value}")
        return value

    def __add__(self, other: "Point") -> "Point":
        """Offset this point by another point."""
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        """Offset of this point relative to another point."""
        return Point(x=self.x - other.x, y=self.y - other.y)

    def flipped_y(self) -> "Point":
        """Mirror the point across the X axis."""
        # 0.0 - y keeps the origin at 0.0 rather than -0.0
        return Point(x=self.x, y=0.0 - self.y)

    def as_tuple(self) -> tuple:
        return self.x, self.y

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
