# domain/geometry/coordinates.py
"""
Coordinate conventions used when handing design-space positions to a target
environment.

Design space has its origin at the top-left with Y increasing downward. A
target environment declares its own convention; the hierarchy builder asks the
convention to convert every node position before creating the element.
"""
from pydantic import Field

from domain.geometry.point import Point
from utils.base_model import ImmutableModel


class CoordinateConvention(ImmutableModel):
    """
    Mapping between design space and a target coordinate space.

    Subclass and override ``to_target``/``to_design`` for environments that
    need more than an axis flip and a fixed origin offset.
    """
    name: str = Field(description="Human-readable identifier")
    y_axis_up: bool = Field(description="True when the target Y axis points up")
    origin: Point = Field(
        default=Point(x=0.0, y=0.0),
        description="Target-space offset added after the axis flip",
    )

    def to_target(self, point: Point) -> Point:
        """Convert a design-space point to the target space."""
        converted = point.flipped_y() if self.y_axis_up else point
        return converted + self.origin

    def to_design(self, point: Point) -> Point:
        """Convert a target-space point back to design space."""
        shifted = point - self.origin
        return shifted.flipped_y() if self.y_axis_up else shifted


# Anchored-position runtimes such as Unity UI: (x, -y)
Y_UP = CoordinateConvention(name="y-up", y_axis_up=True)

# Screen-like targets such as a Tk canvas: (x, y)
Y_DOWN = CoordinateConvention(name="y-down", y_axis_up=False)
