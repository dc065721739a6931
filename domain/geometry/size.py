# domain/geometry/size.py
from pydantic import Field, field_validator
import math
from utils.base_model import ImmutableModel


class Size(ImmutableModel):
    """
    Extent of an element in pixels.

    Zero is a valid extent and marks a hidden or placeholder element.
    """
    width: float = Field(description="Horizontal extent")
    height: float = Field(description="Vertical extent")

    @field_validator("width", "height")
    @classmethod
    def validate_extent(cls, value: float) -> float:
        """Validate that extents are finite and non-negative."""
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Extent must be finite and non-negative, got {value}")
        return value

    @property
    def is_empty(self) -> bool:
        """True when the element covers no area."""
        return self.width == 0 or self.height == 0

    def as_tuple(self) -> tuple:
        return self.width, self.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
