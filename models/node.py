"""
Node model for the Lanhu UI Builder.
"""
from enum import Enum
from typing import Iterator, Optional, Tuple
import math

from pydantic import Field, field_validator, model_validator

from domain.geometry.point import Point
from domain.geometry.size import Size
from utils.base_model import ImmutableModel


class NodeKind(Enum):
    """Kind of design element a node describes."""
    GROUP = "group"
    IMAGE = "image"
    TEXT = "text"

    @classmethod
    def from_type_name(cls, type_name: str) -> "NodeKind":
        """
        Map a ``type`` string from the export to a node kind.

        Unrecognized names fall back to GROUP.
        """
        try:
            return cls(type_name)
        except ValueError:
            return cls.GROUP

    @classmethod
    def is_known(cls, type_name: str) -> bool:
        return type_name in {kind.value for kind in cls}


class Node(ImmutableModel):
    """
    One element of a parsed design tree.

    Position is relative to the parent node in design space (top-left origin,
    Y increasing downward). A node owns its children exclusively and is never
    modified after construction.
    """
    name: str = Field(description="Element name, not unique among siblings")
    kind: NodeKind = Field(default=NodeKind.GROUP, description="Element kind")
    type_name: str = Field(default="", description="Raw type string as exported")
    x: float = Field(description="X position in design pixels")
    y: float = Field(description="Y position in design pixels")
    width: float = Field(description="Width in design pixels")
    height: float = Field(description="Height in design pixels")
    image_source: Optional[str] = Field(default=None, description="Image URL for image nodes")
    text: Optional[str] = Field(default=None, description="Text content for text nodes")
    children: Tuple["Node", ...] = Field(default=(), description="Ordered child nodes")

    @field_validator("x", "y")
    @classmethod
    def validate_position(cls, value: float) -> float:
        """Validate that coordinates are finite numbers."""
        if not math.isfinite(value):
            raise ValueError(f"Coordinate must be a finite number, got {value}")
        return value

    @field_validator("width", "height")
    @classmethod
    def validate_extent(cls, value: float) -> float:
        """Validate that extents are finite and non-negative."""
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Extent must be finite and non-negative, got {value}")
        return value

    @model_validator(mode="after")
    def validate_content_fields(self) -> "Node":
        """Validate that content fields only appear on the matching kind."""
        if self.image_source is not None and self.kind is not NodeKind.IMAGE:
            raise ValueError(f"Only image nodes carry an image source, got {self.kind.value}")
        if self.text is not None and self.kind is not NodeKind.TEXT:
            raise ValueError(f"Only text nodes carry text, got {self.kind.value}")
        return self

    @property
    def position(self) -> Point:
        return Point(x=self.x, y=self.y)

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @property
    def display_text(self) -> str:
        """Text content, or an empty string when the node has none."""
        return self.text or ""

    def iter_subtree(self) -> Iterator["Node"]:
        """
        Yield this node and all descendants in pre-order.

        Uses an explicit stack so deep trees do not hit the recursion limit.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return sum(1 for _ in self.iter_subtree())

    def __str__(self) -> str:
        return f"{self.kind.value} '{self.name}' at ({self.x}, {self.y}) size {self.width}x{self.height}"


Node.model_rebuild()
