"""
In-memory element models for the Lanhu UI Builder.

ElementRecord is the handle type of the InMemoryElementFactory: it records
everything the builder asked for so a built hierarchy can be inspected without
a display, which is what the tests and the ``--outline`` command use.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from domain.geometry.point import Point
from domain.geometry.size import Size
from models.element_factory import ElementFactory
from models.node import Node, NodeKind


@dataclass(eq=False)
class ElementRecord:
    """A visual element created by the in-memory factory."""
    element_id: int
    kind: NodeKind
    name: str
    size: Size
    position: Point
    text: Optional[str] = None
    parent: Optional["ElementRecord"] = None
    children: List["ElementRecord"] = field(default_factory=list)
    image_requests: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate element data after initialization."""
        if not isinstance(self.element_id, int) or self.element_id <= 0:
            raise ValueError("Element ID must be a positive integer")

    def iter_subtree(self) -> Iterator[Tuple[int, "ElementRecord"]]:
        """Yield (depth, element) pairs for this element and its descendants in pre-order."""
        stack = [(0, self)]
        while stack:
            depth, element = stack.pop()
            yield depth, element
            stack.extend((depth + 1, child) for child in reversed(element.children))

    def __repr__(self) -> str:
        return f"ElementRecord({self.element_id}, {self.kind.value}, {self.name!r})"


class InMemoryElementFactory(ElementFactory):
    """Element factory that records elements instead of drawing them."""

    def __init__(self) -> None:
        self.elements: List[ElementRecord] = []

    def create_element(self, kind: NodeKind, node: Node, size: Size, position: Point) -> ElementRecord:
        element = ElementRecord(
            element_id=len(self.elements) + 1,
            kind=kind,
            name=node.name,
            size=size,
            position=position,
        )
        self.elements.append(element)
        return element

    def set_text(self, handle: ElementRecord, text: str) -> None:
        handle.text = text

    def attach_child(self, parent: ElementRecord, child: ElementRecord) -> None:
        if child.parent is not None:
            raise ValueError(f"Element {child.element_id} is already attached")
        child.parent = parent
        parent.children.append(child)

    def fetch_and_fill_image(self, handle: ElementRecord, source: str) -> None:
        # Recorded only; nothing is downloaded
        handle.image_requests.append(source)

    def roots(self) -> List[ElementRecord]:
        """Elements that were never attached to a parent."""
        return [element for element in self.elements if element.parent is None]

    @property
    def image_request_count(self) -> int:
        return sum(len(element.image_requests) for element in self.elements)

    def format_outline(self) -> str:
        """
        Render every root hierarchy as an indented text outline.

        Returns:
            One line per element: kind, name, size and target position
        """
        lines = []
        for root in self.roots():
            for depth, element in root.iter_subtree():
                line = f"{'  ' * depth}{element.kind.value} '{element.name}' size {element.size} at {element.position}"
                if element.text:
                    line += f" text={element.text!r}"
                for source in element.image_requests:
                    line += f" source={source}"
                lines.append(line)
        return "\n".join(lines)
