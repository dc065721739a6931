"""
Capability interface between the hierarchy builder and a target environment.

The builder never touches a rendering runtime directly. Each environment
(a Tk canvas, a game engine bridge, an in-memory recorder for tests) supplies
an ElementFactory whose handles are opaque to the builder.
"""
from abc import ABC, abstractmethod
from typing import Any
import logging

from domain.geometry.point import Point
from domain.geometry.size import Size
from models.node import Node, NodeKind

# Configure logging
logger = logging.getLogger(__name__)

ElementHandle = Any


class ElementFactory(ABC):
    """Creates and connects visual elements in a target environment."""

    @abstractmethod
    def create_element(self, kind: NodeKind, node: Node, size: Size, position: Point) -> ElementHandle:
        """
        Create a visual element for a node.

        Args:
            kind: Which capability the element needs (container, image, text)
            node: The node being built, for names and diagnostics
            size: Element extent, copied verbatim from the node
            position: Element position already converted to the target convention

        Returns:
            An opaque handle for the new element
        """

    @abstractmethod
    def set_text(self, handle: ElementHandle, text: str) -> None:
        """Set the content of a text-capable element."""

    @abstractmethod
    def attach_child(self, parent: ElementHandle, child: ElementHandle) -> None:
        """Attach ``child`` as the last child of ``parent``."""

    def fetch_and_fill_image(self, handle: ElementHandle, source: str) -> None:
        """
        Start filling an image element from ``source`` without blocking.

        Environments without image support keep this default, which leaves
        the element unfilled. Implementations report failures through their
        own logging and must not raise them back to the caller.
        """
        logger.debug(f"Image fill not supported by {type(self).__name__}, skipping {source}")
