"""
Hierarchy builder: turns a Node tree into a parallel tree of element handles.

The builder walks the tree depth-first in pre-order and delegates every
environment-specific step to an ElementFactory. It only reads the tree.
"""
from typing import Optional
import logging

from domain.geometry.coordinates import CoordinateConvention, Y_UP
from models.design_parser import RawDocument, parse_document
from models.element_factory import ElementFactory, ElementHandle
from models.exceptions import ElementCreationFailed, NodePath, format_path
from models.node import Node, NodeKind
from utils.constants import MAX_DEPTH

# Configure logging
logger = logging.getLogger(__name__)


class HierarchyBuilder:
    """Builds element hierarchies through an injected element factory."""

    def __init__(self, factory: ElementFactory, convention: CoordinateConvention = Y_UP,
                 max_depth: int = MAX_DEPTH) -> None:
        """
        Initialize the builder.

        Args:
            factory: Element construction capability of the target environment
            convention: Coordinate convention of the target environment
            max_depth: Deepest nesting level built below the root
        """
        self.factory = factory
        self.convention = convention
        self.max_depth = max_depth
        self.built_count = 0

    def build(self, node: Node, parent: Optional[ElementHandle] = None) -> ElementHandle:
        """
        Build the element hierarchy for ``node`` and its descendants.

        Args:
            node: Root of the tree to build
            parent: Existing element to attach the new root element to

        Returns:
            Handle of the element created for ``node``

        Raises:
            ElementCreationFailed: If the factory fails for any node. Elements
                already attached before the failure stay attached.
        """
        self.built_count = 0
        handle = self._build_node(node, parent, ())
        logger.debug(f"Built {self.built_count} elements using the {self.convention.name} convention")
        return handle

    def _build_node(self, node: Node, parent: Optional[ElementHandle], path: NodePath) -> ElementHandle:
        if len(path) > self.max_depth:
            raise ElementCreationFailed(
                path, RecursionError(f"nesting exceeds the maximum depth of {self.max_depth}")
            )

        size = node.size
        position = self.convention.to_target(node.position)

        try:
            handle = self.factory.create_element(node.kind, node, size, position)
            if node.kind is NodeKind.IMAGE:
                if node.image_source:
                    self._request_image(handle, node.image_source, path)
            elif node.kind is NodeKind.TEXT:
                self.factory.set_text(handle, node.display_text)

            if parent is not None:
                self.factory.attach_child(parent, handle)
        except ElementCreationFailed:
            raise
        except Exception as e:
            raise ElementCreationFailed(path, e) from e

        self.built_count += 1
        logger.debug(f"Created {node.describe(children=len(node.children))} at {format_path(path)} -> {position}")

        for index, child in enumerate(node.children):
            self._build_node(child, handle, path + (index,))

        return handle

    def _request_image(self, handle: ElementHandle, source: str, path: NodePath) -> None:
        """Start the image fill without waiting for it; its failures stay with the element."""
        try:
            self.factory.fetch_and_fill_image(handle, source)
        except Exception as e:
            logger.warning(f"Image fill request for {format_path(path)} failed: {e}")


def build_hierarchy(node: Node, factory: ElementFactory, parent: Optional[ElementHandle] = None,
                    convention: CoordinateConvention = Y_UP) -> ElementHandle:
    """Build ``node`` with a one-off HierarchyBuilder."""
    return HierarchyBuilder(factory, convention).build(node, parent)


def build_from_document(raw: RawDocument, factory: ElementFactory, parent: Optional[ElementHandle] = None,
                        convention: CoordinateConvention = Y_UP) -> ElementHandle:
    """
    Parse a design export and build its element hierarchy.

    Args:
        raw: JSON text or bytes of the export
        factory: Element construction capability of the target environment
        parent: Existing element to attach the root element to
        convention: Coordinate convention of the target environment

    Returns:
        Handle of the root element
    """
    return build_hierarchy(parse_document(raw), factory, parent, convention)
