"""
Main model class for the Lanhu UI Builder.
"""
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple
import logging

from domain.geometry.point import Point
from models.design_parser import RawDocument, parse_document
from models.exceptions import DesignImportError, NodePath
from models.node import Node, NodeKind

# Configure logging
logger = logging.getLogger(__name__)


class DesignModel:
    """Model class that holds a loaded design document and answers questions about it."""

    def __init__(self, strict_types: bool = False) -> None:
        """
        Initialize the design model.

        Args:
            strict_types: Reject unrecognized node types when parsing
        """
        self.strict_types = strict_types
        self.filepath: Optional[str] = None
        self.root: Optional[Node] = None
        self.last_error: Optional[str] = None

        # Model dimensions in absolute design space
        self.model_min_x: float = 0.0
        self.model_min_y: float = 0.0
        self.model_max_x: float = 0.0
        self.model_max_y: float = 0.0

    def load_file(self, filepath: str) -> bool:
        """
        Load and parse a design export file.

        Args:
            filepath: Path to the JSON export

        Returns:
            True if file was loaded successfully, False otherwise
        """
        try:
            raw = Path(filepath).read_bytes()
            self.load_document(raw)
        except (OSError, DesignImportError) as e:
            self.last_error = str(e)
            logger.error(f"Error loading file: {e}")
            return False

        self.filepath = filepath
        logger.info(f"Successfully loaded {filepath}")
        return True

    def load_document(self, raw: RawDocument) -> Node:
        """
        Parse a design export and make it the current document.

        Args:
            raw: JSON text or bytes

        Returns:
            The root node

        Raises:
            MalformedDocument: If the document is malformed; the previously
                loaded document is kept in that case
        """
        root = parse_document(raw, strict_types=self.strict_types)
        self.root = root
        self.last_error = None
        self.calculate_model_extents()
        logger.info(f"Loaded {self.node_count} nodes ({self._kind_summary()})")
        return root

    @property
    def node_count(self) -> int:
        return self.root.count() if self.root is not None else 0

    def iter_nodes(self) -> Iterator[Tuple[NodePath, Node, Point]]:
        """
        Walk the loaded document in pre-order.

        Yields:
            (path, node, absolute top-left position in design space)
        """
        if self.root is None:
            return

        stack: List[Tuple[NodePath, Node, Point]] = [((), self.root, self.root.position)]
        while stack:
            path, node, origin = stack.pop()
            yield path, node, origin
            for index in reversed(range(len(node.children))):
                child = node.children[index]
                stack.append((path + (index,), child, origin + child.position))

    def find_node(self, path: NodePath) -> Optional[Node]:
        """
        Look up a node by its index path.

        Args:
            path: Index chain from the root

        Returns:
            The node, or None if the path does not exist
        """
        node = self.root
        for index in path:
            if node is None or not 0 <= index < len(node.children):
                return None
            node = node.children[index]
        return node

    def calculate_model_extents(self) -> None:
        """Calculate the extents of the model for zooming."""
        if self.root is None:
            return

        # Initialize with the root node
        self.model_min_x = self.root.x
        self.model_max_x = self.root.x + self.root.width
        self.model_min_y = self.root.y
        self.model_max_y = self.root.y + self.root.height

        # Check all nodes
        for _, node, origin in self.iter_nodes():
            self.model_min_x = min(self.model_min_x, origin.x)
            self.model_max_x = max(self.model_max_x, origin.x + node.width)
            self.model_min_y = min(self.model_min_y, origin.y)
            self.model_max_y = max(self.model_max_y, origin.y + node.height)

    def count_by_kind(self) -> Dict[NodeKind, int]:
        """Count loaded nodes per kind."""
        counts = {kind: 0 for kind in NodeKind}
        if self.root is not None:
            for node in self.root.iter_subtree():
                counts[node.kind] += 1
        return counts

    def _kind_summary(self) -> str:
        return ", ".join(f"{count} {kind.value}" for kind, count in self.count_by_kind().items())
