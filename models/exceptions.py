"""
Exception classes for design import.

Parse errors are fatal to the whole document, build errors are fatal to the
subtree being built, and image fetch errors are confined to one element's
visual fill and only ever reported through logging.
"""
from typing import Sequence, Tuple

from utils.constants import FIELD_CHILDREN

NodePath = Tuple[int, ...]


def format_path(path: Sequence[int]) -> str:
    """
    Render a node path as a JSON pointer into the source document.

    Args:
        path: Index chain from the root node

    Returns:
        Pointer such as ``/children/0/children/2``, or ``<root>`` for the root
    """
    if not path:
        return "<root>"
    return "".join(f"/{FIELD_CHILDREN}/{index}" for index in path)


class DesignImportError(Exception):
    """Base exception for all design import errors."""

    pass


class MalformedDocument(DesignImportError):
    """Raised when the document, or any node in it, does not match the schema."""

    def __init__(self, path: Sequence[int], reason: str):
        """
        Initialize the exception.

        Args:
            path: Index chain from the root to the offending node
            reason: What is wrong with the node
        """
        self.path: NodePath = tuple(path)
        self.reason = reason
        super().__init__(f"Malformed document at {format_path(self.path)}: {reason}")


class ElementCreationFailed(DesignImportError):
    """Raised when the target environment cannot create or attach an element."""

    def __init__(self, path: Sequence[int], cause: BaseException):
        """
        Initialize the exception.

        Args:
            path: Index chain from the root to the node being built
            cause: The underlying failure raised by the element factory
        """
        self.path: NodePath = tuple(path)
        self.cause = cause
        super().__init__(f"Cannot create element at {format_path(self.path)}: {cause}")


class ImageFetchFailed(DesignImportError):
    """Describes a failed image download; logged by the loader, never raised to the builder."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot fetch image '{source}': {reason}")
