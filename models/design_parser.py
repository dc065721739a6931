"""
Parser for Lanhu JSON design exports.

The document is decoded with the standard ``json`` module and then walked
depth-first. Validation happens while walking: the first missing or mistyped
field aborts the whole parse with a MalformedDocument naming the node path,
so a caller either gets a complete tree or nothing.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging
import math

from models.exceptions import MalformedDocument, NodePath, format_path
from models.node import Node, NodeKind
from utils.constants import (
    FIELD_NAME, FIELD_TYPE, FIELD_X, FIELD_Y, FIELD_WIDTH, FIELD_HEIGHT,
    FIELD_SOURCE, FIELD_TEXT, FIELD_CHILDREN, MAX_DEPTH
)

# Configure logging
logger = logging.getLogger(__name__)

RawDocument = Union[str, bytes, bytearray]


def parse_document(raw: RawDocument, *, max_depth: int = MAX_DEPTH,
                   strict_types: bool = False) -> Node:
    """
    Parse a design export into a tree of nodes.

    Args:
        raw: JSON text or UTF-8 encoded bytes
        max_depth: Deepest nesting level accepted below the root
        strict_types: Reject unrecognized ``type`` strings instead of
            treating them as groups

    Returns:
        The root node

    Raises:
        MalformedDocument: If the document is not valid JSON, the root is not
            an object, or any node violates the schema
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedDocument((), f"invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedDocument((), f"document is not valid UTF-8: {e}") from e
    except ValueError as e:
        raise MalformedDocument((), f"unreadable value: {e}") from e
    except RecursionError as e:
        raise MalformedDocument((), "document nesting is too deep to decode") from e

    parser = _NodeParser(max_depth=max_depth, strict_types=strict_types)
    root = parser.parse_node(data, ())
    logger.debug(f"Parsed {parser.node_count} nodes")
    return root


def parse_file(filepath: Union[str, Path], **options: Any) -> Node:
    """
    Read and parse a design export from disk.

    Args:
        filepath: Path to the JSON file
        **options: Passed through to parse_document

    Returns:
        The root node
    """
    return parse_document(Path(filepath).read_bytes(), **options)


class _NodeParser:
    """Recursive-descent walker over decoded JSON values."""

    def __init__(self, max_depth: int, strict_types: bool) -> None:
        self.max_depth = max_depth
        self.strict_types = strict_types
        self.node_count = 0

    def parse_node(self, data: Any, path: NodePath) -> Node:
        if not isinstance(data, dict):
            raise MalformedDocument(path, f"node must be an object, got {_type_label(data)}")
        if len(path) > self.max_depth:
            raise MalformedDocument(path, f"nesting exceeds the maximum depth of {self.max_depth}")

        name = self._require_string(data, FIELD_NAME, path)
        type_name = self._require_string(data, FIELD_TYPE, path)
        x = self._require_number(data, FIELD_X, path)
        y = self._require_number(data, FIELD_Y, path)
        width = self._require_number(data, FIELD_WIDTH, path)
        height = self._require_number(data, FIELD_HEIGHT, path)

        if width < 0 or height < 0:
            raise MalformedDocument(path, f"negative size {width}x{height}")

        kind = self._resolve_kind(type_name, path)

        source = self._optional_string(data, FIELD_SOURCE, path)
        text = self._optional_string(data, FIELD_TEXT, path)

        children = self._parse_children(data, path)

        self.node_count += 1
        return Node(
            name=name,
            kind=kind,
            type_name=type_name,
            x=x,
            y=y,
            width=width,
            height=height,
            image_source=source if kind is NodeKind.IMAGE else None,
            text=text if kind is NodeKind.TEXT else None,
            children=tuple(children),
        )

    def _parse_children(self, data: Dict[str, Any], path: NodePath) -> List[Node]:
        if FIELD_CHILDREN not in data:
            return []

        raw_children = data[FIELD_CHILDREN]
        if not isinstance(raw_children, list):
            raise MalformedDocument(
                path, f"'{FIELD_CHILDREN}' must be an array, got {_type_label(raw_children)}"
            )

        children = []
        for index, child in enumerate(raw_children):
            children.append(self.parse_node(child, path + (index,)))
        return children

    def _resolve_kind(self, type_name: str, path: NodePath) -> NodeKind:
        if not NodeKind.is_known(type_name):
            if self.strict_types:
                raise MalformedDocument(path, f"unrecognized type '{type_name}'")
            logger.warning(f"Unknown node type '{type_name}' at {format_path(path)}, treating as group")
        return NodeKind.from_type_name(type_name)

    @staticmethod
    def _require_string(data: Dict[str, Any], field: str, path: NodePath) -> str:
        if field not in data:
            raise MalformedDocument(path, f"missing required field '{field}'")
        value = data[field]
        if not isinstance(value, str):
            raise MalformedDocument(path, f"'{field}' must be a string, got {_type_label(value)}")
        return value

    @staticmethod
    def _require_number(data: Dict[str, Any], field: str, path: NodePath) -> float:
        if field not in data:
            raise MalformedDocument(path, f"missing required field '{field}'")
        value = data[field]
        # bool is an int subclass but never a valid coordinate
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedDocument(path, f"'{field}' must be a number, got {_type_label(value)}")
        try:
            value = float(value)
        except OverflowError as e:
            raise MalformedDocument(path, f"'{field}' is out of range") from e
        if not math.isfinite(value):
            raise MalformedDocument(path, f"'{field}' must be finite, got {value}")
        return value

    @staticmethod
    def _optional_string(data: Dict[str, Any], field: str, path: NodePath) -> Optional[str]:
        if field not in data:
            return None
        value = data[field]
        if not isinstance(value, str):
            raise MalformedDocument(path, f"'{field}' must be a string, got {_type_label(value)}")
        return value


def _type_label(value: Any) -> str:
    """Name a decoded JSON value's type the way the document format would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
