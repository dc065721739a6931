# lanhu_ui_builder.py
"""
Lanhu UI Builder - Main package module
"""
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Import main components to expose them at package level
from domain.geometry.coordinates import CoordinateConvention, Y_DOWN, Y_UP
from models.node import Node, NodeKind
from models.design_parser import parse_document, parse_file
from models.design_model import DesignModel
from models.element_factory import ElementFactory
from models.element import ElementRecord, InMemoryElementFactory
from models.exceptions import (
    DesignImportError, MalformedDocument, ElementCreationFailed, ImageFetchFailed
)
from models.hierarchy_builder import HierarchyBuilder, build_hierarchy, build_from_document

# Make them available when someone does 'import lanhu_ui_builder'
__all__ = [
    'CoordinateConvention',
    'Y_DOWN',
    'Y_UP',
    'Node',
    'NodeKind',
    'parse_document',
    'parse_file',
    'DesignModel',
    'ElementFactory',
    'ElementRecord',
    'InMemoryElementFactory',
    'DesignImportError',
    'MalformedDocument',
    'ElementCreationFailed',
    'ImageFetchFailed',
    'HierarchyBuilder',
    'build_hierarchy',
    'build_from_document',
]

# This allows running the package directly
if __name__ == "__main__":
    from main import main
    raise SystemExit(main())
