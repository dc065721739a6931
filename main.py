#!/usr/bin/env python3
"""
Lanhu UI Builder - Version 1.0

Imports a Lanhu JSON design export and rebuilds it as a UI hierarchy, either
in a Tk viewer or as a text outline of the built elements.
"""
__version__ = "1.0"

import argparse
import logging
import sys
from typing import List, Optional

from domain.geometry.coordinates import Y_DOWN, Y_UP
from models.design_parser import parse_file
from models.element import InMemoryElementFactory
from models.exceptions import DesignImportError
from models.hierarchy_builder import HierarchyBuilder


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="lanhu-ui-builder", description="Lanhu JSON export → UI hierarchy")
    p.add_argument("file", nargs="?", default=None, help="Design export to open (JSON)")
    p.add_argument("--outline", action="store_true",
                   help="Print the built element hierarchy instead of opening the viewer")
    p.add_argument("--y-down", action="store_true",
                   help="Keep design-space Y-down positions in the outline (default: Y-up)")
    p.add_argument("--strict-types", action="store_true",
                   help="Reject unrecognized node types instead of treating them as groups")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p


def print_outline(filepath: str, y_down: bool = False, strict_types: bool = False) -> int:
    """Parse ``filepath``, build it in memory and print the resulting hierarchy."""
    try:
        root = parse_file(filepath, strict_types=strict_types)
        factory = InMemoryElementFactory()
        HierarchyBuilder(factory, convention=Y_DOWN if y_down else Y_UP).build(root)
    except (OSError, DesignImportError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(factory.format_outline())
    return 0


def run_viewer(filepath: Optional[str] = None, strict_types: bool = False) -> int:
    """Start the Tk viewer, optionally opening ``filepath``."""
    import tkinter as tk
    from controllers.design_controller import DesignController

    root = tk.Tk()
    app = DesignController(root, strict_types=strict_types)
    if filepath:
        root.after_idle(app.open_file, filepath)
    root.mainloop()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to start the application."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if args.outline:
        if not args.file:
            print("error: --outline requires a file", file=sys.stderr)
            return 2
        return print_outline(args.file, y_down=args.y_down, strict_types=args.strict_types)

    return run_viewer(args.file, strict_types=args.strict_types)


if __name__ == "__main__":
    raise SystemExit(main())
