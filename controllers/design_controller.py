"""
Main controller for the Lanhu UI Builder.
"""
import tkinter as tk
from typing import Any, Dict, List, Optional
import logging

from models.design_model import DesignModel
from models.exceptions import ElementCreationFailed, NodePath, format_path
from views.canvas_view import CanvasView
from views.image_loader import ImageLoader
from views.main_window import MainWindow, OutlineRow
from utils.constants import IMAGE_POLL_INTERVAL_MS, ZOOM_FACTOR

# Configure logging
logger = logging.getLogger(__name__)


class DesignController:
    """Controller for the Lanhu UI Builder application."""

    def __init__(self, root: tk.Tk, image_loader: Optional[ImageLoader] = None,
                 strict_types: bool = False) -> None:
        """
        Initialize the controller.

        Args:
            root: The root Tkinter window
            image_loader: Loader for image sources; a default one is created if omitted
            strict_types: Reject unrecognized node types when loading
        """
        # Create model and views
        self.model = DesignModel(strict_types=strict_types)
        self.main_window = MainWindow(root)
        self.image_loader = image_loader if image_loader is not None else ImageLoader()
        self.canvas_view = CanvasView(self.main_window.canvas, self.image_loader)

        # Outline item id <-> node path
        self.paths_by_item: Dict[str, NodePath] = {}
        self.items_by_node: Dict[int, str] = {}

        # Pan state
        self.drag_start_x = 0
        self.drag_start_y = 0

        # Set up event handlers
        self._setup_callbacks()
        self._setup_bindings()
        self._poll_images()

    def _setup_callbacks(self) -> None:
        """Set up callback functions for UI events."""
        callbacks = {
            "open_file": self.open_file,
            "reload_file": self.reload_file,
            "zoom_to_fit": self.zoom_to_fit,
            "outline_select": self.on_outline_select,
        }
        self.main_window.set_callbacks(callbacks)

    def _setup_bindings(self) -> None:
        """Set up event bindings for the canvas."""
        # Mouse events
        canvas = self.main_window.canvas
        canvas.bind("<Button-1>", self.on_canvas_click)
        canvas.bind("<Motion>", self.on_mouse_move)

        # Key events
        root = self.main_window.root
        root.bind("<Escape>", self.on_escape)
        root.bind("<Control-o>", lambda e: self.open_file())
        root.bind("<F5>", lambda e: self.reload_file())
        root.protocol("WM_DELETE_WINDOW", self.close)

        # Mouse wheel for zoom
        canvas.bind("<MouseWheel>", self.on_mouse_wheel)  # Windows
        canvas.bind("<Button-4>", self.on_mouse_wheel)  # Linux scroll up
        canvas.bind("<Button-5>", self.on_mouse_wheel)  # Linux scroll down

        # Middle mouse button for panning
        canvas.bind("<Button-2>", self.on_pan_start)  # Middle button on Linux
        canvas.bind("<Button-3>", self.on_pan_start)  # Right button as alternative
        canvas.bind("<B2-Motion>", self.on_pan_motion)
        canvas.bind("<B3-Motion>", self.on_pan_motion)

    def open_file(self, filepath: Optional[str] = None) -> bool:
        """
        Open a design export.

        Args:
            filepath: Path to open; asks the user when omitted

        Returns:
            True if the design was loaded and rendered
        """
        if filepath is None:
            filepath = self.main_window.get_open_filename()
        if not filepath:
            return False

        previous_filepath = self.model.filepath
        if not self.model.load_file(filepath):
            self.main_window.show_message(
                "Error", f"Failed to open file: {filepath}\n\n{self.model.last_error}", "error"
            )
            return False

        if filepath != previous_filepath:
            # Pictures of the previous design are not reused
            self.image_loader.clear_cache()

        self.main_window.root.title(f"Lanhu UI Builder - {filepath}")
        self._populate_outline()
        self.zoom_to_fit()

        self.main_window.update_status(f"Loaded {self.model.node_count} nodes")
        return True

    def reload_file(self) -> None:
        """Reload the current file from disk."""
        if not self.model.filepath:
            self.main_window.show_message("Info", "No file loaded", "info")
            return
        self.open_file(self.model.filepath)

    def zoom_to_fit(self) -> None:
        """Fit the whole design into the canvas and redraw it."""
        if self.model.root is None:
            return
        self.canvas_view.zoom_to_fit(
            self.model.model_min_x,
            self.model.model_min_y,
            self.model.model_max_x,
            self.model.model_max_y
        )
        self.render_design()

    def render_design(self) -> None:
        """Render the loaded design on the canvas."""
        if self.model.root is None:
            return
        try:
            self.canvas_view.render_design(self.model.root)
        except ElementCreationFailed as e:
            logger.error(f"Error rendering design: {e}")
            self.main_window.show_message("Error", str(e), "error")

    def _populate_outline(self) -> None:
        """Fill the outline tree from the loaded design."""
        self.paths_by_item.clear()
        self.items_by_node.clear()

        rows: List[OutlineRow] = []
        for path, node, _ in self.model.iter_nodes():
            item_id = format_path(path)
            parent_id = format_path(path[:-1]) if path else ""
            rows.append((item_id, parent_id, node.name, node.kind.value))
            self.paths_by_item[item_id] = path
            self.items_by_node[id(node)] = item_id

        self.main_window.populate_outline(rows)

    def on_outline_select(self, event: Any) -> None:
        """
        Highlight the node selected in the outline.

        Args:
            event: The event that triggered the selection
        """
        item_id = self.main_window.get_selected_outline_item()
        if item_id is None or item_id not in self.paths_by_item:
            return

        node = self.model.find_node(self.paths_by_item[item_id])
        if node is not None and self.canvas_view.highlight(node):
            self.main_window.update_status(str(node))

    def on_canvas_click(self, event: Any) -> None:
        """
        Select the element under the cursor in the outline.

        Args:
            event: The event that triggered the click
        """
        element = self.canvas_view.find_element_at_position(event.x, event.y)
        if element is None:
            self.canvas_view.highlight(None)
            return

        item_id = self.items_by_node.get(id(element.node))
        if item_id is not None:
            self.main_window.select_outline_item(item_id)

    def on_escape(self, event: Any) -> None:
        """
        Handle ESC key to clear the highlight.

        Args:
            event: The event that triggered the key press
        """
        self.canvas_view.highlight(None)
        self.main_window.update_status("Ready")

    def on_mouse_move(self, event: Any) -> None:
        """
        Show the design coordinates under the cursor.

        Args:
            event: The event that triggered the movement
        """
        model_x, model_y = self.canvas_view.screen_to_model(event.x, event.y)
        self.main_window.update_coordinates(model_x, model_y)

    def on_mouse_wheel(self, event: Any) -> None:
        """
        Handle mouse wheel for zooming.

        Args:
            event: The event that triggered the wheel movement
        """
        if getattr(event, "delta", 0) > 0 or event.num == 4:  # Zoom in
            factor = ZOOM_FACTOR
        else:  # Zoom out
            factor = 1 / ZOOM_FACTOR
        self.canvas_view.zoom_at(event.x, event.y, factor)

    def on_pan_start(self, event: Any) -> None:
        """
        Handle start of panning with middle mouse button.

        Args:
            event: The event that triggered the pan start
        """
        self.drag_start_x = event.x
        self.drag_start_y = event.y

    def on_pan_motion(self, event: Any) -> None:
        """
        Handle panning with middle mouse button.

        Args:
            event: The event that triggered the pan motion
        """
        self.canvas_view.pan_by(event.x - self.drag_start_x, event.y - self.drag_start_y)
        self.drag_start_x = event.x
        self.drag_start_y = event.y

    def _poll_images(self) -> None:
        """Hand finished image downloads to the canvas on the Tk thread."""
        try:
            self.image_loader.drain()
        finally:
            self.main_window.root.after(IMAGE_POLL_INTERVAL_MS, self._poll_images)

    def close(self) -> None:
        """Release background resources and close the window."""
        self.image_loader.close()
        self.main_window.root.destroy()
